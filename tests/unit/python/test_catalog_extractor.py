"""Unit tests for listing and certificate extraction."""

import pytest
from bs4 import BeautifulSoup

from artlink.catalog.extractor import (
    clean_year,
    extract_certificate_url,
    extract_listing,
    extract_preview,
)
from artlink.catalog.models import ArtworkStatus
from artlink.exceptions import ExtractionError
from tests.fixtures.catalog_samples import (
    BASE_URL,
    CERTIFICATE_URL,
    COLLIDING_LISTING,
    DETAIL_WITH_CERTIFICATE,
    DETAIL_WITH_CERTIFICATE_IN_MAIN,
    DETAIL_WITHOUT_CERTIFICATE,
    EMPTY_LISTING,
    MALFORMED_LISTING,
    SINGLE_CARD_LISTING,
    THREE_CARD_LISTING,
    preview_card,
)


class TestExtractListing:
    """Tests for extract_listing function."""

    def test_single_card(self):
        records = extract_listing(SINGLE_CARD_LISTING)

        assert len(records) == 1
        record = records[0]
        assert record.id == "study-no-4-2019"
        assert record.title == "Study No. 4"
        assert record.artist == "A. Vega"
        assert record.year == "2019"
        assert record.image_url == "https://res.cloudinary.com/demo/study4.jpg"
        assert record.status == ArtworkStatus.UNVERIFIED

    def test_returns_one_record_per_card_in_document_order(self):
        records = extract_listing(THREE_CARD_LISTING)

        assert [r.id for r in records] == [
            "study-no-4-2019",
            "blue-hour-2021",
            "salt-lines-2017",
        ]
        assert all(r.id for r in records)
        assert all(r.status == ArtworkStatus.UNVERIFIED for r in records)

    def test_many_well_formed_cards(self):
        cards = "".join(preview_card(f"Plate {i}", "K. Ito", "2001") for i in range(25))
        records = extract_listing(f"<html><body>{cards}</body></html>")

        assert len(records) == 25
        assert records[0].id == "plate-0-2001"
        assert records[-1].id == "plate-24-2001"

    def test_empty_listing(self):
        assert extract_listing(EMPTY_LISTING) == []

    def test_empty_markup(self):
        assert extract_listing("") == []

    def test_ignores_articles_without_preview_marker(self):
        html = """
        <html><body>
          <article class="blog"><span class="ver-truncate">Not a card</span></article>
        </body></html>
        """
        assert extract_listing(html) == []

    def test_malformed_card_does_not_stop_extraction(self):
        records = extract_listing(MALFORMED_LISTING)

        assert len(records) == 3
        harbor, fragment, night = records

        assert harbor.year == "2020"
        assert fragment.title == "Untitled Fragment"
        assert fragment.year == ""
        assert fragment.image_url == ""
        assert fragment.id == "untitled-fragment"
        assert night.artist == ""
        assert night.image_url == "https://res.cloudinary.com/demo/night.jpg"

    def test_resolves_relative_image_urls(self):
        records = extract_listing(THREE_CARD_LISTING, base_url=BASE_URL)

        assert records[2].image_url == "https://shop.example.com/images/salt.jpg"
        assert records[0].image_url == "https://res.cloudinary.com/demo/study4.jpg"

    def test_id_collision_keeps_later_entry_at_first_position(self):
        records = extract_listing(COLLIDING_LISTING)

        assert [r.id for r in records] == ["study-no-4-2019", "blue-hour-2021"]
        assert records[0].artist == "B. Vega"
        assert records[0].image_url == "https://res.cloudinary.com/demo/second.jpg"


class TestExtractPreview:
    """Tests for extract_preview function."""

    def test_srcset_fallback(self):
        html = """
        <article data-test="previewCard">
          <div class="ver-text-lg"><span class="ver-truncate">Tide</span></div>
          <img srcset="https://cdn.example.com/tide-1x.jpg 1x, https://cdn.example.com/tide-2x.jpg 2x">
        </article>
        """
        card = BeautifulSoup(html, "lxml").select_one("article")

        artwork = extract_preview(card)

        assert artwork.image_url == "https://cdn.example.com/tide-1x.jpg"

    def test_all_fields_missing(self):
        card = BeautifulSoup('<article data-test="previewCard"></article>', "lxml").select_one(
            "article"
        )

        artwork = extract_preview(card)

        assert artwork.title == ""
        assert artwork.artist == ""
        assert artwork.year == ""
        assert artwork.image_url == ""
        assert artwork.id == ""

    def test_inline_markup_keeps_spaces(self):
        html = """
        <article data-test="previewCard">
          <div class="ver-text-lg">
            <span class="ver-truncate">Study <em>No.</em> 4</span>
            <span class="ver-inline">2019,</span>
          </div>
          <div class="ver-text-base ver-font-bold"><b>A.</b>
            Vega</div>
        </article>
        """
        card = BeautifulSoup(html, "lxml").select_one("article")

        artwork = extract_preview(card)

        assert artwork.title == "Study No. 4"
        assert artwork.artist == "A. Vega"
        assert artwork.id == "study-no-4-2019"

    def test_bad_image_url_keeps_other_fields(self):
        html = preview_card("Study No. 4", "A. Vega", "2019", image="http://[bad")
        card = BeautifulSoup(html, "lxml").select_one("article")

        artwork = extract_preview(card, BASE_URL)

        assert artwork.image_url == ""
        assert artwork.artist == "A. Vega"
        assert artwork.year == "2019"
        assert artwork.id == "study-no-4-2019"


class TestCleanYear:
    """Tests for clean_year function."""

    def test_strips_trailing_comma(self):
        assert clean_year("2019,") == "2019"

    def test_strips_whitespace(self):
        assert clean_year("  2019 ,  ") == "2019"

    def test_keeps_internal_text(self):
        assert clean_year("c. 1920s") == "c. 1920s"

    def test_empty(self):
        assert clean_year("") == ""


class TestExtractCertificateUrl:
    """Tests for extract_certificate_url function."""

    def test_prefers_certificate_container(self):
        assert extract_certificate_url(DETAIL_WITH_CERTIFICATE) == CERTIFICATE_URL

    def test_falls_back_to_main(self):
        url = extract_certificate_url(DETAIL_WITH_CERTIFICATE_IN_MAIN)
        assert url == "https://www.verisart.com/works/xyz789"

    def test_missing_anchor_raises(self):
        with pytest.raises(ExtractionError, match="certificate link not found"):
            extract_certificate_url(DETAIL_WITHOUT_CERTIFICATE)

    def test_empty_markup_raises(self):
        with pytest.raises(ExtractionError):
            extract_certificate_url("")

    def test_custom_prefixes(self):
        html = '<main><a href="https://certs.example.org/w/1">cert</a></main>'
        url = extract_certificate_url(html, prefixes=("https://certs.example.org/w/",))
        assert url == "https://certs.example.org/w/1"

    def test_strips_href_whitespace(self):
        html = f'<div data-test="certificate"><a href="  {CERTIFICATE_URL} ">x</a></div>'
        assert extract_certificate_url(html) == CERTIFICATE_URL

    def test_container_without_anchor_does_not_search_page(self):
        html = """
        <html><body>
          <main>
            <div data-test="certificate">
              <a href="https://verisart.com/help">How certificates work</a>
            </div>
          </main>
          <aside><a href="https://verisart.com/works/OTHER-ARTWORK">Related work</a></aside>
        </body></html>
        """
        with pytest.raises(ExtractionError, match="certificate link not found"):
            extract_certificate_url(html)

    def test_main_without_anchor_does_not_search_body(self):
        html = """
        <html><body>
          <main><p>No certificate yet.</p></main>
          <footer><a href="https://verisart.com/works/featured">Featured</a></footer>
        </body></html>
        """
        with pytest.raises(ExtractionError):
            extract_certificate_url(html)
