"""
Listing and certificate extraction from upstream HTML.

Listing mode is tolerant: a malformed preview card still yields a record
with the fields that could be read. Detail mode is strict: without a
certificate anchor the pairing workflow cannot proceed.
"""

import logging
import time
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from artlink.catalog.models import Artwork, is_certificate_url
from artlink.constants import (
    ARTIST_SELECTOR,
    CERTIFICATE_CONTAINER_SELECTORS,
    CERTIFICATE_URL_PREFIXES,
    IMAGE_SELECTOR,
    PREVIEW_CARD_SELECTOR,
    TITLE_SELECTOR,
    YEAR_SELECTOR,
    YEAR_TRAILING_SEPARATORS,
)
from artlink.exceptions import ExtractionError
from artlink.logging_utils import log_summary

logger = logging.getLogger(__name__)


def _select_text(node: Tag, selector: str) -> str:
    """Text of the first match for selector, or "" when absent."""
    match = node.select_one(selector)
    if match is None:
        return ""
    # Inline markup splits text nodes; keep the spaces between them
    return " ".join(match.get_text().split())


def clean_year(raw: str) -> str:
    """Strip trailing separator characters and whitespace from a year field."""
    return raw.rstrip(YEAR_TRAILING_SEPARATORS).strip()


def extract_image_url(node: Tag, base_url: str | None = None) -> str:
    """
    Read the preview image URL from a card.

    Priority: src > data-src > first srcset candidate

    Args:
        node: Preview card element
        base_url: Optional base for resolving relative URLs

    Returns:
        Image URL or "" if the card has no usable image
    """
    img = node.select_one(IMAGE_SELECTOR)
    if img is None:
        return ""

    src = img.get("src") or img.get("data-src") or ""
    if not src and img.get("srcset"):
        src = img["srcset"].split(",")[0].strip().split(" ")[0]

    src = src.strip()
    if src and base_url:
        return urljoin(base_url.rstrip("/") + "/", src)
    return src


def extract_preview(node: Tag, base_url: str | None = None) -> Artwork:
    """Build one Artwork from a preview card; absent or unreadable fields become ""."""
    try:
        image_url = extract_image_url(node, base_url)
    except ValueError as e:
        logger.warning(f"Unreadable preview image URL: {e}")
        image_url = ""

    return Artwork.create(
        title=_select_text(node, TITLE_SELECTOR),
        artist=_select_text(node, ARTIST_SELECTOR),
        year=clean_year(_select_text(node, YEAR_SELECTOR)),
        image_url=image_url,
    )


def extract_listing(markup: str, base_url: str | None = None) -> list[Artwork]:
    """
    Parse listing markup into artwork records.

    Records keep document order. When two cards normalize to the same id the
    later card replaces the earlier one in the earlier one's position.

    Args:
        markup: Listing page HTML
        base_url: Optional base for resolving relative image URLs

    Returns:
        Ordered list of unverified Artwork records
    """
    start = time.perf_counter()
    soup = BeautifulSoup(markup or "", "lxml")
    cards = soup.select(PREVIEW_CARD_SELECTOR)

    by_id: dict[str, Artwork] = {}
    for card in cards:
        artwork = extract_preview(card, base_url)
        if artwork.id in by_id:
            logger.info(f"Duplicate artwork id {artwork.id!r}; keeping the later entry")
        by_id[artwork.id] = artwork

    records = list(by_id.values())
    logger.info(
        log_summary(
            "extract_listing",
            duration_ms=(time.perf_counter() - start) * 1000,
            item_count=len(records),
            cards=len(cards),
        )
    )
    return records


def find_certificate_container(soup: BeautifulSoup) -> Tag | BeautifulSoup:
    """
    Locate the region of a detail page that holds the certificate link.

    Priority: [data-test=certificate] > .verisart-certificate > main > article > body.
    Only the first container present is searched; the whole document is used
    only when none of them exists.

    Args:
        soup: Parsed detail page

    Returns:
        Container element, or the document itself
    """
    for selector in CERTIFICATE_CONTAINER_SELECTORS:
        container = soup.select_one(selector)
        if container is not None:
            return container
    return soup


def extract_certificate_url(
    markup: str, prefixes: tuple[str, ...] = CERTIFICATE_URL_PREFIXES
) -> str:
    """
    Extract the certificate URL from a detail page.

    Args:
        markup: Detail page HTML
        prefixes: Accepted certificate-domain prefixes

    Returns:
        First anchor href in the certificate container that starts with a
        known prefix

    Raises:
        ExtractionError: If no such anchor exists
    """
    soup = BeautifulSoup(markup or "", "lxml")

    container = find_certificate_container(soup)
    for anchor in container.find_all("a", href=True):
        href = anchor["href"].strip()
        if is_certificate_url(href, prefixes):
            return href

    raise ExtractionError("certificate link not found")
