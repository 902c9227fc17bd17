"""Unit tests for the catalog HTTP fetcher."""

import asyncio

import httpx
import pytest

from artlink.catalog.fetcher import CatalogFetcher
from artlink.exceptions import NetworkError
from tests.fixtures.catalog_samples import (
    BASE_URL,
    DETAIL_WITH_CERTIFICATE,
    SINGLE_CARD_LISTING,
)


def _fetcher(handler, timeout: float = 5.0) -> CatalogFetcher:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CatalogFetcher(BASE_URL, timeout=timeout, client=client)


class TestNetworkError:
    """Tests for NetworkError exception."""

    def test_error_message(self):
        error = NetworkError("listing", "Connection refused")
        assert "listing" in str(error)
        assert "Connection refused" in str(error)
        assert error.resource == "listing"
        assert error.status_code is None

    def test_with_status_code(self):
        error = NetworkError("items/x", "Not found", status_code=404)
        assert error.status_code == 404


class TestUrls:
    """Tests for request URL construction."""

    def test_listing_url(self):
        fetcher = CatalogFetcher(BASE_URL + "/")
        assert fetcher.listing_url() == "https://shop.example.com/apps/verisart/"

    def test_detail_url(self):
        fetcher = CatalogFetcher(BASE_URL)
        assert (
            fetcher.detail_url("study-no-4-2019")
            == "https://shop.example.com/apps/verisart/items/study-no-4-2019"
        )

    def test_detail_url_quotes_id(self):
        fetcher = CatalogFetcher(BASE_URL)
        assert fetcher.detail_url("a/b c").endswith("/items/a%2Fb%20c")


class TestFetch:
    """Tests for fetch_listing and fetch_detail."""

    def test_fetch_listing(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text=SINGLE_CARD_LISTING)

        async def scenario():
            async with _fetcher(handler) as fetcher:
                return await fetcher.fetch_listing()

        markup = asyncio.run(scenario())

        assert "Study No. 4" in markup
        assert len(seen) == 1
        assert str(seen[0].url) == "https://shop.example.com/apps/verisart/"
        assert seen[0].headers["User-Agent"].startswith("ArtLink")
        assert "text/html" in seen[0].headers["Accept"]

    def test_fetch_detail(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/apps/verisart/items/study-no-4-2019"
            return httpx.Response(200, text=DETAIL_WITH_CERTIFICATE)

        async def scenario():
            return await _fetcher(handler).fetch_detail("study-no-4-2019")

        assert "verisart.com/works/abc123" in asyncio.run(scenario())

    def test_custom_headers_sent(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["X-Storefront"] == "demo"
            return httpx.Response(200, text="ok")

        async def scenario():
            client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
            fetcher = CatalogFetcher(BASE_URL, client=client, headers={"X-Storefront": "demo"})
            return await fetcher.fetch_listing()

        assert asyncio.run(scenario()) == "ok"

    def test_status_error_raises_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, text="missing")

        async def scenario():
            await _fetcher(handler).fetch_detail("missing-1999")

        with pytest.raises(NetworkError) as exc_info:
            asyncio.run(scenario())

        assert exc_info.value.status_code == 404
        assert exc_info.value.resource == "items/missing-1999"
        assert "404" in str(exc_info.value)

    def test_server_error_is_not_retried(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        async def scenario():
            await _fetcher(handler).fetch_listing()

        with pytest.raises(NetworkError):
            asyncio.run(scenario())

        assert len(calls) == 1

    def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Name or service not known", request=request)

        async def scenario():
            await _fetcher(handler).fetch_listing()

        with pytest.raises(NetworkError) as exc_info:
            asyncio.run(scenario())

        assert exc_info.value.status_code is None
        assert exc_info.value.resource == "listing"
        assert "Name or service not known" in str(exc_info.value)

    def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async def scenario():
            await _fetcher(handler, timeout=2.5).fetch_listing()

        with pytest.raises(NetworkError, match="Timeout after 2.5s"):
            asyncio.run(scenario())


class TestClientLifecycle:
    """Tests for client ownership."""

    def test_caller_client_left_open(self):
        async def scenario():
            client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
            fetcher = CatalogFetcher(BASE_URL, client=client)
            await fetcher.aclose()
            return client

        client = asyncio.run(scenario())
        assert not client.is_closed

    def test_owned_client_closed(self):
        async def scenario():
            fetcher = CatalogFetcher(BASE_URL)
            client = fetcher._get_client()
            await fetcher.aclose()
            return client

        client = asyncio.run(scenario())
        assert client.is_closed
