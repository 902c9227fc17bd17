"""
HTTP fetching of catalog listing and detail pages.

Each call issues exactly one request; callers own any retry policy.
"""

import logging
import time
from urllib.parse import quote

import httpx

from artlink.constants import (
    ACCEPT_HTML,
    DEFAULT_FETCH_TIMEOUT,
    DETAIL_PATH_TEMPLATE,
    USER_AGENT,
)
from artlink.exceptions import NetworkError
from artlink.logging_utils import log_summary

logger = logging.getLogger(__name__)


class CatalogFetcher:
    """Async HTTP fetcher for the upstream certification service."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        client: httpx.AsyncClient | None = None,
        headers: dict[str, str] | None = None,
    ):
        """
        Initialize catalog fetcher.

        Args:
            base_url: Base path for listing and detail requests
            timeout: Request timeout in seconds
            client: Optional preconfigured client (left open on aclose)
            headers: Optional custom headers
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = headers or {}
        self._client = client
        self._owns_client = client is None

    def listing_url(self) -> str:
        return f"{self.base_url}/"

    def detail_url(self, artwork_id: str) -> str:
        suffix = DETAIL_PATH_TEMPLATE.format(artwork_id=quote(artwork_id, safe=""))
        return f"{self.base_url}/{suffix}"

    async def fetch_listing(self) -> str:
        """
        Fetch the catalog listing page.

        Returns:
            Listing HTML

        Raises:
            NetworkError: On non-success status or transport failure
        """
        return await self._get(self.listing_url(), resource="listing")

    async def fetch_detail(self, artwork_id: str) -> str:
        """
        Fetch one artwork's detail page.

        Args:
            artwork_id: Catalog id of the artwork

        Returns:
            Detail HTML

        Raises:
            NetworkError: On non-success status or transport failure
        """
        return await self._get(self.detail_url(artwork_id), resource=f"items/{artwork_id}")

    async def _get(self, url: str, resource: str) -> str:
        client = self._get_client()
        request_headers = {
            "User-Agent": USER_AGENT,
            "Accept": ACCEPT_HTML,
            **self.headers,
        }

        start = time.perf_counter()
        try:
            response = await client.get(url, headers=request_headers, timeout=self.timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(
                log_summary("fetch", success=False, error=f"HTTP {status}", resource=resource)
            )
            raise NetworkError(
                resource, f"HTTP {status}: {e.response.reason_phrase}", status_code=status
            ) from e
        except httpx.TimeoutException as e:
            logger.warning(log_summary("fetch", success=False, error="timeout", resource=resource))
            raise NetworkError(resource, f"Timeout after {self.timeout}s") from e
        except httpx.RequestError as e:
            logger.warning(log_summary("fetch", success=False, error=str(e), resource=resource))
            raise NetworkError(resource, f"Request error: {e}") from e

        logger.info(
            log_summary(
                "fetch",
                duration_ms=(time.perf_counter() - start) * 1000,
                resource=resource,
                status_code=response.status_code,
            )
        )
        return response.text

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(follow_redirects=True, timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        """Close the underlying client if this fetcher created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "CatalogFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
