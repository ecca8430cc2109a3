"""Fetch stage: one GET against the normalized target URL.

The fetcher performs exactly one request per scrape with browser-like
headers, a bounded timeout and a bounded redirect chain. It never retries;
any failure is surfaced as a FetchError wrapping the underlying cause.
"""

import time
from typing import Protocol

import httpx
import logfire

from indiegrowth.constants import (
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_URL_SCHEME,
)
from indiegrowth.logging_config import mask_url
from indiegrowth.models.scraper_models import FetchedPage


class ScrapeError(Exception):
    """Raised when a scrape cannot produce a document."""

    def __init__(self, message: str, url: str | None = None, cause: Exception | None = None):
        super().__init__(message)
        self.url = url
        self.cause = cause


class FetchError(ScrapeError):
    """Raised when the fetch fails: network error, timeout, non-2xx, too many redirects."""


def normalize_target_url(url: str) -> str:
    """Return an absolute, protocol-prefixed URL for the caller's input.

    Args:
        url: A URL or a bare host such as ``example.com``

    Returns:
        The input with ``https://`` prefixed when no http(s) scheme is present

    Raises:
        ScrapeError: If the input is empty
    """
    if url is None or not url.strip():
        raise ScrapeError("Failed to scrape website: URL is required", url=url)

    target = url.strip()
    if not target.lower().startswith(("http://", "https://")):
        target = DEFAULT_URL_SCHEME + target
    return target


class PageFetcher(Protocol):
    """Protocol for fetching page content."""

    async def fetch(self, url: str) -> FetchedPage:
        """Fetch HTML content from an already normalized URL.

        Raises:
            FetchError: If the fetch fails
        """
        ...


class HttpxPageFetcher:
    """Fetch pages using httpx."""

    # Default headers to mimic a real browser
    DEFAULT_HEADERS = {
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
        ),
        "Accept": (
            "text/html,application/xhtml+xml,application/xml;q=0.9,"
            "image/avif,image/webp,image/apng,*/*;q=0.8"
        ),
        "Accept-Language": "en-US,en;q=0.9",
        "DNT": "1",
        "Upgrade-Insecure-Requests": "1",
        "Sec-Fetch-Dest": "document",
        "Sec-Fetch-Mode": "navigate",
        "Sec-Fetch-Site": "none",
        "Cache-Control": "max-age=0",
    }

    def __init__(
        self,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        max_redirects: int = DEFAULT_MAX_REDIRECTS,
        headers: dict[str, str] | None = None,
    ):
        """Initialize the page fetcher.

        Args:
            timeout: HTTP timeout in seconds
            max_redirects: Redirect hops followed before the fetch fails
            headers: Optional custom headers (defaults to browser-like headers)
        """
        self._timeout = timeout
        self._max_redirects = max_redirects
        self._headers = headers or self.DEFAULT_HEADERS.copy()

    async def fetch(self, url: str) -> FetchedPage:
        """Fetch a page once.

        Args:
            url: Absolute URL to fetch

        Returns:
            FetchedPage with body, final URL, headers and elapsed time

        Raises:
            FetchError: On network error, timeout, non-2xx status,
                redirect-limit exceeded or an unusable URL
        """
        start = time.perf_counter()
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                max_redirects=self._max_redirects,
                headers=self._headers,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logfire.warning(
                "Page fetch failed",
                url=mask_url(url),
                error_type=type(e).__name__,
                error=str(e),
            )
            raise FetchError(
                f"Failed to scrape website: {e}", url=url, cause=e
            ) from e
        elapsed_ms = int((time.perf_counter() - start) * 1000)

        page = FetchedPage(
            requested_url=url,
            final_url=str(response.url),
            html=response.text,
            status_code=response.status_code,
            page_size=len(response.content),
            elapsed_ms=elapsed_ms,
            headers=dict(response.headers),
        )
        logfire.info(
            "Page fetched (httpx)",
            url=mask_url(url),
            final_url=mask_url(page.final_url),
            status_code=page.status_code,
            page_size=page.page_size,
            elapsed_ms=elapsed_ms,
        )
        return page
