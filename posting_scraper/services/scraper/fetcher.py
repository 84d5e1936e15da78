# =============================================================================
# Page Fetcher
# =============================================================================
"""
Fetch job posting pages over HTTP.

Issues a single GET per page with a browser-like header set and a user agent
picked from a fixed rotation pool, under a total deadline. Transport failures
are classified into the scraper error taxonomy:

- deadline exceeded -> FetchTimeoutError
- non-2xx status -> UpstreamStatusError
- DNS, refused connection, protocol errors -> FetchError
- body shorter than MIN_PAGE_LENGTH -> PageTooShortError

There is no retry and no rate limiting.
"""

import asyncio
import logging
import random
from typing import Optional, Sequence

import httpx

from posting_scraper.services.scraper.errors import (
    FetchError,
    FetchTimeoutError,
    PageTooShortError,
    UpstreamStatusError,
)


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
DEFAULT_TIMEOUT = 20.0  # seconds
MIN_PAGE_LENGTH = 100  # characters

USER_AGENTS: tuple[str, ...] = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:89.0) Gecko/20100101 Firefox/89.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:89.0) Gecko/20100101 Firefox/89.0",
)

BROWSER_HEADERS: dict[str, str] = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
    "DNT": "1",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Cache-Control": "max-age=0",
}


def pick_agent(pool: Sequence[str], rng: Optional[random.Random] = None) -> str:
    """
    Pick a user agent from the rotation pool.

    Args:
        pool: Non-empty sequence of user agent strings.
        rng: Random source; the module-level generator when omitted.

    Returns:
        One user agent from the pool.
    """
    if not pool:
        raise ValueError("User agent pool is empty")
    return (rng or random).choice(pool)


def build_headers(user_agent: str) -> dict[str, str]:
    """Return the browser-like request headers for a user agent."""
    return {"User-Agent": user_agent, **BROWSER_HEADERS}


# -----------------------------------------------------------------------------
# Page Fetcher Class
# -----------------------------------------------------------------------------
class PageFetcher:
    """
    Async fetcher for job posting pages.

    Attributes:
        http_client: Async HTTP client for fetching pages.
        timeout: Total deadline per fetch in seconds.
        user_agents: User agent rotation pool.

    Example:
        async with PageFetcher() as fetcher:
            html = await fetcher.fetch("https://jobs.lever.co/acme/123")
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agents: Sequence[str] = USER_AGENTS,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize the page fetcher.

        Args:
            http_client: Optional pre-configured httpx client.
            timeout: Total deadline per fetch in seconds.
            user_agents: User agent rotation pool.
            rng: Random source for user agent selection.
        """
        self._owned_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
        )
        self.timeout = timeout
        self.user_agents = tuple(user_agents)
        self._rng = rng

    async def close(self) -> None:
        """Close the HTTP client if owned by this fetcher."""
        if self._owned_client and self.http_client:
            await self.http_client.aclose()
            logger.debug("HTTP client closed")

    async def __aenter__(self) -> "PageFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def fetch(self, url: str) -> str:
        """
        Fetch a page and return its body.

        Args:
            url: Absolute URL to fetch.

        Returns:
            Response body as text.

        Raises:
            FetchTimeoutError: If the deadline expires.
            UpstreamStatusError: If the response status is not 2xx.
            FetchError: If the request fails at the transport level.
            PageTooShortError: If the body is shorter than MIN_PAGE_LENGTH.
        """
        user_agent = pick_agent(self.user_agents, self._rng)

        try:
            response = await asyncio.wait_for(
                self.http_client.get(url, headers=build_headers(user_agent)),
                timeout=self.timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.warning(f"Timed out after {self.timeout}s fetching {url}")
            raise FetchTimeoutError(
                "Request timeout - webpage took too long to load",
                details=str(e) or None,
            ) from e
        except httpx.RequestError as e:
            logger.warning(f"Request failed for {url}: {e}")
            raise FetchError(
                "Could not connect to the website. Please check the URL.",
                details=str(e) or type(e).__name__,
            ) from e

        if not response.is_success:
            logger.warning(
                f"Fetch of {url} returned HTTP {response.status_code} {response.reason_phrase}"
            )
            raise UpstreamStatusError(response.status_code, response.reason_phrase)

        html = response.text
        if len(html) < MIN_PAGE_LENGTH:
            raise PageTooShortError(
                "Webpage content appears to be empty or too short",
                details=f"Received {len(html)} characters",
            )

        logger.debug(f"Fetched {len(html)} characters from {url}")
        return html
