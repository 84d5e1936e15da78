# =============================================================================
# Job Scraper Service
# =============================================================================
"""
Orchestrates fetching and extracting job posting content.

Provides a unified interface to scrape a job URL into a cleaned, bounded text
block ready for downstream field extraction. The page is fetched once; every
strategy and fallback reuses the downloaded HTML.

Strategies:
    basic     whole-page normalization, method ``basic``
    targeted  site/generic selectors, method ``specialized-<domain>`` or
              ``targeted``; falls through to whole-page normalization
    auto      targeted first, then ``basic-fallback`` when targeted yields
              fewer than MIN_SUBSTANTIVE_LENGTH characters

Usage:
    from posting_scraper.services.scraper import JobScraperService

    async with JobScraperService() as scraper:
        result = await scraper.scrape("https://jobs.lever.co/acme/123")
        print(result.method, result.content_length)
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from urllib.parse import urlparse

from posting_scraper.models.scrape import ScrapeStrategy
from posting_scraper.services.scraper.enhancer import (
    bound_content,
    enhance_content,
    is_job_posting_content,
)
from posting_scraper.services.scraper.errors import (
    ContentTooShortError,
    ScraperError,
    UnsupportedURLError,
)
from posting_scraper.services.scraper.extractor import (
    MIN_SUBSTANTIVE_LENGTH,
    TargetedExtractor,
)
from posting_scraper.services.scraper.fetcher import PageFetcher
from posting_scraper.services.scraper.normalizer import html_to_text
from posting_scraper.services.scraper.registry import (
    DEFAULT_REGISTRY,
    SiteConfig,
    SiteRegistry,
)


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
MIN_CONTENT_LENGTH = 100  # shortest content handed to callers
MAX_CONTENT_LENGTH = 20000  # content is truncated to this many characters

METHOD_BASIC = "basic"
METHOD_TARGETED = "targeted"
METHOD_BASIC_FALLBACK = "basic-fallback"


# -----------------------------------------------------------------------------
# Extraction State
# -----------------------------------------------------------------------------
class ExtractionState(str, Enum):
    """Lifecycle of a single extraction request."""

    IDLE = "idle"
    FETCHING = "fetching"
    FETCHED = "fetched"
    FETCH_FAILED = "fetch_failed"
    EXTRACTING = "extracting"
    EXTRACTED = "extracted"
    EXTRACTION_FAILED = "extraction_failed"
    DONE = "done"


# -----------------------------------------------------------------------------
# Extraction Result
# -----------------------------------------------------------------------------
@dataclass
class ExtractionResult:
    """
    Outcome of a successful extraction.

    Attributes:
        content: Cleaned job posting text, between MIN_CONTENT_LENGTH and
            MAX_CONTENT_LENGTH characters.
        method: Extraction path that produced the content.
        hostname: Hostname of the job page.
        url: The URL that was scraped.
        site: Site configuration that supplied the winning selector, if any.
        timestamp: When the extraction completed (UTC).
    """

    content: str
    method: str
    hostname: str
    url: str = ""
    site: Optional[SiteConfig] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def content_length(self) -> int:
        return len(self.content)


# -----------------------------------------------------------------------------
# Job Scraper Service Class
# -----------------------------------------------------------------------------
class JobScraperService:
    """
    Service for extracting job posting text from URLs.

    Attributes:
        fetcher: Page fetcher used for the single outbound request.
        registry: Site registry consulted for targeted extraction.
        extractor: Selector-based extractor.

    Example:
        async with JobScraperService() as scraper:
            result = await scraper.scrape(url, ScrapeStrategy.TARGETED)
    """

    def __init__(
        self,
        fetcher: Optional[PageFetcher] = None,
        registry: SiteRegistry = DEFAULT_REGISTRY,
        extractor: Optional[TargetedExtractor] = None,
        max_content_length: int = MAX_CONTENT_LENGTH,
    ) -> None:
        """
        Initialize the job scraper service.

        Args:
            fetcher: Optional pre-configured page fetcher.
            registry: Site registry to use.
            extractor: Optional targeted extractor.
            max_content_length: Upper bound for returned content.
        """
        self._owned_fetcher = fetcher is None
        self.fetcher = fetcher or PageFetcher()
        self.registry = registry
        self.extractor = extractor or TargetedExtractor()
        self.max_content_length = max_content_length

    async def close(self) -> None:
        """
        Close the page fetcher if owned by this service.

        Should be called when the service is no longer needed.
        """
        if self._owned_fetcher:
            await self.fetcher.close()

    async def __aenter__(self) -> "JobScraperService":
        """Support async context manager protocol."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Clean up on context exit."""
        await self.close()

    # -------------------------------------------------------------------------
    # Public Methods
    # -------------------------------------------------------------------------
    async def scrape(
        self,
        url: Optional[str],
        strategy: ScrapeStrategy = ScrapeStrategy.AUTO,
        enhance: bool = True,
    ) -> ExtractionResult:
        """
        Fetch a job posting and extract its content.

        Args:
            url: Absolute http(s) URL of the job posting.
            strategy: Extraction strategy.
            enhance: Whether to run the enhancer on the extracted text.

        Returns:
            The extraction result.

        Raises:
            UnsupportedURLError: If the URL is missing or invalid.
            FetchError: If the page could not be fetched (including timeouts
                and non-2xx statuses).
            ContentTooShortError: If the page or the extracted text is too short.
            ScraperError: For any other failure.
        """
        validated_url, hostname = self._validate_url(url)
        logger.info(f"Scraping job from: {validated_url} with strategy: {strategy.value}")

        # ---------------------------------------------------------------------
        # Fetch HTML
        # ---------------------------------------------------------------------
        logger.debug(f"[{ExtractionState.FETCHING.value}] {validated_url}")
        try:
            html = await self.fetcher.fetch(validated_url)
        except ScraperError:
            logger.debug(f"[{ExtractionState.FETCH_FAILED.value}] {validated_url}")
            raise
        except Exception as e:
            logger.error(f"Unexpected fetch failure for {validated_url}: {e}", exc_info=True)
            raise ScraperError(details=str(e)) from e
        logger.debug(f"[{ExtractionState.FETCHED.value}] {len(html)} characters")

        # ---------------------------------------------------------------------
        # Extract Content
        # ---------------------------------------------------------------------
        try:
            result = self.extract_from_html(html, hostname, strategy, enhance=enhance)
        except ScraperError:
            raise
        except Exception as e:
            logger.error(f"Unexpected extraction failure for {validated_url}: {e}", exc_info=True)
            raise ScraperError(details=str(e)) from e

        result.url = validated_url
        logger.debug(f"[{ExtractionState.DONE.value}] {validated_url}")
        logger.info(
            f"Successfully extracted {result.content_length} characters using {result.method}"
        )
        return result

    def extract_from_html(
        self,
        html: str,
        hostname: str,
        strategy: ScrapeStrategy = ScrapeStrategy.AUTO,
        enhance: bool = True,
    ) -> ExtractionResult:
        """
        Run the extraction pipeline on already fetched HTML.

        Args:
            html: Page HTML.
            hostname: Hostname of the page.
            strategy: Extraction strategy.
            enhance: Whether to run the enhancer on the extracted text.

        Returns:
            The extraction result.

        Raises:
            ContentTooShortError: If no path produced enough text.
        """
        logger.debug(f"[{ExtractionState.EXTRACTING.value}] strategy={strategy.value}")
        site: Optional[SiteConfig] = None

        if strategy == ScrapeStrategy.BASIC:
            content, method = html_to_text(html), METHOD_BASIC

        elif strategy == ScrapeStrategy.TARGETED:
            content, method, site = self._targeted(html, hostname)
            if not content:
                content = html_to_text(html)

        else:
            content, method, site = self._targeted(html, hostname)
            if not content or len(content) < MIN_SUBSTANTIVE_LENGTH:
                logger.info(f"Targeted extraction too short for {hostname}, falling back to basic")
                content, method, site = html_to_text(html), METHOD_BASIC_FALLBACK, None

        self._ensure_length(content, method)

        if enhance:
            content = enhance_content(
                content,
                company=site.company if site else None,
                hostname=None if site else hostname,
            )
        content = bound_content(content, self.max_content_length)
        self._ensure_length(content, method)

        if not is_job_posting_content(content):
            logger.warning(f"Content from {hostname} does not look like a job posting")

        logger.debug(f"[{ExtractionState.EXTRACTED.value}] method={method}")
        return ExtractionResult(content=content, method=method, hostname=hostname, site=site)

    def get_supported_sites(self) -> list[SiteConfig]:
        """
        Get the sites with dedicated extraction configurations.

        Returns:
            Site configurations in match order.
        """
        return list(self.registry)

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------
    def _targeted(
        self,
        html: str,
        hostname: str,
    ) -> tuple[Optional[str], str, Optional[SiteConfig]]:
        """
        Run site lookup and selector extraction.

        Returns:
            Tuple of (text or None, method tag, site that supplied the selector).
        """
        site = self.registry.lookup(hostname)
        if site:
            logger.info(f"Using specialized configuration for {hostname}: {site.domain}")

        targeted = self.extractor.extract(html, site)
        if targeted is None:
            return None, METHOD_TARGETED, None

        if targeted.site is not None:
            return targeted.text, f"specialized-{targeted.site.domain}", targeted.site
        return targeted.text, METHOD_TARGETED, None

    def _ensure_length(self, content: Optional[str], method: str) -> None:
        if not content or len(content) < MIN_CONTENT_LENGTH:
            logger.warning(
                f"[{ExtractionState.EXTRACTION_FAILED.value}] "
                f"{len(content or '')} characters using {method}"
            )
            raise ContentTooShortError(
                "Could not extract meaningful content from webpage",
                method=method,
            )

    def _validate_url(self, url: Optional[str]) -> tuple[str, str]:
        """
        Validate the URL.

        Args:
            url: URL to validate.

        Returns:
            Tuple of (url, lower-cased hostname).

        Raises:
            UnsupportedURLError: If URL is missing, relative or not http(s).
        """
        if not url or not url.strip():
            raise UnsupportedURLError("URL is required")

        url = url.strip()
        try:
            parsed = urlparse(url)
            hostname = parsed.hostname
        except ValueError as e:
            raise UnsupportedURLError("Invalid URL provided", details=str(e)) from e

        if parsed.scheme not in {"http", "https"} or not hostname:
            raise UnsupportedURLError("Invalid URL provided", details=url)

        return url, hostname.lower()
