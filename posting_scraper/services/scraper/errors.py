# =============================================================================
# Scraper Exceptions
# =============================================================================
"""
Caller-visible error taxonomy for the scraping pipeline.

Only the orchestrator raises these to its callers. Failures inside the
normalizer, registry lookup and targeted extractor are handled locally and
never surface as exceptions.

Each error knows the HTTP status the API should answer with, so the API layer
renders every failure through a single exception handler.
"""

from typing import Optional


class ScraperError(Exception):
    """
    Base exception for scraper errors.

    Raised directly for unclassified failures (HTTP 500).

    Attributes:
        message: Human readable error message.
        details: Optional extra detail for the caller.
        method: Extraction method attempted, if extraction was reached.
    """

    http_status: int = 500

    def __init__(
        self,
        message: str = "Failed to scrape webpage",
        details: Optional[str] = None,
        method: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        self.method = method


class UnsupportedURLError(ScraperError):
    """URL is missing, not absolute, or not http(s)."""

    http_status = 400


class FetchError(ScraperError):
    """Error fetching URL content (DNS, refused connection, protocol error)."""

    http_status = 400


class UpstreamStatusError(FetchError):
    """The job page answered with a non-2xx status."""

    def __init__(
        self,
        upstream_status: int,
        reason: str = "",
        details: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"Failed to fetch webpage: {upstream_status} {reason}".strip(),
            details=details or f"HTTP {upstream_status}: {reason}".strip(),
        )
        self.upstream_status = upstream_status
        self.reason = reason


class FetchTimeoutError(FetchError):
    """The job page did not answer within the fetch deadline."""

    http_status = 408


class ContentTooShortError(ScraperError):
    """Extracted text fell below the minimum acceptable length."""

    http_status = 400


class PageTooShortError(ContentTooShortError):
    """The fetched page body itself was empty or too short."""
