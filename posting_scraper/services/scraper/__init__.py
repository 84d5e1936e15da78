# =============================================================================
# Job Scraper Service Package
# =============================================================================
"""
Job posting content extraction pipeline.

Fetches a job posting URL and reduces the page to the job-relevant text:
- HTML-to-text normalization
- Site registry with per-site selectors (Apple, Google, Amazon, Microsoft,
  Netflix, Meta, Lever, Greenhouse, LinkedIn, Indeed, Glassdoor, Wellfound,
  Workday, BambooHR)
- Selector-based targeted extraction with generic fallbacks
- Content cleanup and section heading canonicalization

Usage:
    from posting_scraper.services.scraper import JobScraperService

    async with JobScraperService() as scraper:
        result = await scraper.scrape("https://boards.greenhouse.io/acme/jobs/1")
"""

from posting_scraper.services.scraper.errors import (
    ContentTooShortError,
    FetchError,
    FetchTimeoutError,
    PageTooShortError,
    ScraperError,
    UnsupportedURLError,
    UpstreamStatusError,
)
from posting_scraper.services.scraper.service import ExtractionResult, JobScraperService

__all__ = [
    "ContentTooShortError",
    "ExtractionResult",
    "FetchError",
    "FetchTimeoutError",
    "JobScraperService",
    "PageTooShortError",
    "ScraperError",
    "UnsupportedURLError",
    "UpstreamStatusError",
]
