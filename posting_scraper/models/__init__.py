# =============================================================================
# Models Package
# =============================================================================
"""
Pydantic models and API schemas for the job posting scraper.

Usage:
    from posting_scraper.models import ScrapeRequest, ScrapeResponse, ScrapeStrategy
"""

from posting_scraper.models.scrape import (
    ErrorResponse,
    ScrapeRequest,
    ScrapeResponse,
    ScrapeStrategy,
    SupportedSite,
    SupportedSitesResponse,
)

__all__ = [
    "ErrorResponse",
    "ScrapeRequest",
    "ScrapeResponse",
    "ScrapeStrategy",
    "SupportedSite",
    "SupportedSitesResponse",
]
