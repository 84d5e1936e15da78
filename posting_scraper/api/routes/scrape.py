# =============================================================================
# Scrape API Routes
# =============================================================================
"""
API routes for job posting content extraction.

Provides endpoints for:
- Multi-strategy extraction (basic / targeted / auto)
- Single-strategy whole-page extraction
- Listing the sites with dedicated extraction rules

Errors raised by the scraper service are rendered by the application's
exception handlers as ``{"error": ..., "details"?: ..., "method"?: ...}``.

Usage:
    from posting_scraper.api.routes import scrape
    app.include_router(scrape.router, prefix="/api")
"""

import logging
from typing import AsyncIterator

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from posting_scraper.config import get_settings
from posting_scraper.models.scrape import (
    ErrorResponse,
    ScrapeRequest,
    ScrapeResponse,
    ScrapeStrategy,
    SupportedSite,
    SupportedSitesResponse,
)
from posting_scraper.services.scraper import (
    ExtractionResult,
    JobScraperService,
    UpstreamStatusError,
)
from posting_scraper.services.scraper.fetcher import PageFetcher
from posting_scraper.services.scraper.registry import DEFAULT_REGISTRY, SiteRegistry


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Router Configuration
# -----------------------------------------------------------------------------
router = APIRouter(tags=["Scraper"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid URL or content too short"},
    408: {"model": ErrorResponse, "description": "Job page fetch timed out"},
    500: {"model": ErrorResponse, "description": "Unclassified failure"},
}


# -----------------------------------------------------------------------------
# Service Dependencies
# -----------------------------------------------------------------------------
async def get_scraper_service() -> AsyncIterator[JobScraperService]:
    """Provide a scraper service with its own HTTP client for one request."""
    settings = get_settings()
    async with PageFetcher(timeout=settings.scraper_timeout) as fetcher:
        yield JobScraperService(fetcher=fetcher)


def get_site_registry() -> SiteRegistry:
    """Provide the site registry; listing sites needs no HTTP client."""
    return DEFAULT_REGISTRY


def _to_response(result: ExtractionResult) -> ScrapeResponse:
    return ScrapeResponse(
        content=result.content,
        url=result.url,
        content_length=result.content_length,
        method=result.method,
        hostname=result.hostname,
        timestamp=result.timestamp,
    )


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------
@router.post(
    "/scrape-advanced",
    response_model=ScrapeResponse,
    summary="Extract job posting content",
    description="Fetch a job posting and extract its description with the chosen strategy.",
    responses=_ERROR_RESPONSES,
)
async def scrape_advanced(
    request: ScrapeRequest,
    scraper: JobScraperService = Depends(get_scraper_service),
) -> ScrapeResponse:
    """
    Extract job posting content from a URL.

    Strategies:
    - basic: whole-page text
    - targeted: site-specific then generic selectors
    - auto (default): targeted, falling back to basic when too short

    Args:
        request: URL and strategy.
        scraper: JobScraperService from dependency injection.

    Returns:
        The extracted content with method and hostname.
    """
    result = await scraper.scrape(request.url, request.strategy)
    return _to_response(result)


@router.post(
    "/scrape-job",
    response_model=ScrapeResponse,
    summary="Extract whole-page text",
    description="Fetch a job posting and return the text of the whole page.",
    responses=_ERROR_RESPONSES,
)
async def scrape_job(
    request: ScrapeRequest,
    scraper: JobScraperService = Depends(get_scraper_service),
):
    """
    Extract the plain text of a whole job posting page.

    The request strategy is ignored. A non-2xx answer from the job page is
    mirrored as the response status.

    Args:
        request: URL to scrape.
        scraper: JobScraperService from dependency injection.

    Returns:
        The extracted content, or an error body with the upstream status.
    """
    try:
        result = await scraper.scrape(request.url, ScrapeStrategy.BASIC, enhance=False)
    except UpstreamStatusError as e:
        upstream = e.upstream_status if e.upstream_status >= 400 else e.http_status
        return JSONResponse(
            status_code=upstream,
            content=ErrorResponse(error=e.message, details=e.details).model_dump(
                exclude_none=True
            ),
        )
    return _to_response(result)


@router.options("/scrape-advanced", include_in_schema=False)
@router.options("/scrape-job", include_in_schema=False)
async def scrape_preflight() -> Response:
    """Answer CORS preflight requests with an empty 200."""
    return Response(status_code=status.HTTP_200_OK)


@router.get(
    "/supported-sites",
    response_model=SupportedSitesResponse,
    summary="List supported sites",
    description="List the job sites with dedicated extraction rules, in match order.",
)
async def supported_sites(
    registry: SiteRegistry = Depends(get_site_registry),
) -> SupportedSitesResponse:
    """
    List sites with dedicated extraction configurations.

    Returns:
        Supported sites and their count.
    """
    sites = [
        SupportedSite(domain=site.domain, company=site.company)
        for site in registry
    ]
    return SupportedSitesResponse(sites=sites, total=len(sites))
