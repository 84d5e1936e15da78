# =============================================================================
# Health Check Routes
# =============================================================================
"""
Health endpoints for container orchestration.

``/health`` is a liveness answer. ``/health/detailed`` adds the scraper's
readiness inputs: the number of registered sites and the fetch deadline.
Outbound connectivity is never probed.
"""

from datetime import datetime, timezone
from typing import Literal, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from posting_scraper import __version__
from posting_scraper.config import get_settings
from posting_scraper.services.scraper.registry import DEFAULT_REGISTRY


router = APIRouter(prefix="/health", tags=["Health"])


class ScraperHealth(BaseModel):
    """Status of the scraper service."""

    status: Literal["healthy", "degraded"] = Field(
        description="degraded when no site configurations are loaded"
    )
    version: str = Field(description="Application version")
    environment: str = Field(description="Current environment")
    timestamp: datetime = Field(description="Time of the check (UTC)")
    supported_sites: Optional[int] = Field(
        default=None, description="Registered site configurations"
    )
    timeout_seconds: Optional[float] = Field(
        default=None, description="Fetch deadline in seconds"
    )


def _scraper_health(detailed: bool) -> ScraperHealth:
    settings = get_settings()
    site_count = len(DEFAULT_REGISTRY)

    health = ScraperHealth(
        status="healthy" if site_count else "degraded",
        version=__version__,
        environment=settings.app_env,
        timestamp=datetime.now(timezone.utc),
    )
    if detailed:
        health.supported_sites = site_count
        health.timeout_seconds = settings.scraper_timeout
    return health


@router.get("", response_model=ScraperHealth, response_model_exclude_none=True)
async def health_check() -> ScraperHealth:
    """Report that the service is up."""
    return _scraper_health(detailed=False)


@router.get("/detailed", response_model=ScraperHealth)
async def detailed_health_check() -> ScraperHealth:
    """Report service status with the site registry size and fetch deadline."""
    return _scraper_health(detailed=True)
