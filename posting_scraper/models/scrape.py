# =============================================================================
# Scrape Models
# =============================================================================
"""
Pydantic models for job posting scrape requests and responses.

The response payloads use camelCase keys (``contentLength``) because the
browser client consumes them directly.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# Enums
# =============================================================================


class ScrapeStrategy(str, Enum):
    """
    Extraction strategy for a scrape request.

    - basic: normalize the whole page to text
    - targeted: isolate the job description with site or generic selectors
    - auto: targeted first, basic when targeted yields too little
    """

    BASIC = "basic"
    TARGETED = "targeted"
    AUTO = "auto"


# =============================================================================
# Request Models
# =============================================================================


class ScrapeRequest(BaseModel):
    """
    Request payload for the scrape endpoints.

    The URL is optional at the schema level so that a missing URL is reported
    with the service's own error message instead of a schema error.

    Attributes:
        url: Absolute URL of the job posting.
        strategy: Extraction strategy, defaults to auto.
    """

    url: Optional[str] = Field(
        default=None,
        description="Absolute URL of the job posting to scrape"
    )
    strategy: ScrapeStrategy = Field(
        default=ScrapeStrategy.AUTO,
        description="Extraction strategy (basic, targeted or auto)"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://boards.greenhouse.io/acme/jobs/123456",
                    "strategy": "auto"
                }
            ]
        }
    }


# =============================================================================
# Response Models
# =============================================================================


class ScrapeResponse(BaseModel):
    """
    Successful scrape response.

    Attributes:
        success: Always True for this model.
        content: Cleaned and bounded job posting text.
        url: The URL that was scraped.
        content_length: Number of characters in content.
        method: Extraction path that produced the content.
        hostname: Hostname of the scraped URL.
        timestamp: When the extraction completed (UTC).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = Field(default=True, description="Whether the scrape succeeded")
    content: str = Field(description="Cleaned job posting text")
    url: str = Field(description="The URL that was scraped")
    content_length: int = Field(description="Number of characters in content")
    method: str = Field(description="Extraction method tag")
    hostname: str = Field(description="Hostname of the scraped URL")
    timestamp: datetime = Field(description="Extraction time (UTC)")


class ErrorResponse(BaseModel):
    """
    Error body shared by every failing endpoint.

    Attributes:
        error: Human readable error message.
        details: Optional extra detail (upstream status, exception text).
        method: Extraction method attempted, when extraction was reached.
    """

    error: str = Field(description="Error message")
    details: Optional[str] = Field(default=None, description="Additional error detail")
    method: Optional[str] = Field(default=None, description="Extraction method attempted")


class SupportedSite(BaseModel):
    """A site with a dedicated extraction configuration."""

    domain: str = Field(description="Hostname fragment the configuration matches")
    company: str = Field(description="Canonical employer name for the site")


class SupportedSitesResponse(BaseModel):
    """List of sites with dedicated extraction configurations."""

    sites: list[SupportedSite] = Field(description="Supported sites in match order")
    total: int = Field(description="Number of supported sites")
