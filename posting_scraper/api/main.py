# =============================================================================
# FastAPI Application Entry Point
# =============================================================================
"""
Main FastAPI application for the job posting scraper.

This module creates and configures the FastAPI application instance,
including middleware, routes, and exception handlers.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException

from posting_scraper import __version__
from posting_scraper.api.routes import health, scrape
from posting_scraper.config import get_settings
from posting_scraper.models.scrape import ErrorResponse
from posting_scraper.services.scraper import ScraperError


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Lifespan Management
# -----------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifespan events.

    The scraper keeps no long-lived resources (each request owns its HTTP
    client), so start-up and shutdown only log.

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"Fetch timeout: {settings.scraper_timeout}s")

    yield

    logger.info("Shutting down application...")


# -----------------------------------------------------------------------------
# Middleware
# -----------------------------------------------------------------------------
class EmptyPreflightCORSMiddleware(CORSMiddleware):
    """CORS middleware whose accepted preflights answer 200 with no body."""

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        if response.status_code != status.HTTP_200_OK:
            return response

        headers = {
            key: value
            for key, value in response.headers.items()
            if key not in ("content-length", "content-type")
        }
        return Response(status_code=status.HTTP_200_OK, headers=headers)


def _error_json(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )


# -----------------------------------------------------------------------------
# Application Factory
# -----------------------------------------------------------------------------
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Job Posting Scraper API",
        description=(
            "Fetches job posting pages and extracts the job description as "
            "clean, bounded text for downstream field extraction."
        ),
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan
    )

    # -------------------------------------------------------------------------
    # Middleware Configuration
    # -------------------------------------------------------------------------

    # CORS middleware - the browser client runs on arbitrary origins
    app.add_middleware(
        EmptyPreflightCORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------

    @app.exception_handler(ScraperError)
    async def scraper_exception_handler(
        request: Request,
        exc: ScraperError
    ) -> JSONResponse:
        """
        Render scraper errors with their HTTP status.

        Args:
            request: The incoming request.
            exc: The scraper error.

        Returns:
            JSON response with error, details and method.
        """
        if exc.http_status >= 500:
            logger.error(f"Scrape failed: {exc.message} ({exc.details})")
        else:
            logger.warning(f"Scrape rejected: {exc.message} ({exc.details})")

        return _error_json(
            exc.http_status,
            ErrorResponse(error=exc.message, details=exc.details, method=exc.method),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError
    ) -> JSONResponse:
        """Render malformed request bodies as 400."""
        return _error_json(
            status.HTTP_400_BAD_REQUEST,
            ErrorResponse(error="Invalid request body", details=str(exc.errors())),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException
    ) -> JSONResponse:
        """Render framework HTTP errors (404, 405) with an error key."""
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            message = "Method not allowed"
        else:
            message = str(exc.detail)
        response = _error_json(exc.status_code, ErrorResponse(error=message))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        """
        Global exception handler for unhandled exceptions.

        Args:
            request: The incoming request.
            exc: The unhandled exception.

        Returns:
            JSON response with error details.
        """
        logger.error(f"Unhandled exception: {exc}", exc_info=True)

        return _error_json(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(
                error="Failed to scrape webpage",
                details=str(exc) if settings.debug else None,
            ),
        )

    # -------------------------------------------------------------------------
    # Route Registration
    # -------------------------------------------------------------------------

    # Health check routes
    app.include_router(health.router)

    # Scraper routes
    app.include_router(scrape.router, prefix="/api")

    # -------------------------------------------------------------------------
    # Root Endpoint
    # -------------------------------------------------------------------------

    @app.get("/", tags=["Root"])
    async def root() -> dict:
        """
        Root endpoint providing API information.

        Returns:
            Dictionary with API information and links.
        """
        return {
            "name": "Job Posting Scraper API",
            "version": __version__,
            "status": "running",
            "docs": "/docs" if settings.debug else "disabled",
            "health": "/health"
        }

    return app


# -----------------------------------------------------------------------------
# Application Instance
# -----------------------------------------------------------------------------
app = create_app()


# -----------------------------------------------------------------------------
# Development Server Entry Point
# -----------------------------------------------------------------------------
if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "posting_scraper.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
