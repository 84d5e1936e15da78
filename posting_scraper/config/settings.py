# =============================================================================
# Application Settings
# =============================================================================
"""
Pydantic Settings configuration for the job posting scraper.

Loads configuration from environment variables with validation and type safety.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


MIN_SCRAPER_TIMEOUT = 15.0  # seconds
MAX_SCRAPER_TIMEOUT = 20.0  # seconds


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    The .env file is automatically loaded if present.

    Attributes:
        app_name: Name of the application.
        app_env: Current environment (development, staging, production).
        debug: Enable debug mode (API docs, error details on 500 responses).
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        api_host: Host address for the API server.
        api_port: Port number for the API server.
        cors_allow_origins: Comma-separated list of allowed CORS origins.
        scraper_timeout: Total deadline in seconds for fetching a job page.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="job-posting-scraper",
        description="Name of the application"
    )
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )

    # -------------------------------------------------------------------------
    # API Settings
    # -------------------------------------------------------------------------
    api_host: str = Field(
        default="0.0.0.0",
        description="Host address for the API server"
    )
    api_port: int = Field(
        default=8000,
        description="Port number for the API server"
    )
    cors_allow_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins"
    )

    # -------------------------------------------------------------------------
    # Scraper Settings
    # -------------------------------------------------------------------------
    scraper_timeout: float = Field(
        default=20.0,
        description="Total deadline in seconds for fetching a job page (15 to 20)"
    )

    # -------------------------------------------------------------------------
    # Model Configuration
    # -------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def cors_allow_origins_list(self) -> list[str]:
        """
        Parse allowed CORS origins string into a list.

        Returns:
            List of allowed origin strings.
        """
        return [
            origin.strip()
            for origin in self.cors_allow_origins.split(",")
            if origin.strip()
        ]

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("scraper_timeout")
    @classmethod
    def validate_scraper_timeout(cls, v: float) -> float:
        """
        Validate that the fetch timeout lies within the accepted deadline range.

        Args:
            v: The timeout value.

        Returns:
            The validated timeout.

        Raises:
            ValueError: If the timeout is outside 15 to 20 seconds.
        """
        if not MIN_SCRAPER_TIMEOUT <= v <= MAX_SCRAPER_TIMEOUT:
            raise ValueError(
                f"scraper_timeout must be between {MIN_SCRAPER_TIMEOUT} and "
                f"{MAX_SCRAPER_TIMEOUT} seconds"
            )
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings instance.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings instance with loaded configuration.
    """
    return Settings()
