# =============================================================================
# Config Package
# =============================================================================
"""
Application configuration and settings.
"""

from posting_scraper.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
