# =============================================================================
# Job Posting Scraper
# =============================================================================
"""
Job posting content extraction service.

Fetches an employer job posting page, isolates the job description and
returns a cleaned, bounded text block for downstream field extraction.
"""

__version__ = "0.1.0"
