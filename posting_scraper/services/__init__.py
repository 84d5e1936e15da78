# =============================================================================
# Services Package
# =============================================================================
"""
Business logic services for the job posting scraper.
"""
