# =============================================================================
# API Routes Package
# =============================================================================
"""
Route modules registered by the application factory.
"""
