# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App entry point, middleware setup, error handlers
# - config.py: Environment variable loading and settings
# - controller.py: Maps store outcomes to HTTP responses
# - routers/: API endpoint definitions organized by resource
#
# The app layer is thin - it handles HTTP concerns and delegates
# storage to the core/ package.
# =============================================================================
