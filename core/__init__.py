# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic logic:
# - models/: Pydantic schemas and store outcomes
# - services/: Resource stores (CRUD against MongoDB collections)
#
# Code in this package should NOT import from FastAPI.
# This keeps the logic testable and reusable.
# =============================================================================
