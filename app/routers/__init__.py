# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by resource:
# - health.py: Health check endpoints
# - books.py: Book CRUD endpoints
# - users.py: User CRUD endpoints
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import books
from . import users

__all__ = [
    "health",
    "books",
    "users",
]
