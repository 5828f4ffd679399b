# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .resource_store import ResourceStore
from .book_store import BookStore
from .user_store import UserStore

__all__ = [
    "ResourceStore",
    "BookStore",
    "UserStore",
]
