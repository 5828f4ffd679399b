# =============================================================================
# core/services/book_store.py - Book Store
# =============================================================================

from core.models.book import BookDocument
from core.services.resource_store import ResourceStore


class BookStore(ResourceStore):
    """CRUD over the "books" collection."""

    collection_name = "books"
    schema = BookDocument
