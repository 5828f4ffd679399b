# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for the resource stores.
# Each request gets a store bound to its collection; tests override these
# functions through app.dependency_overrides.
# =============================================================================

from typing import Annotated

from fastapi import Depends

from app.exceptions import DatabaseUnavailableError
from core.services.book_store import BookStore
from core.services.resource_store import ResourceStore
from core.services.user_store import UserStore
from lib.mongo_client import MongoClient, MongoClientError


def _bind(store_class: type[ResourceStore]) -> ResourceStore:
    try:
        collection = MongoClient.get_collection(store_class.collection_name)
    except MongoClientError as e:
        raise DatabaseUnavailableError(e.describe()) from e
    return store_class(collection)


def get_book_store() -> BookStore:
    """Store bound to the books collection."""
    return _bind(BookStore)


def get_user_store() -> UserStore:
    """Store bound to the users collection."""
    return _bind(UserStore)


# Type aliases for dependency injection
BookStoreDep = Annotated[BookStore, Depends(get_book_store)]
UserStoreDep = Annotated[UserStore, Depends(get_user_store)]
