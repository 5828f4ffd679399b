# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Provides in-memory collections and stores
# - Provides a TestClient whose store dependencies use those collections
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGODB_DATABASE", "bookshelf_test")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "false")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from app.dependencies import get_book_store, get_user_store
from app.main import app
from core.services.book_store import BookStore
from core.services.user_store import UserStore
from tests.fakes import InMemoryCollection


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def reset_index_state():
    """Each test starts as if the unique indexes were never created."""
    BookStore.indexes_ready = False
    UserStore.indexes_ready = False
    yield
    BookStore.indexes_ready = False
    UserStore.indexes_ready = False


@pytest.fixture
def books_collection():
    """Empty in-memory books collection."""
    return InMemoryCollection("books")


@pytest_asyncio.fixture
async def users_collection():
    """Empty in-memory users collection with the email index in place."""
    collection = InMemoryCollection("users")
    await UserStore(collection).ensure_indexes()
    return collection


@pytest.fixture
def book_store(books_collection):
    return BookStore(books_collection)


@pytest.fixture
def user_store(users_collection):
    return UserStore(users_collection)


@pytest.fixture
def client(book_store, user_store):
    """TestClient wired to the in-memory stores (lifespan not started)."""
    app.dependency_overrides[get_book_store] = lambda: book_store
    app.dependency_overrides[get_user_store] = lambda: user_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_book():
    """Valid book body."""
    return {"title": "1984", "author": "George Orwell", "year": 1949}


@pytest.fixture
def sample_user():
    """Valid user body."""
    return {
        "name": "John Doe",
        "email": "john@example.com",
        "age": 25,
        "role": "member",
        "isActive": True,
    }
