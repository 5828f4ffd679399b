# =============================================================================
# tests/test_resource_store.py - Store Adapter Tests
# =============================================================================
# This module contains tests for:
# - CRUD outcomes of BookStore/UserStore against an in-memory collection
# - Duplicate email handling, including a unique index created late
# - Translation of driver errors into StoreFault
# =============================================================================

from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import AutoReconnect, ServerSelectionTimeoutError

from core.models import (
    DuplicateKey,
    NotFound,
    StoreFault,
    Success,
    ValidationFailed,
    current_year,
)
from core.services.book_store import BookStore
from core.services.user_store import UserStore
from tests.fakes import InMemoryCollection


# =============================================================================
# Book Store Tests
# =============================================================================

class TestBookStoreCreate:
    """Tests for BookStore.create."""

    @pytest.mark.asyncio
    async def test_create_applies_defaults(self, book_store):
        outcome = await book_store.create({"title": "1984", "author": "Orwell"})

        assert isinstance(outcome, Success)
        book = outcome.value
        assert isinstance(book["_id"], ObjectId)
        assert book["year"] == current_year()
        assert book["isAvailable"] is True
        assert book["createdAt"] == book["updatedAt"]

    @pytest.mark.asyncio
    async def test_create_keeps_supplied_year(self, book_store):
        outcome = await book_store.create({"title": "1984", "author": "Orwell", "year": 1949})

        assert outcome.value["year"] == 1949

    @pytest.mark.asyncio
    @pytest.mark.parametrize("year", [999, current_year() + 11])
    async def test_create_rejects_out_of_range_year(self, book_store, books_collection, year):
        outcome = await book_store.create({"title": "1984", "author": "Orwell", "year": year})

        assert isinstance(outcome, ValidationFailed)
        assert outcome.message.startswith("Book validation failed: year")
        assert books_collection.documents == []

    @pytest.mark.asyncio
    async def test_create_rejects_missing_title(self, book_store):
        outcome = await book_store.create({"author": "Orwell"})

        assert isinstance(outcome, ValidationFailed)

    @pytest.mark.asyncio
    async def test_get_after_create_returns_same_entity(self, book_store):
        created = (await book_store.create({"title": "1984", "author": "Orwell"})).value

        fetched = await book_store.get(str(created["_id"]))

        assert isinstance(fetched, Success)
        assert fetched.value == created


class TestBookStoreRead:
    """Tests for BookStore.list_all and BookStore.get."""

    @pytest.mark.asyncio
    async def test_list_empty_collection(self, book_store):
        outcome = await book_store.list_all()

        assert outcome == Success([])

    @pytest.mark.asyncio
    async def test_list_returns_all(self, book_store):
        await book_store.create({"title": "1984", "author": "Orwell"})
        await book_store.create({"title": "Dune", "author": "Herbert"})

        outcome = await book_store.list_all()

        assert [book["title"] for book in outcome.value] == ["1984", "Dune"]

    @pytest.mark.asyncio
    async def test_get_unknown_id(self, book_store):
        missing = str(ObjectId())

        assert await book_store.get(missing) == NotFound(missing)

    @pytest.mark.asyncio
    async def test_get_malformed_id_is_not_found(self, book_store):
        assert await book_store.get("doesnotexist") == NotFound("doesnotexist")


class TestBookStoreUpdate:
    """Tests for BookStore.update."""

    @pytest.mark.asyncio
    async def test_update_replaces_fields(self, book_store):
        created = (await book_store.create({"title": "1984", "author": "Orwell", "year": 1949})).value
        book_id = str(created["_id"])

        outcome = await book_store.update(book_id, {"title": "Animal Farm", "author": "Orwell", "is_available": False})

        assert isinstance(outcome, Success)
        updated = outcome.value
        assert updated["_id"] == created["_id"]
        assert updated["title"] == "Animal Farm"
        assert updated["isAvailable"] is False
        # year was not supplied, so it falls back to the default
        assert updated["year"] == current_year()
        assert updated["createdAt"] == created["createdAt"]
        assert updated["updatedAt"] >= created["updatedAt"]

    @pytest.mark.asyncio
    async def test_invalid_update_leaves_entity_unchanged(self, book_store):
        created = (await book_store.create({"title": "1984", "author": "Orwell"})).value
        book_id = str(created["_id"])

        outcome = await book_store.update(book_id, {"author": "Someone Else"})

        assert isinstance(outcome, ValidationFailed)
        assert (await book_store.get(book_id)).value == created

    @pytest.mark.asyncio
    async def test_update_out_of_range_year(self, book_store):
        created = (await book_store.create({"title": "1984", "author": "Orwell"})).value

        outcome = await book_store.update(str(created["_id"]), {"title": "1984", "author": "Orwell", "year": 500})

        assert isinstance(outcome, ValidationFailed)

    @pytest.mark.asyncio
    async def test_update_unknown_id(self, book_store):
        missing = str(ObjectId())

        outcome = await book_store.update(missing, {"title": "1984", "author": "Orwell"})

        assert outcome == NotFound(missing)

    @pytest.mark.asyncio
    async def test_update_malformed_id(self, book_store):
        outcome = await book_store.update("42", {"title": "1984", "author": "Orwell"})

        assert outcome == NotFound("42")


class TestBookStoreDelete:
    """Tests for BookStore.delete."""

    @pytest.mark.asyncio
    async def test_delete_then_get_is_not_found(self, book_store):
        created = (await book_store.create({"title": "1984", "author": "Orwell"})).value
        book_id = str(created["_id"])

        assert await book_store.delete(book_id) == Success(None)
        assert await book_store.get(book_id) == NotFound(book_id)

    @pytest.mark.asyncio
    async def test_delete_unknown_id(self, book_store):
        missing = str(ObjectId())

        assert await book_store.delete(missing) == NotFound(missing)


# =============================================================================
# User Store Tests
# =============================================================================

class TestUserStore:
    """Tests for UserStore."""

    @pytest.mark.asyncio
    async def test_ensure_indexes_creates_unique_email_index(self):
        collection = MagicMock()
        collection.create_index = AsyncMock(return_value="email_1")

        await UserStore(collection).ensure_indexes()

        collection.create_index.assert_awaited_once_with("email", unique=True)
        assert UserStore.indexes_ready

    @pytest.mark.asyncio
    async def test_book_store_has_no_unique_indexes(self):
        collection = MagicMock()
        collection.create_index = AsyncMock()

        await BookStore(collection).ensure_indexes()

        collection.create_index.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_omits_absent_optional_fields(self, user_store):
        outcome = await user_store.create({"name": "Ada", "email": "ada@example.com"})

        assert isinstance(outcome, Success)
        assert "age" not in outcome.value
        assert "isActive" not in outcome.value

    @pytest.mark.asyncio
    async def test_duplicate_email_on_create(self, user_store):
        await user_store.create({"name": "Ada", "email": "ada@example.com"})

        outcome = await user_store.create({"name": "Other Ada", "email": "ada@example.com"})

        assert isinstance(outcome, DuplicateKey)
        assert outcome.field == "email"

    @pytest.mark.asyncio
    async def test_duplicate_email_on_update(self, user_store):
        await user_store.create({"name": "Ada", "email": "ada@example.com"})
        grace = (await user_store.create({"name": "Grace", "email": "grace@example.com"})).value

        outcome = await user_store.update(str(grace["_id"]), {"name": "Grace", "email": "ada@example.com"})

        assert isinstance(outcome, DuplicateKey)
        assert (await user_store.get(str(grace["_id"]))).value["email"] == "grace@example.com"

    @pytest.mark.asyncio
    async def test_update_removes_absent_optional_fields(self, user_store):
        created = (await user_store.create({"name": "Ada", "email": "ada@example.com", "age": 36, "role": "admin"})).value

        outcome = await user_store.update(str(created["_id"]), {"name": "Ada L.", "email": "ada@example.com"})

        assert isinstance(outcome, Success)
        assert outcome.value["name"] == "Ada L."
        assert "age" not in outcome.value
        assert "role" not in outcome.value

    @pytest.mark.asyncio
    async def test_update_keeps_own_email(self, user_store):
        created = (await user_store.create({"name": "Ada", "email": "ada@example.com"})).value

        outcome = await user_store.update(str(created["_id"]), {"name": "Ada", "email": "ada@example.com", "age": 37})

        assert isinstance(outcome, Success)
        assert outcome.value["age"] == 37


class TestUserStoreLateIndex:
    """The email index is created before the first write when startup missed it."""

    @pytest.mark.asyncio
    async def test_first_create_builds_index(self):
        collection = InMemoryCollection("users")
        store = UserStore(collection)

        await store.create({"name": "Ada", "email": "ada@example.com"})
        outcome = await store.create({"name": "Other Ada", "email": "ada@example.com"})

        assert collection.unique_fields == {"email"}
        assert isinstance(outcome, DuplicateKey)
        assert len(collection.documents) == 1

    @pytest.mark.asyncio
    async def test_first_update_builds_index(self):
        collection = InMemoryCollection("users")
        collection.documents.append({"_id": ObjectId(), "name": "Ada", "email": "ada@example.com"})
        grace_id = ObjectId()
        collection.documents.append({"_id": grace_id, "name": "Grace", "email": "grace@example.com"})

        outcome = await UserStore(collection).update(str(grace_id), {"name": "Grace", "email": "ada@example.com"})

        assert isinstance(outcome, DuplicateKey)

    @pytest.mark.asyncio
    async def test_index_still_failing_is_a_fault(self):
        collection = InMemoryCollection("users")
        collection.create_index = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers available"))

        outcome = await UserStore(collection).create({"name": "Ada", "email": "ada@example.com"})

        assert outcome == StoreFault("no servers available")
        assert collection.documents == []
        assert not UserStore.indexes_ready

    @pytest.mark.asyncio
    async def test_index_created_only_once(self):
        collection = InMemoryCollection("users")
        collection.create_index = AsyncMock(return_value="email_1")
        store = UserStore(collection)

        await store.create({"name": "Ada", "email": "ada@example.com"})
        await store.create({"name": "Grace", "email": "grace@example.com"})

        collection.create_index.assert_awaited_once_with("email", unique=True)


# =============================================================================
# Driver Fault Tests
# =============================================================================

class TestStoreFaults:
    """Driver errors become StoreFault instead of propagating."""

    @pytest.fixture
    def broken_collection(self):
        error = ServerSelectionTimeoutError("localhost:27017: connection refused")
        collection = MagicMock()
        collection.create_index = AsyncMock(side_effect=error)
        collection.find.return_value.to_list = AsyncMock(side_effect=error)
        collection.find_one = AsyncMock(side_effect=error)
        collection.insert_one = AsyncMock(side_effect=error)
        collection.find_one_and_update = AsyncMock(side_effect=error)
        collection.find_one_and_delete = AsyncMock(side_effect=error)
        return collection

    @pytest.mark.asyncio
    async def test_list_fault(self, broken_collection):
        outcome = await BookStore(broken_collection).list_all()

        assert isinstance(outcome, StoreFault)
        assert "connection refused" in outcome.message

    @pytest.mark.asyncio
    async def test_get_fault(self, broken_collection):
        outcome = await BookStore(broken_collection).get(str(ObjectId()))

        assert isinstance(outcome, StoreFault)

    @pytest.mark.asyncio
    async def test_create_fault(self, broken_collection):
        outcome = await BookStore(broken_collection).create({"title": "1984", "author": "Orwell"})

        assert isinstance(outcome, StoreFault)

    @pytest.mark.asyncio
    async def test_update_fault(self, broken_collection):
        outcome = await BookStore(broken_collection).update(str(ObjectId()), {"title": "1984", "author": "Orwell"})

        assert isinstance(outcome, StoreFault)

    @pytest.mark.asyncio
    async def test_delete_fault(self, broken_collection):
        outcome = await UserStore(broken_collection).delete(str(ObjectId()))

        assert isinstance(outcome, StoreFault)

    @pytest.mark.asyncio
    async def test_validation_runs_before_store(self, broken_collection):
        outcome = await BookStore(broken_collection).create({"title": "1984"})

        assert isinstance(outcome, ValidationFailed)
        broken_collection.insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_malformed_id_never_reaches_store(self, broken_collection):
        outcome = await BookStore(broken_collection).get("not-an-id")

        assert outcome == NotFound("not-an-id")
        broken_collection.find_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_reconnect_error_is_a_fault(self):
        collection = MagicMock()
        collection.find_one_and_delete = AsyncMock(side_effect=AutoReconnect("primary stepped down"))

        outcome = await BookStore(collection).delete(str(ObjectId()))

        assert outcome == StoreFault("primary stepped down")
