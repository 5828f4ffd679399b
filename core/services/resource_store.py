# =============================================================================
# core/services/resource_store.py - Generic MongoDB Resource Store
# =============================================================================
# CRUD against one collection, addressed by ObjectId. Each operation returns
# an Outcome (see core/models/outcomes.py) instead of raising, so that a
# store failure can never escape to the HTTP layer as an unhandled error.
#
# Subclasses only declare which collection and which schema they use:
#
#   class BookStore(ResourceStore):
#       collection_name = "books"
#       schema = BookDocument
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, ClassVar

from pydantic import ValidationError
from pymongo import ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import DuplicateKeyError, PyMongoError

from core.models.base import ResourceDocument, format_validation_errors
from core.models.outcomes import (
    DuplicateKey,
    NotFound,
    Outcome,
    StoreFault,
    Success,
    ValidationFailed,
)
from lib.utils import parse_object_id, utcnow

logger = logging.getLogger(__name__)

CREATED_AT = "createdAt"
UPDATED_AT = "updatedAt"


class ResourceStore:
    """
    Store adapter for one resource type.

    Provides a clean interface between the controller and the collection:
    validation against `schema`, timestamps, and translation of driver
    errors into outcomes.
    """

    collection_name: ClassVar[str] = ""
    schema: ClassVar[type[ResourceDocument]] = ResourceDocument
    # Fields backed by a unique index
    unique_fields: ClassVar[tuple[str, ...]] = ()
    # Set once those indexes are known to exist; writes wait for it
    indexes_ready: ClassVar[bool] = False

    def __init__(self, collection: AsyncCollection):
        self.collection = collection

    @property
    def resource_name(self) -> str:
        return self.schema.__name__.removesuffix("Document")

    # -------------------------------------------------------------------------
    # Setup
    # -------------------------------------------------------------------------

    async def ensure_indexes(self) -> None:
        """
        Create the unique indexes this resource relies on.

        Raises:
            pymongo.errors.PyMongoError: If the server rejects or cannot be reached
        """
        for field_name in self.unique_fields:
            await self.collection.create_index(field_name, unique=True)
            logger.info(f"Ensured unique index on {self.collection_name}.{field_name}")
        type(self).indexes_ready = True

    async def _require_indexes(self) -> StoreFault | None:
        """Retry index creation before a write if startup could not do it."""
        if type(self).indexes_ready or not self.unique_fields:
            return None
        try:
            await self.ensure_indexes()
        except PyMongoError as e:
            return self._fault("ensure indexes", e)
        return None

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def list_all(self) -> Outcome:
        """Every document in the collection, in store order."""
        try:
            documents = await self.collection.find().to_list()
        except PyMongoError as e:
            return self._fault("list", e)
        return Success(documents)

    async def get(self, item_id: str) -> Outcome:
        object_id = parse_object_id(item_id)
        if object_id is None:
            return NotFound(item_id)

        try:
            document = await self.collection.find_one({"_id": object_id})
        except PyMongoError as e:
            return self._fault("get", e)

        if document is None:
            return NotFound(item_id)
        return Success(document)

    async def create(self, fields: dict[str, Any]) -> Outcome:
        """
        Validate, timestamp and insert a new document.

        The returned document carries the store-assigned `_id`.
        """
        try:
            document = self.schema.model_validate(fields).to_document()
        except ValidationError as e:
            return self._invalid(e)

        fault = await self._require_indexes()
        if fault is not None:
            return fault

        now = utcnow()
        document[CREATED_AT] = now
        document[UPDATED_AT] = now

        try:
            result = await self.collection.insert_one(document)
        except DuplicateKeyError as e:
            return self._duplicate(e)
        except PyMongoError as e:
            return self._fault("create", e)

        document["_id"] = result.inserted_id
        logger.info(f"Created {self.resource_name.lower()}: {result.inserted_id}")
        return Success(document)

    async def update(self, item_id: str, fields: dict[str, Any]) -> Outcome:
        """
        Replace every mutable field of an existing document.

        Fields missing from `fields` take their schema default or are removed
        from the document. `_id` and `createdAt` are preserved. Validation
        runs before the write, so an invalid update changes nothing.
        """
        object_id = parse_object_id(item_id)
        if object_id is None:
            return NotFound(item_id)

        try:
            document = self.schema.model_validate(fields).to_document()
        except ValidationError as e:
            return self._invalid(e)

        fault = await self._require_indexes()
        if fault is not None:
            return fault

        document[UPDATED_AT] = utcnow()
        update: dict[str, Any] = {"$set": document}
        absent = [name for name in self.schema.stored_fields() if name not in document]
        if absent:
            update["$unset"] = {name: "" for name in absent}

        try:
            updated = await self.collection.find_one_and_update(
                {"_id": object_id},
                update,
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            return self._duplicate(e)
        except PyMongoError as e:
            return self._fault("update", e)

        if updated is None:
            return NotFound(item_id)
        logger.info(f"Updated {self.resource_name.lower()}: {item_id}")
        return Success(updated)

    async def delete(self, item_id: str) -> Outcome:
        object_id = parse_object_id(item_id)
        if object_id is None:
            return NotFound(item_id)

        try:
            deleted = await self.collection.find_one_and_delete({"_id": object_id})
        except PyMongoError as e:
            return self._fault("delete", e)

        if deleted is None:
            return NotFound(item_id)
        logger.info(f"Deleted {self.resource_name.lower()}: {item_id}")
        return Success(None)

    # -------------------------------------------------------------------------
    # Outcome helpers
    # -------------------------------------------------------------------------

    def _invalid(self, error: ValidationError) -> ValidationFailed:
        message = f"{self.resource_name} validation failed: {format_validation_errors(error.errors())}"
        logger.debug(message)
        return ValidationFailed(message)

    def _duplicate(self, error: DuplicateKeyError) -> DuplicateKey:
        key_value = (error.details or {}).get("keyValue") or {}
        field = next(iter(key_value), None)
        logger.info(f"Duplicate key on {self.collection_name}.{field}")
        return DuplicateKey(field=field, message=str(error))

    def _fault(self, operation: str, error: PyMongoError) -> StoreFault:
        logger.error(f"Failed to {operation} in {self.collection_name}: {error}")
        return StoreFault(str(error))
