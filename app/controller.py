# =============================================================================
# app/controller.py - Resource Controller
# =============================================================================
# Maps one request (path id and/or body) to one response:
#   - checks the required fields of the body
#   - calls the store
#   - turns the returned Outcome into a status code and envelope
#
#   list    200 | 500
#   get     200 | 404 | 500
#   create  201 | 400 | 500
#   update  200 | 400 | 404 | 500
#   delete  204 | 404 | 500
# =============================================================================

from typing import Any

from fastapi import Response, status
from fastapi.responses import JSONResponse

from app.exceptions import error_envelope
from core.models.base import ResourcePayload
from core.models.outcomes import (
    DuplicateKey,
    NotFound,
    Outcome,
    StoreFault,
    Success,
    ValidationFailed,
)
from core.services.resource_store import ResourceStore
from lib.utils import serialize_document


def success_envelope(data: Any) -> dict[str, Any]:
    return {"success": True, "data": data}


class ResourceController:
    """
    HTTP-facing operations for one resource type.

    Example:
        controller = ResourceController(BookStore(collection))
        response = await controller.get("65a1f0c2e4b0a1b2c3d4e5f6")
    """

    def __init__(self, store: ResourceStore):
        self.store = store
        self.singular = store.resource_name.lower()
        self.plural = store.collection_name

    async def list(self) -> Response:
        outcome = await self.store.list_all()
        if isinstance(outcome, Success):
            return self._ok([serialize_document(doc) for doc in outcome.value])
        return self._failure(outcome, f"fetching {self.plural}")

    async def get(self, item_id: str) -> Response:
        outcome = await self.store.get(item_id)
        if isinstance(outcome, Success):
            return self._ok(serialize_document(outcome.value))
        return self._failure(outcome, f"fetching {self.singular}")

    async def create(self, payload: ResourcePayload) -> Response:
        if not payload.has_required_fields():
            return self._missing_fields(payload)

        outcome = await self.store.create(payload.to_fields())
        if isinstance(outcome, Success):
            return self._ok(serialize_document(outcome.value), status.HTTP_201_CREATED)
        return self._failure(outcome, f"creating {self.singular}")

    async def update(self, item_id: str, payload: ResourcePayload) -> Response:
        if not payload.has_required_fields():
            return self._missing_fields(payload)

        outcome = await self.store.update(item_id, payload.to_fields())
        if isinstance(outcome, Success):
            return self._ok(serialize_document(outcome.value))
        return self._failure(outcome, f"updating {self.singular}")

    async def delete(self, item_id: str) -> Response:
        outcome = await self.store.delete(item_id)
        if isinstance(outcome, Success):
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        return self._failure(outcome, f"deleting {self.singular}")

    # -------------------------------------------------------------------------
    # Response helpers
    # -------------------------------------------------------------------------

    def _ok(self, data: Any, status_code: int = status.HTTP_200_OK) -> JSONResponse:
        return JSONResponse(status_code=status_code, content=success_envelope(data))

    def _missing_fields(self, payload: ResourcePayload) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_envelope(payload.required_message),
        )

    def _failure(self, outcome: Outcome, action: str) -> JSONResponse:
        """Map every non-success outcome; `action` names the 500 error."""
        if isinstance(outcome, ValidationFailed):
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=error_envelope("Validation error", outcome.message),
            )
        if isinstance(outcome, NotFound):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content=error_envelope(f"{self.singular.capitalize()} not found"),
            )
        if isinstance(outcome, DuplicateKey):
            error = f"{outcome.field.capitalize()} already exists" if outcome.field else "Duplicate key"
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=error_envelope(error),
            )
        if isinstance(outcome, StoreFault):
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=error_envelope(f"Error {action}", outcome.message),
            )
        raise TypeError(f"Unhandled outcome: {outcome!r}")
