# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error leaves the API in the same envelope as controller failures:
#   {"success": false, "error": "<short message>", "message": "<detail>"}
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.models.base import format_validation_errors

logger = logging.getLogger(__name__)


def error_envelope(error: str, message: str | None = None) -> dict[str, Any]:
    """Build the failure envelope; `message` is omitted when empty."""
    body: dict[str, Any] = {"success": False, "error": error}
    if message:
        body["message"] = message
    return body


class BookshelfException(Exception):
    """
    Base exception for the Bookshelf API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "BOOKSHELF_ERROR",
        status_code: int = 500,
        detail: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return error_envelope(self.message, self.detail)


class DatabaseUnavailableError(BookshelfException):
    """Raised when the MongoDB client cannot be obtained."""

    def __init__(self, error: str):
        super().__init__(
            message="Database unavailable",
            code="DATABASE_UNAVAILABLE",
            status_code=503,
            detail=error,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def bookshelf_exception_handler(
    request: Request,
    exc: BookshelfException
) -> JSONResponse:
    """Convert BookshelfException to its envelope."""
    logger.warning(f"{exc.code} on {request.method} {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle malformed request bodies (invalid JSON, wrong field types).

    Reported as 400 like any other validation failure.
    """
    return JSONResponse(
        status_code=400,
        content=error_envelope("Validation error", format_validation_errors(list(exc.errors())))
    )


async def unexpected_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Last resort: log with traceback and expose the message."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content=error_envelope("Internal server error", str(exc))
    )
