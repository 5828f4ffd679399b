# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import date, datetime, timezone
from typing import Any

from bson import ObjectId


# =============================================================================
# Identifier Utilities
# =============================================================================

def parse_object_id(value: str | ObjectId | None) -> ObjectId | None:
    """
    Parse a path identifier into a MongoDB ObjectId.

    Anything that is not a 24-character hex string (or an ObjectId already)
    yields None, so callers can treat malformed ids exactly like unknown ids.

    Example:
        parse_object_id("65a1f0c2e4b0a1b2c3d4e5f6")  # ObjectId('65a1...')
        parse_object_id("doesnotexist")              # None
    """
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


def utcnow() -> datetime:
    """
    Current UTC time truncated to milliseconds.

    BSON dates only keep millisecond precision, so truncating up front makes
    the document returned by a write identical to the one read back later.
    """
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


# =============================================================================
# Serialization
# =============================================================================

def serialize_document(doc: dict[str, Any] | None) -> dict[str, Any] | None:
    """
    Convert a MongoDB document into a JSON-ready dict.

    - `_id` becomes `id` (string)
    - datetimes/dates become ISO-8601 strings
    - nested ObjectIds become strings
    """
    if doc is None:
        return None

    result: dict[str, Any] = {}
    if doc.get("_id") is not None:
        result["id"] = str(doc["_id"])

    for key, value in doc.items():
        if key == "_id":
            continue
        if isinstance(value, (datetime, date)):
            result[key] = value.isoformat()
        elif isinstance(value, ObjectId):
            result[key] = str(value)
        else:
            result[key] = value
    return result


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Error raised by infrastructure code outside the HTTP layer.

    `suggestion` tells the operator how to fix the problem; it is shown in
    logs and appended to the 503 body when the database is unavailable.
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        if self.suggestion:
            return f"[{self.code}] {self.message} ({self.suggestion})"
        return f"[{self.code}] {self.message}"

    def describe(self) -> str:
        """Message plus the fix, for API responses."""
        if self.suggestion:
            return f"{self.message}. {self.suggestion}"
        return self.message
