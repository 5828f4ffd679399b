# =============================================================================
# core/models/book.py - Book Schemas
# =============================================================================
# - BookPayload: body of POST /books and PUT /books/{id}
# - BookDocument: validated shape written to the "books" collection
#
# Example stored document:
#   {
#       "_id": ObjectId("65a1f0c2e4b0a1b2c3d4e5f6"),
#       "title": "1984",
#       "author": "George Orwell",
#       "year": 1949,
#       "isAvailable": true,
#       "createdAt": ISODate(...),
#       "updatedAt": ISODate(...)
#   }
# =============================================================================

from datetime import datetime, timezone
from typing import ClassVar

from pydantic import Field, field_validator

from .base import ResourceDocument, ResourcePayload

MIN_YEAR = 1000
# Books may be announced a few years before publication
MAX_YEARS_AHEAD = 10


def current_year() -> int:
    return datetime.now(timezone.utc).year


class BookPayload(ResourcePayload):
    """Client-supplied book fields."""

    required_fields: ClassVar[tuple[str, ...]] = ("title", "author")
    required_message: ClassVar[str] = "Title and author are required"

    title: str | None = Field(default=None, examples=["1984"])
    author: str | None = Field(default=None, examples=["George Orwell"])
    year: int | None = Field(default=None, examples=[1949])
    is_available: bool | None = Field(default=None, examples=[True])


class BookDocument(ResourceDocument):
    """
    Book as stored in MongoDB.

    `year` defaults to the current calendar year and `is_available` to True.
    The upper bound on `year` moves with the calendar, so it is checked at
    validation time rather than fixed at import.
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Book title"
    )

    author: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Author name"
    )

    year: int = Field(
        default_factory=current_year,
        description="Publication year"
    )

    is_available: bool = Field(
        default=True,
        description="Whether the book can be borrowed"
    )

    @field_validator("year")
    @classmethod
    def validate_year(cls, v: int) -> int:
        """Keep the year inside [1000, current year + 10]."""
        if v < MIN_YEAR:
            raise ValueError("Year must be valid")
        if v > current_year() + MAX_YEARS_AHEAD:
            raise ValueError("Year cannot be too far in the future")
        return v
