# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# - UserPayload: body of POST /users and PUT /users/{id}
# - UserDocument: validated shape written to the "users" collection
#
# Email uniqueness is not a schema rule; it is enforced by a unique index on
# the collection (see UserStore.unique_fields).
# =============================================================================

from typing import ClassVar

from pydantic import Field

from .base import ResourceDocument, ResourcePayload


class UserPayload(ResourcePayload):
    """Client-supplied user fields."""

    required_fields: ClassVar[tuple[str, ...]] = ("name", "email")
    required_message: ClassVar[str] = "Name and email are required"

    name: str | None = Field(default=None, examples=["John Doe"])
    email: str | None = Field(default=None, examples=["john@example.com"])
    age: int | None = Field(default=None, examples=[25])
    role: str | None = Field(default=None, examples=["member"])
    is_active: bool | None = Field(default=None, examples=[True])


class UserDocument(ResourceDocument):
    """User as stored in MongoDB. Optional fields are omitted when absent."""

    name: str = Field(..., min_length=1, description="Full name")
    email: str = Field(..., min_length=1, description="Email address (unique)")
    age: int | None = Field(default=None, description="Age in years")
    role: str | None = Field(default=None, description="Role label")
    is_active: bool | None = Field(default=None, description="Active account flag")
