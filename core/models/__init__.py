# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains the resource schemas and store outcomes:
# - base.py: Shared payload/document base classes
# - book.py: Book payload and stored document
# - user.py: User payload and stored document
# - outcomes.py: Typed results returned by the stores
#
# These models define the "contract" between API, stores and clients.
# =============================================================================

from .base import ResourceDocument, ResourcePayload, format_validation_errors
from .book import BookDocument, BookPayload, current_year
from .user import UserDocument, UserPayload
from .outcomes import (
    DuplicateKey,
    NotFound,
    Outcome,
    StoreFault,
    Success,
    ValidationFailed,
)

__all__ = [
    # Base
    "ResourceDocument",
    "ResourcePayload",
    "format_validation_errors",
    # Book
    "BookDocument",
    "BookPayload",
    "current_year",
    # User
    "UserDocument",
    "UserPayload",
    # Outcomes
    "DuplicateKey",
    "NotFound",
    "Outcome",
    "StoreFault",
    "Success",
    "ValidationFailed",
]
