# =============================================================================
# core/models/outcomes.py - Store Operation Outcomes
# =============================================================================
# Every store operation returns exactly one of these values instead of
# raising. The controller switches over them to pick a status code.
# =============================================================================

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Success:
    """Operation completed; `value` is a document, a list of documents or None."""
    value: Any = None


@dataclass(frozen=True)
class ValidationFailed:
    """Input missing required fields or breaking a schema constraint."""
    message: str


@dataclass(frozen=True)
class NotFound:
    """No entity with this identifier (malformed identifiers included)."""
    identifier: str


@dataclass(frozen=True)
class DuplicateKey:
    """A unique index rejected the write."""
    field: str | None
    message: str


@dataclass(frozen=True)
class StoreFault:
    """Any other store failure, connectivity loss included."""
    message: str


Outcome = Union[Success, ValidationFailed, NotFound, DuplicateKey, StoreFault]
