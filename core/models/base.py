# =============================================================================
# core/models/base.py - Shared Resource Schema Building Blocks
# =============================================================================
# Every stored resource is described by two models:
# - a *payload* model: what a client may send (all fields optional, lenient)
# - a *document* model: what may be persisted (constraints and defaults)
#
# Python attributes are snake_case; the wire format and the stored documents
# use camelCase (isAvailable, createdAt, ...) through field aliases.
# =============================================================================

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def format_validation_errors(errors: list[dict[str, Any]]) -> str:
    """
    Flatten pydantic error dicts into one readable line.

    Example:
        [{"loc": ("body", "year"), "msg": "Value error, Year must be valid"}]
        -> "year: Year must be valid"
    """
    parts = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        msg = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return "; ".join(parts)


class ResourcePayload(BaseModel):
    """
    Request body for create/update.

    Fields are all optional so that a missing required field is reported by
    the controller with the resource's own message instead of a generic
    framework error. Unknown keys are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    # Attribute names that must be present and non-empty
    required_fields: ClassVar[tuple[str, ...]] = ()
    required_message: ClassVar[str] = "Required fields are missing"

    def has_required_fields(self) -> bool:
        """Check every required field is supplied and truthy."""
        return all(getattr(self, name, None) for name in self.required_fields)

    def to_fields(self) -> dict[str, Any]:
        """Supplied fields only, keyed by attribute name."""
        return self.model_dump(exclude_none=True)


class ResourceDocument(BaseModel):
    """
    Persisted shape of a resource.

    Strings are trimmed before length checks run. `to_document` produces the
    camelCase dict that is written to MongoDB.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def stored_fields(cls) -> list[str]:
        """camelCase names of every mutable field."""
        return [info.alias or to_camel(name) for name, info in cls.model_fields.items()]
