"""
Base class for immutable, self-validating value objects.

Value objects are frozen pydantic models with a single ``value`` field (or a
small set of fields). Field validators raise ValueError with a user-facing
message; _build() turns pydantic's error report into a domain
ValidationError so pydantic never leaks out of the domain layer.
"""

from __future__ import annotations

from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from cms_core.errors import ValidationError


def first_error_message(exc: PydanticValidationError) -> str:
    """Extract the message of the first error in a pydantic report."""
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    cause = first.get("ctx", {}).get("error")
    if isinstance(cause, Exception):
        return str(cause)
    return str(first["msg"])


class ValueObject(BaseModel):
    """Immutable value object compared by value."""

    model_config = ConfigDict(frozen=True, strict=True)

    # Name reported as ValidationError.field
    label: ClassVar[str] = "value"

    @classmethod
    def _build(cls, **data: Any) -> Self:
        try:
            return cls(**data)
        except PydanticValidationError as e:
            raise ValidationError(first_error_message(e), field=cls.label) from e

    def equals(self, other: object) -> bool:
        """Value equality."""
        return self == other

    def __str__(self) -> str:
        return str(getattr(self, "value"))
