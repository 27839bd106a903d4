"""
ContentType value objects: name, display name and field schema.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from cms_core.domain.values import ValueObject
from cms_core.errors import ValidationError

NAME_MAX_LENGTH = 50
DISPLAY_NAME_MAX_LENGTH = 100

_NAME_PATTERN = re.compile(r"[a-z][a-z0-9_]*")
_FIELD_NAME_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

FieldType = Literal["string", "text", "markdown", "number", "boolean", "date", "media"]


class ContentTypeName(ValueObject):
    """Machine name of a content type (e.g. "blog_post"); unique business key."""

    value: str

    label = "name"

    @field_validator("value")
    @classmethod
    def _check(cls, v: str) -> str:
        if not v:
            raise ValueError("Content type name is required")
        if len(v) > NAME_MAX_LENGTH:
            raise ValueError(f"Content type name must be at most {NAME_MAX_LENGTH} characters")
        if _NAME_PATTERN.fullmatch(v) is None:
            raise ValueError(
                "Content type name must start with a lowercase letter and contain "
                "only lowercase letters, numbers, and underscores"
            )
        return v

    @classmethod
    def create(cls, value: str) -> ContentTypeName:
        return cls._build(value=value)

    from_string = create


class ContentTypeDisplayName(ValueObject):
    """Human readable content type name, trimmed, 1-100 characters."""

    value: str

    label = "display_name"

    @field_validator("value")
    @classmethod
    def _check(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Display name is required")
        if len(v) > DISPLAY_NAME_MAX_LENGTH:
            raise ValueError(
                f"Display name must be at most {DISPLAY_NAME_MAX_LENGTH} characters"
            )
        return v

    @classmethod
    def create(cls, value: str) -> ContentTypeDisplayName:
        return cls._build(value=value)

    from_string = create


class FieldDescriptor(BaseModel):
    """Describes one content field allowed by a content type."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    type: FieldType
    required: bool = False
    max_length: int | None = Field(default=None, alias="maxLength", gt=0)
    min_length: int | None = Field(default=None, alias="minLength", ge=0)
    # Optional regex the field value should match
    validation: str | None = None

    @model_validator(mode="after")
    def _check_bounds(self) -> FieldDescriptor:
        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            raise ValueError("minLength cannot exceed maxLength")
        if self.validation is not None:
            try:
                re.compile(self.validation)
            except re.error as e:
                raise ValueError(f"Invalid validation pattern: {e}") from e
        return self

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ContentTypeSchema(ValueObject):
    """
    Field schema of a content type.

    Maps field name to FieldDescriptor. This is descriptive metadata: the
    domain does not check content bodies against it.
    """

    # Lax so raw JSON-like dicts coerce into FieldDescriptor instances
    model_config = ConfigDict(frozen=True, strict=False)

    definitions: dict[str, FieldDescriptor]

    label = "schema"

    @field_validator("definitions")
    @classmethod
    def _check_fields(cls, v: dict[str, FieldDescriptor]) -> dict[str, FieldDescriptor]:
        if not v:
            raise ValueError("Schema must define at least one field")
        for name in v:
            if _FIELD_NAME_PATTERN.fullmatch(name) is None:
                raise ValueError(f"Invalid field name '{name}'")
        return v

    @classmethod
    def from_mapping(cls, value: Mapping[str, Any]) -> ContentTypeSchema:
        """
        Build a schema from a plain mapping of field name to descriptor dict.

        Raises:
            ValidationError: If the mapping is not a valid schema
        """
        if not isinstance(value, Mapping):
            raise ValidationError("Schema must be a mapping of field names", field=cls.label)
        return cls._build(definitions=dict(value))

    from_object = from_mapping

    @property
    def value(self) -> dict[str, dict[str, Any]]:
        return self.to_dict()

    @property
    def field_names(self) -> list[str]:
        return list(self.definitions)

    @property
    def required_fields(self) -> list[str]:
        return [name for name, desc in self.definitions.items() if desc.required]

    def get(self, name: str) -> FieldDescriptor | None:
        return self.definitions.get(name)

    def has_field(self, name: str) -> bool:
        return name in self.definitions

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {name: desc.to_dict() for name, desc in self.definitions.items()}

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.definitions.items())))

    def __str__(self) -> str:
        return str(self.to_dict())
