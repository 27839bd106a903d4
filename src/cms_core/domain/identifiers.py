"""
Identifier value objects.

Identifiers are opaque UUIDs kept in their canonical textual form
(lower-case, hyphenated 8-4-4-4-12).
"""

from __future__ import annotations

import re
from typing import ClassVar, Self
from uuid import uuid4

from pydantic import field_validator

from cms_core.domain.values import ValueObject

_UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)


class EntityId(ValueObject):
    """UUID identifier base; subclasses differ only by type and label."""

    value: str

    kind: ClassVar[str] = "ID"

    @field_validator("value")
    @classmethod
    def _check_uuid(cls, v: str) -> str:
        if _UUID_PATTERN.fullmatch(v) is None:
            raise ValueError(f"{cls.kind} must be a valid UUID")
        return v.lower()

    @classmethod
    def generate(cls) -> Self:
        """Create a new random identifier."""
        return cls._build(value=str(uuid4()))

    @classmethod
    def create(cls, value: str | None = None) -> Self:
        """Parse value, or generate a new identifier when value is None."""
        if value is None:
            return cls.generate()
        return cls._build(value=value)

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Parse an identifier from its textual form."""
        return cls._build(value=value)


class ContentId(EntityId):
    label = "content_id"
    kind = "Content ID"


class ContentTypeId(EntityId):
    label = "content_type_id"
    kind = "Content type ID"


class MediaId(EntityId):
    label = "media_id"
    kind = "Media ID"
