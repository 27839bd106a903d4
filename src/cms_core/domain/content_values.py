"""
Content value objects: title, slug and body.
"""

from __future__ import annotations

import re

from pydantic import field_validator

from cms_core.domain.sanitize import has_markdown, strip_markdown, truncate_at_word
from cms_core.domain.slugify import is_slug, slugify
from cms_core.domain.values import ValueObject

TITLE_MAX_LENGTH = 200
SLUG_MAX_LENGTH = 100
BODY_MAX_LENGTH = 50_000
DEFAULT_EXCERPT_LENGTH = 200

_WORD_SPLIT = re.compile(r"\s+")


class ContentTitle(ValueObject):
    """Content title, trimmed, 1-200 characters."""

    value: str

    label = "title"

    @field_validator("value")
    @classmethod
    def _check(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        if len(v) > TITLE_MAX_LENGTH:
            raise ValueError(f"Title must be at most {TITLE_MAX_LENGTH} characters")
        return v

    @classmethod
    def create(cls, value: str) -> ContentTitle:
        return cls._build(value=value)

    from_string = create

    @property
    def length(self) -> int:
        return len(self.value)

    def is_empty(self) -> bool:
        return len(self.value) == 0

    def to_slug_suggestion(self) -> str:
        """Slug text derived from the title (not validated)."""
        return slugify(self.value)


class ContentSlug(ValueObject):
    """URL slug: lowercase alphanumeric segments joined by single hyphens."""

    value: str

    label = "slug"

    @field_validator("value")
    @classmethod
    def _check(cls, v: str) -> str:
        if not v:
            raise ValueError("Slug is required")
        if len(v) > SLUG_MAX_LENGTH:
            raise ValueError(f"Slug must be at most {SLUG_MAX_LENGTH} characters")
        if not is_slug(v):
            raise ValueError("Slug must contain only lowercase letters, numbers, and hyphens")
        return v

    @classmethod
    def create(cls, value: str) -> ContentSlug:
        return cls._build(value=value)

    from_string = create

    @classmethod
    def from_title(cls, title: str | ContentTitle) -> ContentSlug:
        """
        Derive a slug from a title.

        Raises:
            ValidationError: If the title yields an empty or over-long slug
        """
        text = title.value if isinstance(title, ContentTitle) else title
        return cls.create(slugify(text))

    @property
    def length(self) -> int:
        return len(self.value)

    def is_valid(self) -> bool:
        return 0 < len(self.value) <= SLUG_MAX_LENGTH and is_slug(self.value)

    def with_suffix(self, suffix: str | int) -> ContentSlug:
        """Return a new slug with "-<suffix>" appended."""
        return ContentSlug.create(f"{self.value}-{suffix}")


class ContentBody(ValueObject):
    """Content body text, 1-50,000 characters (kept verbatim)."""

    value: str

    label = "body"

    @field_validator("value")
    @classmethod
    def _check(cls, v: str) -> str:
        if len(v) == 0:
            raise ValueError("Content body is required")
        if len(v) > BODY_MAX_LENGTH:
            raise ValueError(f"Content body must be at most {BODY_MAX_LENGTH:,} characters")
        return v

    @classmethod
    def create(cls, value: str) -> ContentBody:
        return cls._build(value=value)

    from_string = create

    @property
    def length(self) -> int:
        return len(self.value)

    @property
    def word_count(self) -> int:
        return len([word for word in _WORD_SPLIT.split(self.value.strip()) if word])

    def is_empty(self) -> bool:
        """True when the body is whitespace only."""
        return not self.value.strip()

    def has_markdown(self) -> bool:
        return has_markdown(self.value)

    def get_excerpt(self, max_length: int = DEFAULT_EXCERPT_LENGTH) -> str:
        """Raw body cut at the last word boundary before max_length."""
        return truncate_at_word(self.value, max_length)

    def generate_excerpt(self, max_length: int = DEFAULT_EXCERPT_LENGTH) -> str:
        """
        Plain-text excerpt of the body.

        Markdown syntax is stripped first, then the text is cut at the last
        word boundary before max_length and suffixed with "...".
        """
        return truncate_at_word(strip_markdown(self.value), max_length)
