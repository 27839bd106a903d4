"""
Aggregate roots: Content, ContentType and Media.

Entities are mutable pydantic models whose identity and owned references are
frozen fields. State changes go through methods, which keep the invariants
and refresh updated_at. Timestamps are timezone-aware UTC; every mutating
method accepts an optional ``now`` so callers and tests control the clock.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime

from pydantic import BaseModel, Field, PrivateAttr

from cms_core.domain.content_type_values import (
    ContentTypeDisplayName,
    ContentTypeName,
    ContentTypeSchema,
)
from cms_core.domain.content_values import (
    DEFAULT_EXCERPT_LENGTH,
    ContentBody,
    ContentSlug,
    ContentTitle,
)
from cms_core.domain.events import ContentCreatedEvent, ContentPublishedEvent, DomainEvent
from cms_core.domain.identifiers import ContentId, ContentTypeId, MediaId
from cms_core.domain.media_values import MediaFilename, MediaR2Key, MediaSize, MediaUrl
from cms_core.domain.state import ContentStatus
from cms_core.errors import StateError, ValidationError

_MIME_TYPE = re.compile(r"[\w.+-]+/[\w.+-]+")


def _utcnow(now: datetime | None = None) -> datetime:
    return now or datetime.now(UTC)


# --- Content ---


class Content(BaseModel):
    """A piece of content with a draft/published/archived lifecycle."""

    id: ContentId = Field(frozen=True)
    title: ContentTitle
    slug: ContentSlug
    body: ContentBody
    status: ContentStatus = ContentStatus.DRAFT
    content_type_id: ContentTypeId = Field(frozen=True)
    published_at: datetime | None = None
    created_at: datetime = Field(frozen=True)
    updated_at: datetime

    _events: list[DomainEvent] = PrivateAttr(default_factory=list)

    @classmethod
    def create(
        cls,
        title: ContentTitle,
        body: ContentBody,
        content_type_id: ContentTypeId,
        now: datetime | None = None,
    ) -> Content:
        """
        Create a new draft with a slug derived from the title.

        Records a ContentCreatedEvent.

        Raises:
            ValidationError: If the title does not yield a valid slug
        """
        now = _utcnow(now)
        content = cls(
            id=ContentId.generate(),
            title=title,
            slug=ContentSlug.from_title(title),
            body=body,
            status=ContentStatus.DRAFT,
            content_type_id=content_type_id,
            published_at=None,
            created_at=now,
            updated_at=now,
        )
        content._events.append(
            ContentCreatedEvent(
                content_id=content.id,
                title=title.value,
                content_type_id=content_type_id,
                created_at=now,
            )
        )
        return content

    @classmethod
    def reconstruct(
        cls,
        *,
        id: ContentId,
        title: ContentTitle,
        slug: ContentSlug,
        body: ContentBody,
        status: ContentStatus,
        content_type_id: ContentTypeId,
        published_at: datetime | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> Content:
        """Rebuild stored content. No events are recorded."""
        return cls(
            id=id,
            title=title,
            slug=slug,
            body=body,
            status=status,
            content_type_id=content_type_id,
            published_at=published_at,
            created_at=created_at,
            updated_at=updated_at,
        )

    # --- Lifecycle ---

    def publish(self, now: datetime | None = None) -> None:
        """
        Publish the content.

        Raises:
            StateError: If the content is already published
            ValidationError: If the body is blank
        """
        if self.status is ContentStatus.PUBLISHED:
            raise StateError("Content is already published", current_state=self.status.value)
        if self.body.is_empty():
            raise ValidationError("Cannot publish empty content", field="body")

        now = _utcnow(now)
        self.status = ContentStatus.PUBLISHED
        self.published_at = now
        self.updated_at = now
        self._events.append(ContentPublishedEvent(content_id=self.id, published_at=now))

    def unpublish(self, now: datetime | None = None) -> None:
        """
        Move the content back to draft and clear published_at.

        Raises:
            StateError: If the content is already a draft
        """
        if self.status is ContentStatus.DRAFT:
            raise StateError("Content is already unpublished", current_state=self.status.value)

        self.status = ContentStatus.DRAFT
        self.published_at = None
        self.updated_at = _utcnow(now)

    def archive(self, now: datetime | None = None) -> None:
        """Archive the content from any status. published_at is kept."""
        self.status = ContentStatus.ARCHIVED
        self.updated_at = _utcnow(now)

    # --- Edits ---

    def update_title(self, title: ContentTitle, now: datetime | None = None) -> None:
        """Replace the title and re-derive the slug from it."""
        slug = ContentSlug.from_title(title)
        self.title = title
        self.slug = slug
        self.updated_at = _utcnow(now)

    def update_slug(self, slug: ContentSlug, now: datetime | None = None) -> None:
        self.slug = slug
        self.updated_at = _utcnow(now)

    def update_body(self, body: ContentBody, now: datetime | None = None) -> None:
        self.body = body
        self.updated_at = _utcnow(now)

    # --- Queries ---

    def is_published(self) -> bool:
        return self.status is ContentStatus.PUBLISHED and self.published_at is not None

    def is_draft(self) -> bool:
        return self.status is ContentStatus.DRAFT

    def is_archived(self) -> bool:
        return self.status is ContentStatus.ARCHIVED

    def generate_excerpt(self, max_length: int = DEFAULT_EXCERPT_LENGTH) -> str:
        return self.body.generate_excerpt(max_length)

    def pull_events(self) -> list[DomainEvent]:
        """Return recorded events and clear them."""
        events = list(self._events)
        self._events.clear()
        return events


# --- ContentType ---


class ContentType(BaseModel):
    """A named kind of content (e.g. blog_post, page) with a field schema."""

    id: ContentTypeId = Field(frozen=True)
    name: ContentTypeName = Field(frozen=True)
    display_name: ContentTypeDisplayName
    description: str | None = None
    # Stored under another attribute name; BaseModel already defines schema()
    field_schema: ContentTypeSchema
    is_active: bool = True
    created_at: datetime = Field(frozen=True)
    updated_at: datetime

    @classmethod
    def create(
        cls,
        name: ContentTypeName,
        display_name: ContentTypeDisplayName,
        schema: ContentTypeSchema,
        description: str | None = None,
        now: datetime | None = None,
    ) -> ContentType:
        """Create an active content type. An empty description is stored as None."""
        now = _utcnow(now)
        return cls(
            id=ContentTypeId.generate(),
            name=name,
            display_name=display_name,
            description=description or None,
            field_schema=schema,
            is_active=True,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def reconstruct(
        cls,
        *,
        id: ContentTypeId,
        name: ContentTypeName,
        display_name: ContentTypeDisplayName,
        description: str | None,
        schema: ContentTypeSchema,
        is_active: bool,
        created_at: datetime,
        updated_at: datetime,
    ) -> ContentType:
        return cls(
            id=id,
            name=name,
            display_name=display_name,
            description=description,
            field_schema=schema,
            is_active=is_active,
            created_at=created_at,
            updated_at=updated_at,
        )

    @property
    def schema(self) -> ContentTypeSchema:  # type: ignore[override]
        return self.field_schema

    def activate(self, now: datetime | None = None) -> None:
        self.is_active = True
        self.updated_at = _utcnow(now)

    def deactivate(self, now: datetime | None = None) -> None:
        self.is_active = False
        self.updated_at = _utcnow(now)

    def update_display_name(
        self, display_name: ContentTypeDisplayName, now: datetime | None = None
    ) -> None:
        self.display_name = display_name
        self.updated_at = _utcnow(now)

    def update_description(self, description: str | None, now: datetime | None = None) -> None:
        self.description = description or None
        self.updated_at = _utcnow(now)

    def update_schema(self, schema: ContentTypeSchema, now: datetime | None = None) -> None:
        self.field_schema = schema
        self.updated_at = _utcnow(now)


# --- Media ---


class Media(BaseModel):
    """An uploaded file stored in the media bucket."""

    id: MediaId = Field(frozen=True)
    filename: MediaFilename = Field(frozen=True)
    r2_key: MediaR2Key = Field(frozen=True)
    url: MediaUrl
    size: MediaSize = Field(frozen=True)
    mime_type: str = Field(frozen=True)
    alt: str | None = None
    content_id: ContentId | None = None
    created_at: datetime = Field(frozen=True)

    @classmethod
    def create(
        cls,
        filename: MediaFilename,
        r2_key: MediaR2Key,
        url: MediaUrl,
        size: MediaSize,
        mime_type: str,
        now: datetime | None = None,
    ) -> Media:
        """
        Register a newly uploaded file, not yet attached to any content.

        Raises:
            ValidationError: If mime_type is not of the form type/subtype
        """
        if _MIME_TYPE.fullmatch(mime_type) is None:
            raise ValidationError(f"Invalid MIME type '{mime_type}'", field="mime_type")
        return cls(
            id=MediaId.generate(),
            filename=filename,
            r2_key=r2_key,
            url=url,
            size=size,
            mime_type=mime_type,
            alt=None,
            content_id=None,
            created_at=_utcnow(now),
        )

    @classmethod
    def reconstruct(
        cls,
        *,
        id: MediaId,
        filename: MediaFilename,
        r2_key: MediaR2Key,
        url: MediaUrl,
        size: MediaSize,
        mime_type: str,
        alt: str | None,
        content_id: ContentId | None,
        created_at: datetime,
    ) -> Media:
        return cls(
            id=id,
            filename=filename,
            r2_key=r2_key,
            url=url,
            size=size,
            mime_type=mime_type,
            alt=alt,
            content_id=content_id,
            created_at=created_at,
        )

    def attach_to_content(self, content_id: ContentId) -> None:
        self.content_id = content_id

    def detach_from_content(self) -> None:
        self.content_id = None

    def is_attached_to_content(self) -> bool:
        return self.content_id is not None

    def update_url(self, url: MediaUrl) -> None:
        self.url = url

    def update_alt(self, alt: str | None) -> None:
        """Set alt text; blank text clears it."""
        self.alt = alt.strip() if alt and alt.strip() else None

    def is_image(self) -> bool:
        return self.filename.is_image()
