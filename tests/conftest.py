from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest

from cms_core.domain.content_type_values import (
    ContentTypeDisplayName,
    ContentTypeName,
    ContentTypeSchema,
)
from cms_core.domain.content_values import ContentBody, ContentSlug, ContentTitle
from cms_core.domain.entities import Content, ContentType, Media
from cms_core.domain.identifiers import ContentId, ContentTypeId, MediaId


class MockContentRepo:
    """In-memory content repository keyed by id."""

    def __init__(self) -> None:
        self.items: dict[ContentId, Content] = {}
        self.slug_lookups = 0

    async def save(self, content: Content) -> None:
        self.items[content.id] = content

    async def find_by_id(self, content_id: ContentId) -> Content | None:
        return self.items.get(content_id)

    async def find_by_slug(self, slug: ContentSlug) -> Content | None:
        self.slug_lookups += 1
        for item in self.items.values():
            if item.slug == slug:
                return item
        return None

    async def delete(self, content_id: ContentId) -> None:
        self.items.pop(content_id, None)


class MockContentTypeRepo:
    """In-memory content type repository keyed by id."""

    def __init__(self) -> None:
        self.items: dict[ContentTypeId, ContentType] = {}

    async def save(self, content_type: ContentType) -> None:
        self.items[content_type.id] = content_type

    async def find_by_id(self, content_type_id: ContentTypeId) -> ContentType | None:
        return self.items.get(content_type_id)

    async def find_by_name(self, name: ContentTypeName) -> ContentType | None:
        for item in self.items.values():
            if item.name == name:
                return item
        return None

    async def find_all_active(self) -> list[ContentType]:
        return [item for item in self.items.values() if item.is_active]

    async def find_all(self) -> list[ContentType]:
        return list(self.items.values())

    async def delete(self, content_type_id: ContentTypeId) -> None:
        self.items.pop(content_type_id, None)


class MockMediaRepo:
    """In-memory media repository keyed by id."""

    def __init__(self) -> None:
        self.items: dict[MediaId, Media] = {}

    async def save(self, media: Media) -> None:
        self.items[media.id] = media

    async def find_by_id(self, media_id: MediaId) -> Media | None:
        return self.items.get(media_id)

    async def find_by_content_id(self, content_id: ContentId) -> list[Media]:
        return [item for item in self.items.values() if item.content_id == content_id]

    async def find_unattached(self) -> list[Media]:
        return [item for item in self.items.values() if not item.is_attached_to_content()]

    async def find_unattached_older_than(self, cutoff: datetime) -> list[Media]:
        return [item for item in await self.find_unattached() if item.created_at < cutoff]

    async def delete(self, media_id: MediaId) -> None:
        self.items.pop(media_id, None)


@pytest.fixture
def project_root() -> Path:
    return Path(__file__).parent.parent


@pytest.fixture
def now() -> datetime:
    """Fixed 'now' time for testing."""
    return datetime(2026, 6, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def content_type_id() -> ContentTypeId:
    return ContentTypeId.generate()


@pytest.fixture
def draft(content_type_id: ContentTypeId, now: datetime) -> Content:
    """Draft titled "Hello World" with a non-empty body."""
    return Content.create(
        ContentTitle.create("Hello World"),
        ContentBody.create("This is the body of the post."),
        content_type_id,
        now=now,
    )


@pytest.fixture
def repo() -> MockContentRepo:
    return MockContentRepo()


@pytest.fixture
def content_type_repo() -> MockContentTypeRepo:
    return MockContentTypeRepo()


@pytest.fixture
def media_repo() -> MockMediaRepo:
    return MockMediaRepo()


@pytest.fixture
def blog_post_schema() -> ContentTypeSchema:
    return ContentTypeSchema.from_mapping(
        {
            "title": {"type": "string", "required": True, "maxLength": 200},
            "body": {"type": "markdown", "required": True},
            "cover": {"type": "media"},
        }
    )


@pytest.fixture
def blog_post_name() -> ContentTypeName:
    return ContentTypeName.create("blog_post")


@pytest.fixture
def blog_post_display_name() -> ContentTypeDisplayName:
    return ContentTypeDisplayName.create("Blog Post")
