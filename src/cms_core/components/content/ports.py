"""
Content component port definitions.

Repositories are async. Paging arguments are 1-based page numbers with a
page size.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Protocol

from cms_core.domain.content_type_values import ContentTypeName
from cms_core.domain.content_values import ContentSlug
from cms_core.domain.entities import Content, ContentType, Media
from cms_core.domain.identifiers import ContentId, ContentTypeId, MediaId
from cms_core.domain.state import ContentStatus

# Answers "is this slug used by content other than exclude_id?"
SlugExistenceChecker = Callable[[ContentSlug, ContentId | None], Awaitable[bool]]


class ContentRepoPort(Protocol):
    """Repository interface for content persistence."""

    async def save(self, content: Content) -> None:
        """Insert or update content."""
        ...

    async def find_by_id(self, content_id: ContentId) -> Content | None:
        ...

    async def find_by_slug(self, slug: ContentSlug) -> Content | None:
        ...

    async def find_by_content_type(
        self, content_type_id: ContentTypeId, page: int, limit: int
    ) -> list[Content]:
        ...

    async def find_published(self, page: int, limit: int) -> list[Content]:
        ...

    async def find_all(self, page: int, limit: int) -> list[Content]:
        ...

    async def find_by_status(self, status: ContentStatus, page: int, limit: int) -> list[Content]:
        ...

    async def delete(self, content_id: ContentId) -> None:
        ...

    async def count_by_status(self, status: ContentStatus) -> int:
        ...

    async def count_by_content_type(self, content_type_id: ContentTypeId) -> int:
        ...

    async def count_all(self) -> int:
        ...


class ContentTypeRepoPort(Protocol):
    """Repository interface for content types."""

    async def save(self, content_type: ContentType) -> None:
        ...

    async def find_by_id(self, content_type_id: ContentTypeId) -> ContentType | None:
        ...

    async def find_by_name(self, name: ContentTypeName) -> ContentType | None:
        ...

    async def find_all_active(self) -> list[ContentType]:
        ...

    async def find_all(self) -> list[ContentType]:
        ...

    async def delete(self, content_type_id: ContentTypeId) -> None:
        ...


class MediaRepoPort(Protocol):
    """Repository interface for uploaded media."""

    async def save(self, media: Media) -> None:
        ...

    async def find_by_id(self, media_id: MediaId) -> Media | None:
        ...

    async def find_by_content_id(self, content_id: ContentId) -> list[Media]:
        ...

    async def find_unattached(self) -> list[Media]:
        """Media not attached to any content."""
        ...

    async def find_unattached_older_than(self, cutoff: datetime) -> list[Media]:
        """Unattached media created before cutoff."""
        ...

    async def delete(self, media_id: MediaId) -> None:
        ...


def slug_checker_for(repo: ContentRepoPort) -> SlugExistenceChecker:
    """
    Adapt a content repository into a SlugExistenceChecker.

    A slug held by the excluded content counts as free, so content can keep
    its own slug on update.
    """

    async def slug_taken(slug: ContentSlug, exclude_id: ContentId | None) -> bool:
        existing = await repo.find_by_slug(slug)
        if existing is None:
            return False
        return exclude_id is None or existing.id != exclude_id

    return slug_taken
