"""
Domain events recorded by the Content aggregate.

Events are plain immutable records. The aggregate collects them and the
caller drains them with Content.pull_events() after persisting.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from cms_core.domain.identifiers import ContentId, ContentTypeId


@dataclass(frozen=True)
class ContentCreatedEvent:
    content_id: ContentId
    title: str
    content_type_id: ContentTypeId
    created_at: datetime

    name = "content.created"


@dataclass(frozen=True)
class ContentPublishedEvent:
    content_id: ContentId
    published_at: datetime

    name = "content.published"


DomainEvent = ContentCreatedEvent | ContentPublishedEvent
