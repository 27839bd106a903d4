"""
Content status and its transition table.

Allowed transitions:
- draft → published | archived
- published → draft | archived
- archived → draft | published

A status never transitions to itself.
"""

from __future__ import annotations

from enum import Enum

from cms_core.errors import ValidationError


class ContentStatus(str, Enum):
    """Lifecycle status of a Content item."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"

    @classmethod
    def from_string(cls, value: str) -> ContentStatus:
        """
        Parse a status from its string value.

        Raises:
            ValidationError: If value is not a known status
        """
        try:
            return cls(value)
        except ValueError as e:
            raise ValidationError(
                "Status must be draft, published, or archived", field="status"
            ) from e

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    def is_draft(self) -> bool:
        return self is ContentStatus.DRAFT

    def is_published(self) -> bool:
        return self is ContentStatus.PUBLISHED

    def is_archived(self) -> bool:
        return self is ContentStatus.ARCHIVED

    def allowed_transitions(self) -> frozenset[ContentStatus]:
        """Statuses reachable from this one."""
        return TRANSITIONS[self]

    def can_transition_to(self, new_status: ContentStatus) -> bool:
        """Check if a transition to new_status is allowed."""
        return new_status in TRANSITIONS[self]

    def equals(self, other: object) -> bool:
        return self == other

    def __str__(self) -> str:
        return str(self.value)


TRANSITIONS: dict[ContentStatus, frozenset[ContentStatus]] = {
    ContentStatus.DRAFT: frozenset({ContentStatus.PUBLISHED, ContentStatus.ARCHIVED}),
    ContentStatus.PUBLISHED: frozenset({ContentStatus.DRAFT, ContentStatus.ARCHIVED}),
    ContentStatus.ARCHIVED: frozenset({ContentStatus.DRAFT, ContentStatus.PUBLISHED}),
}


def can_transition(current: ContentStatus | str, new: ContentStatus | str) -> bool:
    """
    Determine if a status transition is allowed.

    Accepts plain strings so callers holding raw column values can check
    transitions without building the enum first. Unknown statuses are never
    allowed to transition.
    """
    try:
        return ContentStatus(current).can_transition_to(ContentStatus(new))
    except ValueError:
        return False
