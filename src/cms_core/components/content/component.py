"""
Content domain service.

Business rules that span more than one value object, plus unique slug
generation against an external uniqueness check.

Slug generation:
- the base slug is derived from the title
- on collision, "-1", "-2", ... are appended and checked one at a time
- the search gives up after slug.max_attempts checks, base included
"""

from __future__ import annotations

import logging

from cms_core.components.content import validation
from cms_core.components.content.ports import SlugExistenceChecker
from cms_core.domain.content_values import ContentBody, ContentSlug, ContentTitle
from cms_core.domain.entities import Content
from cms_core.domain.identifiers import ContentId
from cms_core.errors import ConflictError, ResourceExhaustedError
from cms_core.rules.loader import load_rules_from_env
from cms_core.rules.models import DomainRules

logger = logging.getLogger(__name__)


def _text(value: ContentTitle | ContentSlug | str) -> str:
    return value if isinstance(value, str) else value.value


class ContentDomainService:
    """Stateless content rules service configured by DomainRules."""

    def __init__(self, rules: DomainRules | None = None) -> None:
        self._rules = rules or DomainRules()

    @property
    def rules(self) -> DomainRules:
        return self._rules

    # --- Slugs ---

    async def generate_unique_slug(
        self,
        title: ContentTitle | str,
        slug_taken: SlugExistenceChecker,
        exclude_id: ContentId | None = None,
    ) -> ContentSlug:
        """
        Generate a slug from a title that no other content uses.

        Args:
            title: Title to derive the slug from.
            slug_taken: Async check for slugs used by other content.
            exclude_id: Content whose own slug counts as free.

        Returns:
            The base slug, or the first free suffixed variant.

        Raises:
            ValidationError: If the title yields no valid slug
            ResourceExhaustedError: If every candidate is reported taken
        """
        base = ContentSlug.from_title(_text(title))
        max_attempts = self._rules.slug.max_attempts

        for attempt in range(max_attempts):
            candidate = base if attempt == 0 else base.with_suffix(attempt)
            if not await slug_taken(candidate, exclude_id):
                if attempt:
                    logger.debug("Slug %s taken, using %s", base, candidate)
                return candidate

        logger.warning("No free slug for %s after %d attempts", base, max_attempts)
        raise ResourceExhaustedError(
            f"Unable to generate unique slug after {max_attempts} attempts",
            attempts=max_attempts,
            field="slug",
        )

    async def validate_slug_uniqueness(
        self,
        slug: ContentSlug | str,
        slug_taken: SlugExistenceChecker,
        exclude_id: ContentId | None = None,
    ) -> None:
        """
        Raises:
            ConflictError: If the slug is used by other content
        """
        candidate = slug if isinstance(slug, ContentSlug) else ContentSlug.create(slug)
        if await slug_taken(candidate, exclude_id):
            raise ConflictError(f'Slug "{candidate.value}" is already in use', field="slug")

    def suggest_slug_from_title(self, title: ContentTitle | str) -> ContentSlug:
        return ContentSlug.from_title(_text(title))

    # --- Excerpts ---

    def generate_excerpt(
        self, content: Content | ContentBody, max_length: int | None = None
    ) -> str:
        """Plain-text excerpt, excerpt.default_length chars unless max_length is given."""
        body = content.body if isinstance(content, Content) else content
        return body.generate_excerpt(max_length or self._rules.excerpt.default_length)

    # --- Field rules ---

    def validate_title_and_slug_consistency(
        self, title: ContentTitle | str, slug: ContentSlug | str
    ) -> None:
        validation.validate_title_and_slug_consistency(_text(title), _text(slug), self._rules)

    def validate_content_fields(
        self,
        title: ContentTitle | str,
        slug: ContentSlug | str,
        body: str | None = None,
    ) -> None:
        validation.validate_content_fields(_text(title), _text(slug), body, self._rules)

    def validate_content_for_publication(self, title: ContentTitle | str, body: str) -> None:
        validation.validate_content_for_publication(_text(title), body, self._rules)

    def validate_media_for_content(self, filename: str) -> None:
        validation.validate_media_for_content(filename, self._rules)

    def validate_slug_for_seo(self, slug: ContentSlug | str) -> None:
        validation.validate_slug_for_seo(_text(slug), self._rules)


def create_content_service(rules: DomainRules | None = None) -> ContentDomainService:
    """Build a service from explicit rules, or from CMS_RULES_PATH / defaults."""
    if rules is None:
        rules = load_rules_from_env()
    return ContentDomainService(rules)
