"""
ContentDomainService tests: unique slugs and content rules.
"""

from __future__ import annotations

import pytest

from cms_core.components.content import ContentDomainService, create_content_service
from cms_core.domain.content_values import ContentBody, ContentSlug, ContentTitle
from cms_core.domain.entities import Content
from cms_core.domain.identifiers import ContentId
from cms_core.errors import ConflictError, ResourceExhaustedError, ValidationError
from cms_core.rules.models import DomainRules, ExcerptRules, SlugRules


class SlugRegistry:
    """Slug checker backed by a set of taken slugs; counts calls."""

    def __init__(self, taken: set[str] | None = None, always_taken: bool = False) -> None:
        self.taken = taken or set()
        self.always_taken = always_taken
        self.calls: list[tuple[str, ContentId | None]] = []

    async def __call__(self, slug: ContentSlug, exclude_id: ContentId | None) -> bool:
        self.calls.append((slug.value, exclude_id))
        return self.always_taken or slug.value in self.taken


@pytest.fixture
def service() -> ContentDomainService:
    return ContentDomainService()


class TestGenerateUniqueSlug:
    """Slug generation against an async uniqueness check."""

    @pytest.mark.asyncio
    async def test_free_base_slug(self, service: ContentDomainService) -> None:
        checker = SlugRegistry()
        slug = await service.generate_unique_slug(ContentTitle.create("My Post"), checker)
        assert slug.value == "my-post"
        assert checker.calls == [("my-post", None)]

    @pytest.mark.asyncio
    async def test_appends_first_free_suffix(self, service: ContentDomainService) -> None:
        checker = SlugRegistry({"my-post", "my-post-1", "my-post-2"})
        slug = await service.generate_unique_slug("My Post", checker)
        assert slug.value == "my-post-3"
        assert [call[0] for call in checker.calls] == [
            "my-post",
            "my-post-1",
            "my-post-2",
            "my-post-3",
        ]

    @pytest.mark.asyncio
    async def test_passes_exclude_id(self, service: ContentDomainService) -> None:
        content_id = ContentId.generate()
        checker = SlugRegistry()
        await service.generate_unique_slug("Title", checker, content_id)
        assert checker.calls == [("title", content_id)]

    @pytest.mark.asyncio
    async def test_exhausted_after_1000_attempts(self, service: ContentDomainService) -> None:
        checker = SlugRegistry(always_taken=True)
        with pytest.raises(
            ResourceExhaustedError, match="Unable to generate unique slug after 1000 attempts"
        ) as exc:
            await service.generate_unique_slug("Busy", checker)
        assert len(checker.calls) == 1000
        assert checker.calls[-1][0] == "busy-999"
        assert exc.value.attempts == 1000

    @pytest.mark.asyncio
    async def test_attempt_limit_from_rules(self) -> None:
        service = ContentDomainService(DomainRules(slug=SlugRules(max_attempts=3)))
        checker = SlugRegistry(always_taken=True)
        with pytest.raises(ResourceExhaustedError, match="after 3 attempts"):
            await service.generate_unique_slug("Busy", checker)
        assert len(checker.calls) == 3

    @pytest.mark.asyncio
    async def test_unusable_title(self, service: ContentDomainService) -> None:
        checker = SlugRegistry()
        with pytest.raises(ValidationError):
            await service.generate_unique_slug("???", checker)
        assert checker.calls == []

    @pytest.mark.asyncio
    async def test_taken_max_length_base_cannot_be_suffixed(
        self, service: ContentDomainService
    ) -> None:
        """A 100-char base slug has no room for "-1"; the suffix fails validation."""
        checker = SlugRegistry({"a" * 100})
        with pytest.raises(ValidationError, match="Slug must be at most 100 characters"):
            await service.generate_unique_slug("a" * 100, checker)
        assert checker.calls == [("a" * 100, None)]


class TestValidateSlugUniqueness:
    """Conflict detection."""

    @pytest.mark.asyncio
    async def test_free_slug_passes(self, service: ContentDomainService) -> None:
        await service.validate_slug_uniqueness(ContentSlug.create("free"), SlugRegistry())

    @pytest.mark.asyncio
    async def test_taken_slug_conflicts(self, service: ContentDomainService) -> None:
        with pytest.raises(ConflictError, match='Slug "taken" is already in use') as exc:
            await service.validate_slug_uniqueness("taken", SlugRegistry({"taken"}))
        assert exc.value.field == "slug"


class TestFieldRules:
    """Synchronous content rules exposed by the service."""

    def test_suggest_slug(self, service: ContentDomainService) -> None:
        assert service.suggest_slug_from_title(ContentTitle.create("Hello World")).value == (
            "hello-world"
        )

    def test_matching_slug_is_consistent(self, service: ContentDomainService) -> None:
        service.validate_title_and_slug_consistency(
            ContentTitle.create("Hello World"), ContentSlug.create("hello-world")
        )

    def test_custom_slug_too_short(self, service: ContentDomainService) -> None:
        with pytest.raises(ValidationError, match="Custom slug must be at least 3 characters long"):
            service.validate_title_and_slug_consistency(
                ContentTitle.create("Hello World"), ContentSlug.create("hi")
            )

    def test_content_fields(self, service: ContentDomainService) -> None:
        service.validate_content_fields(
            ContentTitle.create("Hello World"), ContentSlug.create("custom-slug"), "body"
        )

    def test_content_fields_body_too_long(self, service: ContentDomainService) -> None:
        with pytest.raises(ValidationError, match="Content body cannot exceed 50,000 characters"):
            service.validate_content_fields("Hello", "hello", "a" * 50_001)

    def test_publication(self, service: ContentDomainService) -> None:
        service.validate_content_for_publication(ContentTitle.create("T"), "Long enough body")
        with pytest.raises(ValidationError, match="at least 10 characters"):
            service.validate_content_for_publication(ContentTitle.create("T"), "short")

    def test_media_and_seo(self, service: ContentDomainService) -> None:
        service.validate_media_for_content("photo.jpg")
        service.validate_slug_for_seo(ContentSlug.create("good-slug"))
        with pytest.raises(ValidationError, match="File type .exe is not allowed"):
            service.validate_media_for_content("virus.EXE")
        with pytest.raises(ValidationError, match="should not exceed 60"):
            service.validate_slug_for_seo(ContentSlug.create("a" * 61))


class TestExcerpts:
    """Excerpts sized by excerpt.default_length."""

    def test_default_length_from_rules(self) -> None:
        service = ContentDomainService(DomainRules(excerpt=ExcerptRules(default_length=20)))
        body = ContentBody.create("word " * 100)
        assert service.generate_excerpt(body) == "word word word word..."

    def test_default_rules_use_200(self, service: ContentDomainService) -> None:
        body = ContentBody.create("word " * 100)
        excerpt = service.generate_excerpt(body)
        assert excerpt.endswith("...")
        assert len(excerpt) <= 203

    def test_explicit_length_overrides_rules(self) -> None:
        service = ContentDomainService(DomainRules(excerpt=ExcerptRules(default_length=20)))
        body = ContentBody.create("word " * 100)
        assert service.generate_excerpt(body, max_length=10) == "word word..."

    def test_content_entity(self, draft: Content) -> None:
        service = ContentDomainService(DomainRules(excerpt=ExcerptRules(default_length=10)))
        assert service.generate_excerpt(draft) == "This is..."

    def test_short_body_unchanged(self, service: ContentDomainService, draft: Content) -> None:
        assert service.generate_excerpt(draft) == "This is the body of the post."


class TestCreateContentService:
    """Service factory."""

    def test_explicit_rules(self) -> None:
        rules = DomainRules(slug=SlugRules(max_attempts=5))
        assert create_content_service(rules).rules.max_slug_attempts == 5

    def test_defaults_without_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CMS_RULES_PATH", raising=False)
        assert create_content_service().rules == DomainRules()
