"""
Content business rules as pure functions over plain strings.

Each function raises ValidationError on the first violated rule and returns
None otherwise. Limits that are policy rather than type invariants come from
DomainRules; defaults apply when no rules are passed.
"""

from __future__ import annotations

from cms_core.domain.content_values import BODY_MAX_LENGTH, SLUG_MAX_LENGTH, TITLE_MAX_LENGTH
from cms_core.domain.slugify import is_slug, slugify
from cms_core.errors import ValidationError
from cms_core.rules.models import DomainRules

_DEFAULT_RULES = DomainRules()


def validate_title_and_slug_consistency(
    title: str, slug: str, rules: DomainRules = _DEFAULT_RULES
) -> None:
    """
    Check a slug against the slug derived from the title.

    A slug equal to the derived one is always accepted. A custom slug must
    be URL-friendly and at least slug.custom_min_length long.
    """
    if slug == slugify(title):
        return
    if len(slug) < rules.slug.custom_min_length:
        raise ValidationError(
            f"Custom slug must be at least {rules.slug.custom_min_length} characters long",
            field="slug",
        )
    if not is_slug(slug):
        raise ValidationError("Custom slug must be URL-friendly", field="slug")


def validate_content_fields(
    title: str,
    slug: str,
    body: str | None = None,
    rules: DomainRules = _DEFAULT_RULES,
) -> None:
    """Basic field limits, then title/slug consistency."""
    if not title.strip():
        raise ValidationError("Content title cannot be empty", field="title")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            f"Content title cannot exceed {TITLE_MAX_LENGTH} characters", field="title"
        )
    if len(slug) > SLUG_MAX_LENGTH:
        raise ValidationError(
            f"Content slug cannot exceed {SLUG_MAX_LENGTH} characters", field="slug"
        )
    if not slug:
        raise ValidationError("Content slug cannot be empty", field="slug")
    if body is not None and len(body) > BODY_MAX_LENGTH:
        raise ValidationError(
            f"Content body cannot exceed {BODY_MAX_LENGTH:,} characters", field="body"
        )

    validate_title_and_slug_consistency(title, slug, rules)


def validate_content_for_publication(
    title: str, body: str | None, rules: DomainRules = _DEFAULT_RULES
) -> None:
    """Publication guard: a title and a body of minimum length."""
    if not title.strip():
        raise ValidationError("Cannot publish content without a title", field="title")
    if not body or not body.strip():
        raise ValidationError("Cannot publish content without body content", field="body")

    min_length = rules.publication.min_body_length
    if len(body) < min_length:
        raise ValidationError(
            f"Content body must be at least {min_length} characters long for publication",
            field="body",
        )


def validate_media_for_content(filename: str, rules: DomainRules = _DEFAULT_RULES) -> None:
    """Reject blank, over-long and executable-type filenames."""
    if not filename or not filename.strip():
        raise ValidationError("Media filename cannot be empty", field="filename")

    dot = filename.rfind(".")
    if dot != -1:
        extension = filename[dot:].lower()
        if extension in rules.media.blocked_extensions:
            raise ValidationError(f"File type {extension} is not allowed", field="filename")

    max_length = rules.media.max_filename_length
    if len(filename) > max_length:
        raise ValidationError(
            f"Media filename cannot exceed {max_length} characters", field="filename"
        )


def validate_slug_for_seo(slug: str, rules: DomainRules = _DEFAULT_RULES) -> None:
    """SEO checks: length window, no doubled or edge hyphens."""
    if len(slug) > rules.seo.slug_max_length:
        raise ValidationError(
            f"For SEO purposes, slug should not exceed {rules.seo.slug_max_length} characters",
            field="slug",
        )
    if len(slug) < rules.seo.slug_min_length:
        raise ValidationError(
            f"For SEO purposes, slug should be at least {rules.seo.slug_min_length} characters",
            field="slug",
        )
    if "--" in slug:
        raise ValidationError("Slug should not contain consecutive hyphens", field="slug")
    if slug.startswith("-") or slug.endswith("-"):
        raise ValidationError("Slug should not start or end with a hyphen", field="slug")
