"""
Content component - content rules, slug generation and repository ports.
"""

from .component import ContentDomainService, create_content_service
from .ports import (
    ContentRepoPort,
    ContentTypeRepoPort,
    MediaRepoPort,
    SlugExistenceChecker,
    slug_checker_for,
)
from .validation import (
    validate_content_fields,
    validate_content_for_publication,
    validate_media_for_content,
    validate_slug_for_seo,
    validate_title_and_slug_consistency,
)

__all__ = [
    # Service
    "ContentDomainService",
    "create_content_service",
    # Ports
    "ContentRepoPort",
    "ContentTypeRepoPort",
    "MediaRepoPort",
    "SlugExistenceChecker",
    "slug_checker_for",
    # Pure rules
    "validate_content_fields",
    "validate_content_for_publication",
    "validate_media_for_content",
    "validate_slug_for_seo",
    "validate_title_and_slug_consistency",
]
