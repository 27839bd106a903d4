"""
cms-core: content management domain layer.

Value objects, aggregates and the content domain service for a headless CMS
with content types, content items and media stored in Cloudflare R2.
"""

from cms_core.errors import (
    ConflictError,
    DomainError,
    ResourceExhaustedError,
    StateError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "ConflictError",
    "DomainError",
    "ResourceExhaustedError",
    "StateError",
    "ValidationError",
    "__version__",
]
