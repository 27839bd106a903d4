"""
Canonical title -> slug transform.

Every title-derived slug in the package goes through slugify(); there is no
second implementation.
"""

from __future__ import annotations

import re
import unicodedata

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

_UNSAFE = re.compile(r"[^\w\s-]", re.ASCII)
_SEPARATORS = re.compile(r"[\s_-]+", re.ASCII)
_EDGE_HYPHENS = re.compile(r"^-+|-+$")


def _fold_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def slugify(title: str) -> str:
    """
    Convert a title into a URL-safe slug.

    Accented letters are folded to their ASCII base letter, any other
    non-ASCII character is dropped.

    Examples:
        >>> slugify("My Blog Post!")
        'my-blog-post'
        >>> slugify("Hello   World & More")
        'hello-world-more'
        >>> slugify("Café & Résumé")
        'cafe-resume'

    Returns:
        The slug, or an empty string when the title has no usable characters.
    """
    text = _fold_accents(title).lower().strip()
    text = _UNSAFE.sub("", text)
    text = _SEPARATORS.sub("-", text)
    return _EDGE_HYPHENS.sub("", text)


def is_slug(value: str) -> bool:
    """Check if value matches the slug grammar (no length check)."""
    return SLUG_PATTERN.fullmatch(value) is not None
