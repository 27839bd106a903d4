"""
Markdown helpers for content bodies.

strip_markdown() turns a markdown body into plain text for excerpts;
has_markdown() detects whether a body uses markdown syntax at all.
"""

from __future__ import annotations

import re

# Detection patterns (any match means the body is markdown)
_MARKDOWN_PATTERNS = (
    re.compile(r"#+\s"),
    re.compile(r"\*\*.*\*\*"),
    re.compile(r"\*.*\*"),
    re.compile(r"```[\s\S]*?```"),
    re.compile(r"`.*`"),
    re.compile(r"\[.*\]\(.*\)"),
    re.compile(r"^\s*[-*+]\s", re.MULTILINE),
    re.compile(r"^\s*\d+\.\s", re.MULTILINE),
)

# Stripping rules, applied in order
_FENCED_CODE = re.compile(r"```.*?```", re.DOTALL)
_IMAGE = re.compile(r"!\[([^\]]*)\]\([^)]*\)")
_LINK = re.compile(r"\[([^\]]+)\]\([^)]*\)")
_INLINE_CODE = re.compile(r"`([^`]*)`")
_HEADING = re.compile(r"^\s{0,3}#{1,6}\s+", re.MULTILINE)
_BLOCKQUOTE = re.compile(r"^\s{0,3}>\s?", re.MULTILINE)
_RULE = re.compile(r"^\s*([-*_])(?:\s*\1){2,}\s*$", re.MULTILINE)
_LIST_MARKER = re.compile(r"^\s*(?:[-*+]|\d+\.)\s+", re.MULTILINE)
_STRONG = re.compile(r"(\*\*|__)(.+?)\1")
_EMPHASIS_STAR = re.compile(r"\*(.+?)\*")
_EMPHASIS_UNDERSCORE = re.compile(r"(?<!\w)_(.+?)_(?!\w)")
_STRIKE = re.compile(r"~~(.+?)~~")
_WHITESPACE = re.compile(r"\s+")


def has_markdown(text: str) -> bool:
    """Check if text contains markdown syntax."""
    return any(pattern.search(text) for pattern in _MARKDOWN_PATTERNS)


def strip_markdown(text: str) -> str:
    """
    Reduce markdown to plain text.

    Fenced code blocks are dropped entirely, links and images keep their
    visible text, and all whitespace runs collapse to a single space.
    """
    text = _FENCED_CODE.sub(" ", text)
    text = _IMAGE.sub(r"\1", text)
    text = _LINK.sub(r"\1", text)
    text = _INLINE_CODE.sub(r"\1", text)
    text = _RULE.sub("", text)
    text = _HEADING.sub("", text)
    text = _BLOCKQUOTE.sub("", text)
    text = _LIST_MARKER.sub("", text)
    text = _STRONG.sub(r"\2", text)
    text = _EMPHASIS_STAR.sub(r"\1", text)
    text = _EMPHASIS_UNDERSCORE.sub(r"\1", text)
    text = _STRIKE.sub(r"\1", text)
    return _WHITESPACE.sub(" ", text).strip()


def truncate_at_word(text: str, max_length: int) -> str:
    """
    Cut text to max_length at the last word boundary, appending "...".

    Text that already fits is returned unchanged. Without a space to cut at,
    the text is cut hard at max_length.
    """
    if len(text) <= max_length:
        return text

    truncated = text[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > 0:
        return truncated[:last_space] + "..."
    return truncated + "..."
