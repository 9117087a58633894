"""Text helpers for titles and metadata values."""

from __future__ import annotations

import re
from typing import Iterable

_WORD_SPLIT_RE = re.compile(r"[-_\s]+")
_NON_ALNUM_RE = re.compile(r"[^0-9a-z]+")


def title_case(name: str) -> str:
    """Turn a file or directory name into a display title.

    ``getting-started`` becomes ``Getting Started``; an empty name becomes
    ``Documentation``.
    """
    words = [word for word in _WORD_SPLIT_RE.split(name) if word]
    if not words:
        return "Documentation"
    return " ".join(word[0].upper() + word[1:].lower() for word in words)


def unquote(value: str) -> str:
    """Strip one pair of matching surrounding quotes."""
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def comparable(text: str) -> str:
    """Reduce text to lowercase alphanumerics for equivalence checks."""
    return _NON_ALNUM_RE.sub("", text.lower())


def pluralize(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def normalize_whitespace(lines: Iterable[str]) -> str:
    """Collapse whitespace and join lines."""
    return "\n".join(line.strip() for line in lines if line.strip())
