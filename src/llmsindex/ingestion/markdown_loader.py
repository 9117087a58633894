"""Markdown metadata extraction.

Only a bounded prefix of each document is read: enough to hold the leading
metadata block and the first heading of typical topic documents.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import islice
from pathlib import Path
from typing import Dict, List, Tuple

from llmsindex.utils.text import title_case, unquote

LOGGER = logging.getLogger(__name__)

METADATA_MARKER = "---"


@dataclass(slots=True)
class DocumentMetadata:
    """Title and description pulled from a topic document."""

    title: str
    description: str = ""


def read_prefix(path: Path, max_lines: int) -> List[str]:
    with path.open("r", encoding="utf-8-sig", errors="replace") as handle:
        return [line.rstrip("\r\n") for line in islice(handle, max_lines)]


def _front_matter_bounds(lines: List[str]) -> Tuple[int, int]:
    """Return (first field line, first line after the block).

    Both are 0 when the document has no leading metadata block. An
    unterminated block runs to the end of the scanned prefix.
    """
    for index, line in enumerate(lines):
        stripped = line.strip()
        if not stripped:
            continue
        if stripped != METADATA_MARKER:
            return 0, 0
        for end in range(index + 1, len(lines)):
            if lines[end].strip() == METADATA_MARKER:
                return index + 1, end + 1
        return index + 1, len(lines)
    return 0, 0


def parse_front_matter(lines: List[str]) -> Dict[str, str]:
    """Return the top-level ``key: value`` pairs of the metadata block.

    Keys are lowercased; values lose one pair of surrounding quotes.
    """
    start, end = _front_matter_bounds(lines)
    fields: Dict[str, str] = {}
    for line in lines[start:end]:
        stripped = line.strip()
        if stripped == METADATA_MARKER or line[:1].isspace() or ":" not in stripped:
            continue
        key, _, value = stripped.partition(":")
        key = key.strip().lower()
        if key and key not in fields:
            fields[key] = unquote(value)
    return fields


def first_heading(lines: List[str]) -> str | None:
    _, end = _front_matter_bounds(lines)
    for line in lines[end:]:
        stripped = line.strip()
        if stripped.startswith("# "):
            return stripped[2:].strip() or None
    return None


def extract_metadata(path: Path, *, max_lines: int = 30) -> DocumentMetadata | None:
    """Read title/description from a document, or None if it is unreadable."""
    try:
        lines = read_prefix(path, max_lines)
    except OSError as exc:
        LOGGER.debug("Skipping unreadable document %s: %s", path, exc)
        return None

    fields = parse_front_matter(lines)
    title = fields.get("title") or first_heading(lines) or title_case(path.stem)
    return DocumentMetadata(title=title, description=fields.get("description", ""))
