"""Legacy ``toc.yml`` navigation files as an extra discovery source.

Each toc item may carry ``name``, ``href`` and nested ``items``. Items that
have children name the category of everything beneath them.
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Any, Collection, Dict, Iterator, List, Tuple

import yaml

from llmsindex.ingestion.markdown_loader import extract_metadata
from llmsindex.models import FileRecord
from llmsindex.utils.files import iter_named_files
from llmsindex.utils.paths import relative_key

LOGGER = logging.getLogger(__name__)

TOC_FILENAME = "toc.yml"


def load_toc_items(path: Path) -> List[Dict[str, Any]]:
    """Parse a toc file into its top-level item list.

    Accepts both ``{items: [...]}`` and a bare list. Raises ``ValueError`` for
    anything else.
    """
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("items") or []
    if not isinstance(data, list):
        raise ValueError(f"unexpected toc structure in {path}")
    return [item for item in data if isinstance(item, dict)]


def iter_toc_references(
    items: List[Dict[str, Any]], category: str | None = None
) -> Iterator[Tuple[str, str | None, str | None]]:
    """Yield ``(href, name, category)`` for every Markdown reference."""
    for item in items:
        children = [child for child in item.get("items") or [] if isinstance(child, dict)]
        name = item.get("name")
        current = name if children and name else category
        href = item.get("href")
        if isinstance(href, str) and href.lower().endswith(".md"):
            yield href, name, current
        if children:
            yield from iter_toc_references(children, current)


def load_toc_records(
    root: Path,
    index: Dict[str, FileRecord],
    *,
    excluded_dirs: Collection[str] = (),
    max_lines: int = 30,
) -> int:
    """Merge toc references under root into index.

    Unknown documents are added with the toc item name as their title, known
    ones only gain a category. Returns the number of records added.
    """
    root = root.resolve()
    added = 0
    for toc_path in iter_named_files(root, TOC_FILENAME, excluded_dirs=excluded_dirs):
        try:
            items = load_toc_items(toc_path)
        except (yaml.YAMLError, ValueError, OSError) as exc:
            LOGGER.warning("Skipping unreadable toc %s: %s", toc_path.relative_to(root), exc)
            continue

        for href, name, category in iter_toc_references(items):
            target = (toc_path.parent / href.split("#", 1)[0]).resolve()
            if not target.is_file() or not target.is_relative_to(root):
                continue
            key = relative_key(target, root)
            existing = index.get(key)
            if existing is None:
                metadata = extract_metadata(target, max_lines=max_lines)
                if metadata is None:
                    continue
                index[key] = FileRecord(
                    relative_path=key,
                    path=target,
                    title=name or metadata.title,
                    description=metadata.description,
                    category=category,
                )
                added += 1
            elif existing.category is None and category is not None:
                index[key] = dataclasses.replace(existing, category=category)
    return added
