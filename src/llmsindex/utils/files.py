"""Utility helpers for working with files."""

from __future__ import annotations

from pathlib import Path
from typing import Collection, Iterator


def _is_excluded(path: Path, root: Path, excluded_dirs: Collection[str]) -> bool:
    parents = path.relative_to(root).parts[:-1]
    return any(part in excluded_dirs for part in parents)


def iter_markdown_paths(
    root: Path,
    *,
    excluded_dirs: Collection[str] = (),
    excluded_filenames: Collection[str] = (),
) -> Iterator[Path]:
    """Yield Markdown documents under root, skipping excluded dirs and names."""
    if root.is_file():
        if root.suffix.lower() == ".md":
            yield root
        return
    for item in sorted(root.rglob("*.md")):
        if not item.is_file():
            continue
        if item.name.lower() in excluded_filenames:
            continue
        if _is_excluded(item, root, excluded_dirs):
            continue
        yield item


def iter_named_files(
    root: Path, pattern: str, *, excluded_dirs: Collection[str] = ()
) -> Iterator[Path]:
    """Yield files matching a glob pattern anywhere below root."""
    for item in sorted(root.rglob(pattern)):
        if item.is_file() and not _is_excluded(item, root, excluded_dirs):
            yield item


def find_git_root(start: Path) -> Path | None:
    """Return the closest ancestor of start containing a ``.git`` entry."""
    current = start.resolve()
    for candidate in (current, *current.parents):
        if (candidate / ".git").exists():
            return candidate
    return None
