"""Helpers for root-relative POSIX paths.

Directories are keyed by their path relative to the tree root, using forward
slashes, with the root itself as the empty string.
"""

from __future__ import annotations

import posixpath
from pathlib import Path
from typing import Iterable


def normalize(path: str) -> str:
    path = path.replace("\\", "/").strip()
    if not path:
        return ""
    normalized = posixpath.normpath(path).lstrip("/")
    return "" if normalized == "." else normalized


def relative_key(path: Path, root: Path) -> str:
    return normalize(path.relative_to(root).as_posix())


def join(directory: str, child: str) -> str:
    return normalize(posixpath.join(directory, child)) if directory else normalize(child)


def parent(path: str) -> str | None:
    """Parent directory key, or None for the root."""
    if not path:
        return None
    return posixpath.dirname(path)


def depth(path: str) -> int:
    return 0 if not path else path.count("/") + 1


def move_up(directory: str, levels: int) -> str:
    """Drop trailing segments, never past the root."""
    parts = directory.split("/") if directory else []
    keep = max(len(parts) - max(levels, 0), 0)
    return "/".join(parts[:keep])


def ancestors(path: str) -> list[str]:
    """Ancestor directory keys of path, root first, excluding path itself."""
    result: list[str] = []
    current = parent(path)
    while current is not None:
        result.append(current)
        current = parent(current)
    return result[::-1]


def is_within(path: str, directory: str) -> bool:
    return not directory or path == directory or path.startswith(directory + "/")


def relative_to(path: str, directory: str) -> str:
    if not directory:
        return path
    if path == directory:
        return ""
    return path[len(directory) + 1 :]


def common_root(paths: Iterable[str]) -> str:
    split = [path.split("/") if path else [] for path in paths]
    if not split:
        return ""
    prefix: list[str] = []
    for segments in zip(*split):
        if len(set(segments)) != 1:
            break
        prefix.append(segments[0])
    return "/".join(prefix)


def bottom_up(paths: Iterable[str]) -> list[str]:
    """Sort deepest first, ties by path, so children precede parents."""
    return sorted(paths, key=lambda item: (-depth(item), item))
