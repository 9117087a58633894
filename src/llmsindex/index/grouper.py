"""Effective directory grouping and the in-memory directory tree."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping

from llmsindex.customization.store import CustomizationStore
from llmsindex.models import FileRecord
from llmsindex.utils import paths

LOGGER = logging.getLogger(__name__)


def effective_directory(record: FileRecord, store: CustomizationStore) -> str:
    """Directory a document is listed under after promotion rules."""
    target = store.promotion_target(record.relative_path)
    return record.directory if target is None else target


def group_by_directory(
    index: Mapping[str, FileRecord], store: CustomizationStore
) -> Dict[str, List[FileRecord]]:
    """Group indexed documents by effective directory, dropping filtered ones.

    Filtered documents stay in the index itself so that explicit includes can
    still resolve them.
    """
    grouping: Dict[str, List[FileRecord]] = {}
    filtered = 0
    for key in sorted(index):
        record = index[key]
        if store.is_filtered(record.relative_path):
            filtered += 1
            continue
        directory = effective_directory(record, store)
        if directory != record.directory:
            LOGGER.debug("Promoted %s to %r", record.relative_path, directory)
        grouping.setdefault(directory, []).append(record)

    if filtered:
        LOGGER.debug("Filtered %d documents", filtered)
    return grouping


class DirectoryTree:
    """Directories that produce an index, with truncation-based parent lookup."""

    def __init__(self, directories: Iterable[str]) -> None:
        self._directories = {paths.normalize(item) for item in directories}
        self._children: Dict[str, List[str]] = {}
        for directory in self._directories:
            parent = self.parent(directory)
            if parent is not None:
                self._children.setdefault(parent, []).append(directory)
        for children in self._children.values():
            children.sort()

    def __contains__(self, directory: str) -> bool:
        return directory in self._directories

    def __iter__(self):
        return iter(sorted(self._directories))

    def __len__(self) -> int:
        return len(self._directories)

    def parent(self, directory: str) -> str | None:
        """Closest indexed ancestor of directory."""
        for candidate in reversed(paths.ancestors(directory)):
            if candidate in self._directories:
                return candidate
        return None

    def children(self, directory: str) -> List[str]:
        return list(self._children.get(directory, []))

    def is_leaf(self, directory: str) -> bool:
        return not self._children.get(directory)

    def bottom_up(self) -> List[str]:
        return paths.bottom_up(self._directories)
