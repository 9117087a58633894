"""Link target construction for generated indices."""

from __future__ import annotations

import posixpath
from pathlib import Path

from llmsindex.utils import paths
from llmsindex.utils.files import find_git_root


class LinkBuilder:
    """Turns root-relative paths into link targets.

    With a base URL, targets are absolute: the base URL followed by the path
    relative to the repository root (the tree root when no ``.git`` is found
    above it). Without one, targets are relative to the directory of the
    document holding the link.
    """

    def __init__(
        self,
        root: Path,
        *,
        base_url: str | None = None,
        repository_root: Path | None = None,
    ) -> None:
        self.root = Path(root).resolve()
        self.base_url = base_url.rstrip("/") if base_url else None
        self._prefix = ""
        if self.base_url:
            repo = repository_root or find_git_root(self.root) or self.root
            self._prefix = paths.relative_key(self.root, Path(repo).resolve())

    def url(self, target: str, from_directory: str) -> str:
        target = paths.normalize(target)
        if self.base_url:
            return f"{self.base_url}/{paths.join(self._prefix, target)}"
        start = from_directory or "."
        return posixpath.relpath(target or ".", start)

    def index_url(self, directory: str, from_directory: str, filename: str) -> str:
        return self.url(paths.join(directory, filename), from_directory)
