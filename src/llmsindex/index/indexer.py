"""Topic document discovery."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from llmsindex.config import AppConfig
from llmsindex.ingestion.markdown_loader import extract_metadata
from llmsindex.ingestion.toc_loader import load_toc_records
from llmsindex.models import FileRecord
from llmsindex.utils.files import iter_markdown_paths
from llmsindex.utils.paths import relative_key

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class IndexStats:
    indexed: int = 0
    skipped: int = 0
    from_toc: int = 0
    skipped_files: list[Path] = field(default_factory=list)

    def skip(self, path: Path) -> None:
        self.skipped += 1
        self.skipped_files.append(path)


class DocumentIndexer:
    """Builds the path-keyed index of topic documents under a tree root."""

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or AppConfig()
        self.stats = IndexStats()

    def build(self, root: Path) -> Dict[str, FileRecord]:
        root = Path(root).resolve()
        if not root.is_dir():
            raise NotADirectoryError(f"Directory not found: {root}")

        self.stats = IndexStats()
        index: Dict[str, FileRecord] = {}
        paths = iter_markdown_paths(
            root,
            excluded_dirs=self.config.excluded_dirs,
            excluded_filenames=self.config.excluded_filenames,
        )
        for path in paths:
            metadata = extract_metadata(path, max_lines=self.config.metadata_scan_lines)
            if metadata is None:
                self.stats.skip(path)
                continue
            key = relative_key(path, root)
            index[key] = FileRecord(
                relative_path=key,
                path=path,
                title=metadata.title,
                description=metadata.description,
            )
            self.stats.indexed += 1

        if self.config.use_toc:
            self.stats.from_toc = load_toc_records(
                root,
                index,
                excluded_dirs=self.config.excluded_dirs,
                max_lines=self.config.metadata_scan_lines,
            )
            self.stats.indexed += self.stats.from_toc

        LOGGER.info(
            "Indexed %d documents under %s (%d skipped)",
            self.stats.indexed,
            root,
            self.stats.skipped,
        )
        return index
