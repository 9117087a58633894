"""Read-only state shared by every per-directory synthesis step."""

from __future__ import annotations

import dataclasses
import logging
import posixpath
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping

from llmsindex.config import AppConfig
from llmsindex.customization.store import CustomizationStore
from llmsindex.index.grouper import DirectoryTree
from llmsindex.models import FileRecord, Link, TopicCount
from llmsindex.synthesis.links import LinkBuilder
from llmsindex.utils import paths
from llmsindex.utils.text import comparable, title_case

LOGGER = logging.getLogger(__name__)

LANDING_STEMS = ("index", "overview")
GENERIC_TITLES = frozenset(
    comparable(title)
    for title in (
        "Overview",
        "Index",
        "Introduction",
        "Home",
        "Documentation",
        "Contents",
        "Table of contents",
        "Get started",
        "Getting started",
    )
)


@dataclass(slots=True)
class IndexContext:
    """Everything built once per run, passed by reference into each step."""

    config: AppConfig
    root: Path
    index: Mapping[str, FileRecord]
    store: CustomizationStore
    grouping: Mapping[str, List[FileRecord]]
    tree: DirectoryTree
    counts: Dict[str, TopicCount]
    links: LinkBuilder

    def output_path(self, directory: str, filename: str | None = None) -> Path:
        target = self.root / directory if directory else self.root
        return target / (filename or self.config.index_filename)

    def landing_document(self, directory: str) -> FileRecord | None:
        """The directory's own index/overview document, if it has one."""
        for record in self.grouping.get(directory, ()):
            if record.directory != directory:
                continue
            stem = posixpath.splitext(record.name)[0].lower()
            if stem in LANDING_STEMS:
                return record
        return None

    def title(self, directory: str) -> str:
        override = self.store.title_override(directory)
        if override:
            return override
        landing = self.landing_document(directory)
        if landing is not None and comparable(landing.title) not in GENERIC_TITLES:
            return landing.title
        name = posixpath.basename(directory) if directory else self.root.name
        return title_case(name)

    def sorted_children(self, directory: str) -> List[str]:
        """Child index directories ordered by display title, then path."""
        return sorted(
            self.tree.children(directory), key=lambda child: (self.title(child).lower(), child)
        )

    def description(self, directory: str) -> str | None:
        override = self.store.description_override(directory)
        if override:
            return override
        landing = self.landing_document(directory)
        return landing.description if landing is not None and landing.description else None

    def apply_node_override(self, directory: str, record: FileRecord) -> FileRecord:
        """Copy of record with rename/description overrides applied."""
        override = None
        if paths.is_within(record.relative_path, directory):
            override = self.store.node_override(
                directory, paths.relative_to(record.relative_path, directory)
            )
        if override is None and record.directory != directory:
            override = self.store.node_override(record.directory, record.name)
        if override is None:
            return record
        return dataclasses.replace(
            record,
            title=override.rename or record.title,
            description=override.description or record.description,
        )

    def document_link(self, record: FileRecord, from_directory: str) -> Link:
        return Link(
            title=record.title,
            url=self.links.url(record.relative_path, from_directory),
            description=record.description,
        )

    def index_link(self, directory: str, from_directory: str, *, short: bool = False) -> Link:
        """Link to a directory's primary index annotated with its topic metric."""
        count = self.counts.get(directory)
        description = count.display() if count is not None else ""
        short_description = self.store.short_description(directory) if short else None
        if short_description and description:
            description = f"{short_description} ({description})"
        elif short_description:
            description = short_description
        return Link(
            title=self.title(directory),
            url=self.links.index_url(directory, from_directory, self.config.index_filename),
            description=description,
        )

    def lookup_document(self, target: str) -> FileRecord | None:
        target = paths.normalize(target)
        record = self.index.get(target)
        if record is None and not target.lower().endswith(".md"):
            record = self.index.get(f"{target}.md")
        return record

    def resolve_entry(self, target: str, from_directory: str) -> tuple[Link, str] | None:
        """Resolve a root-relative reference to a link and the key it refers to.

        Documents win over directories; a directory resolves to its primary
        index only when it produces one. Anything else resolves to None.
        """
        target = paths.normalize(target)
        record = self.lookup_document(target)
        if record is not None:
            record = self.apply_node_override(record.directory, record)
            return self.document_link(record, from_directory), record.relative_path
        if target in self.tree:
            return self.index_link(target, from_directory), target
        LOGGER.debug("Reference %r from %r resolves to nothing", target, from_directory)
        return None
