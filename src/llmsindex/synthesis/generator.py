"""Index generation pipeline for a whole tree."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from llmsindex.config import AppConfig
from llmsindex.customization.store import CustomizationStore
from llmsindex.index.grouper import DirectoryTree, group_by_directory
from llmsindex.index.indexer import DocumentIndexer
from llmsindex.index.topics import aggregate_topic_counts
from llmsindex.models import GeneratedDocument
from llmsindex.synthesis.assembler import ContentAssembler
from llmsindex.synthesis.budget import BudgetReport, BudgetStatus, classify
from llmsindex.synthesis.context import IndexContext
from llmsindex.synthesis.links import LinkBuilder
from llmsindex.synthesis.navigation import NavigationSynthesizer, find_gap_directories
from llmsindex.utils import paths
from llmsindex.utils.files import find_git_root

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class GenerationStats:
    primary: int = 0
    extended: int = 0
    navigation: int = 0
    failed: int = 0
    failed_directories: List[str] = field(default_factory=list)
    over_soft: List[BudgetReport] = field(default_factory=list)
    over_hard: List[BudgetReport] = field(default_factory=list)
    documents: List[GeneratedDocument] = field(default_factory=list)

    @property
    def generated(self) -> int:
        return len(self.documents)

    def add(self, document: GeneratedDocument) -> None:
        if document.kind == "primary":
            self.primary += 1
        elif document.kind == "extended":
            self.extended += 1
        else:
            self.navigation += 1
        self.documents.append(document)

    def report(self, report: BudgetReport) -> None:
        if report.status is BudgetStatus.OVER_HARD:
            self.over_hard.append(report)
        elif report.status is BudgetStatus.OVER_SOFT:
            self.over_soft.append(report)

    def fail(self, directory: str) -> None:
        self.failed += 1
        self.failed_directories.append(directory)


class IndexGenerator:
    """Coordinates discovery, aggregation, assembly and writing."""

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or AppConfig()

    def build_context(self, root: Path) -> IndexContext:
        root = Path(root).resolve()
        index = DocumentIndexer(self.config).build(root)
        store = CustomizationStore.load(
            root,
            self.config.customization_filename,
            excluded_dirs=self.config.excluded_dirs,
        )
        grouping = group_by_directory(index, store)
        content = [directory for directory, records in grouping.items() if records]
        # a repository at or above the tree root clamps to the tree root
        boundary = "" if find_git_root(root) is not None else None
        gaps = find_gap_directories(content, boundary=boundary)
        tree = DirectoryTree([*content, *gaps])
        counts = aggregate_topic_counts(tree, grouping)
        return IndexContext(
            config=self.config,
            root=root,
            index=index,
            store=store,
            grouping=grouping,
            tree=tree,
            counts=counts,
            links=LinkBuilder(root, base_url=self.config.base_url),
        )

    def generate(self, root: Path, *, dry_run: bool = False) -> GenerationStats:
        """Generate every index under root.

        A failing directory is logged and counted; the others still produce
        their documents.
        """
        context = self.build_context(root)
        stats = GenerationStats()
        assembler = ContentAssembler(context)
        navigator = NavigationSynthesizer(context)

        for directory in context.tree:
            records = context.grouping.get(directory)
            if not records:
                continue
            try:
                result = assembler.assemble(directory, records)
                documents = [result.primary]
                if result.extended is not None:
                    documents.append(result.extended)
                self._emit(documents, stats, dry_run)
            except Exception as exc:
                LOGGER.error("Failed to generate index for %s: %s", directory or ".", exc)
                stats.fail(directory)
                continue
            stats.report(
                BudgetReport(
                    directory=directory,
                    lines=result.primary.estimated_lines,
                    topics=len(records),
                    status=result.status,
                )
            )

        gaps = [directory for directory in context.tree if not context.grouping.get(directory)]
        for directory in paths.bottom_up(gaps):
            try:
                document = navigator.render(directory)
                self._emit([document], stats, dry_run)
            except Exception as exc:
                LOGGER.error("Failed to generate navigation for %s: %s", directory or ".", exc)
                stats.fail(directory)
                continue
            status = classify(
                document.estimated_lines,
                soft=self.config.soft_budget,
                hard=self.config.hard_budget,
                leaf=False,
            )
            stats.report(
                BudgetReport(
                    directory=directory,
                    lines=document.estimated_lines,
                    topics=0,
                    status=status,
                )
            )

        LOGGER.info(
            "Generated %d documents (%d primary, %d extended, %d navigation), %d failed",
            stats.generated,
            stats.primary,
            stats.extended,
            stats.navigation,
            stats.failed,
        )
        return stats

    def _emit(
        self, documents: List[GeneratedDocument], stats: GenerationStats, dry_run: bool
    ) -> None:
        if not dry_run:
            for document in documents:
                document.path.write_text(document.content, encoding="utf-8")
        for document in documents:
            stats.add(document)


def copy_root_index(
    root: Path, destination: Path, config: AppConfig | None = None
) -> Path | None:
    """Copy the generated root index into another directory.

    Relative links only stay valid when a base URL made them absolute.
    """
    config = config or AppConfig()
    source = Path(root) / config.index_filename
    if not source.exists():
        LOGGER.warning("No %s found at %s to copy", config.index_filename, source)
        return None
    if config.base_url is None:
        LOGGER.warning("Copying %s without a base URL; relative links may break", source)
    destination = Path(destination)
    destination.mkdir(parents=True, exist_ok=True)
    target = destination / config.index_filename
    shutil.copyfile(source, target)
    return target
