"""Shared fixtures for building fabricated index contexts."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Iterable

import pytest

from llmsindex.config import AppConfig
from llmsindex.customization.models import LlmsCustomization
from llmsindex.customization.store import CustomizationStore
from llmsindex.index.grouper import DirectoryTree, group_by_directory
from llmsindex.index.topics import aggregate_topic_counts
from llmsindex.models import FileRecord
from llmsindex.synthesis.context import IndexContext
from llmsindex.synthesis.links import LinkBuilder
from llmsindex.synthesis.navigation import find_gap_directories


def make_record(relative_path: str, title: str | None = None, description: str = "") -> FileRecord:
    return FileRecord(
        relative_path=relative_path,
        path=Path("/docs") / relative_path,
        title=title or relative_path.rsplit("/", 1)[-1].removesuffix(".md").title(),
        description=description,
    )


def make_index(paths: Iterable[str]) -> Dict[str, FileRecord]:
    return {path: make_record(path) for path in paths}


@pytest.fixture
def build_context(tmp_path: Path) -> Callable[..., IndexContext]:
    """Build an IndexContext from fabricated maps, no filesystem walk."""

    def _build(
        index: Dict[str, FileRecord],
        customizations: Dict[str, dict] | None = None,
        config: AppConfig | None = None,
    ) -> IndexContext:
        config = config or AppConfig()
        store = CustomizationStore(
            {
                key: LlmsCustomization.model_validate(value)
                for key, value in (customizations or {}).items()
            }
        )
        grouping = group_by_directory(index, store)
        content = [directory for directory, records in grouping.items() if records]
        tree = DirectoryTree([*content, *find_gap_directories(content)])
        return IndexContext(
            config=config,
            root=tmp_path,
            index=index,
            store=store,
            grouping=grouping,
            tree=tree,
            counts=aggregate_topic_counts(tree, grouping),
            links=LinkBuilder(tmp_path, base_url=config.base_url, repository_root=tmp_path),
        )

    return _build


def write_doc(root: Path, relative: str, title: str, description: str = "") -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = ["---", f"title: {title}"]
    if description:
        lines.append(f'description: "{description}"')
    lines += ["---", "", f"# {title}", "", "Body text."]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
