"""Core llmsindex data models."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Literal

DocumentKind = Literal["primary", "extended", "navigation"]


@dataclass(slots=True)
class FileRecord:
    """A topic document found under the tree root."""

    relative_path: str
    path: Path
    title: str
    description: str = ""
    category: str | None = None

    @property
    def directory(self) -> str:
        return posixpath.dirname(self.relative_path)

    @property
    def name(self) -> str:
        return posixpath.basename(self.relative_path)


@dataclass(frozen=True, slots=True)
class TopicCount:
    """Direct and recursive topic counts for one directory."""

    file_topics: int
    tree_topics: int

    @property
    def shows_tree(self) -> bool:
        # Small differences ("8 topics, 9 in tree") are noise.
        return (
            self.tree_topics > 1.5 * self.file_topics
            and self.tree_topics > self.file_topics + 5
        )

    def display(self) -> str:
        noun = "topic" if self.file_topics == 1 else "topics"
        if self.shows_tree:
            return f"{self.file_topics} {noun}, {self.tree_topics} in tree"
        return f"{self.file_topics} {noun}"


@dataclass(slots=True)
class Link:
    title: str
    url: str
    description: str = ""

    def render(self) -> str:
        if self.description:
            return f"- [{self.title}]({self.url}): {self.description}"
        return f"- [{self.title}]({self.url})"


@dataclass(slots=True)
class Section:
    """A group of links; ``name`` of None renders without a heading."""

    name: str | None
    links: List[Link] = field(default_factory=list)
    description: str | None = None
    priority: int = 0


@dataclass(slots=True)
class GeneratedDocument:
    """A rendered index ready to be written to disk."""

    directory: str
    path: Path
    kind: DocumentKind
    content: str
    estimated_lines: int
    leaf: bool = False

    @property
    def line_count(self) -> int:
        return len(self.content.rstrip("\n").split("\n"))
