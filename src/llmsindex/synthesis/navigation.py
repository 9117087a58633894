"""Navigation-only indices for directories without their own topics."""

from __future__ import annotations

from typing import Collection, Set

from llmsindex.models import GeneratedDocument
from llmsindex.synthesis import render
from llmsindex.synthesis.budget import estimate_lines
from llmsindex.synthesis.context import IndexContext
from llmsindex.utils import paths


def find_gap_directories(
    content_directories: Collection[str], *, boundary: str | None = None
) -> Set[str]:
    """Directories between content directories and their common root.

    Each returned directory has no topics of its own but sits above one that
    does, so it needs an index that only links downward. A ``boundary`` above
    the common root, such as the repository root, extends the walk up to it.
    The tree root always bounds the walk.
    """
    content = set(content_directories)
    if not content:
        return set()
    top = paths.common_root(content)
    if boundary is not None and paths.is_within(top, boundary):
        top = paths.normalize(boundary)
    gaps: Set[str] = set()
    for directory in content:
        for ancestor in paths.ancestors(directory):
            if paths.is_within(ancestor, top) and ancestor not in content:
                gaps.add(ancestor)
    return gaps


class NavigationSynthesizer:
    """Renders gap directories, deepest first."""

    def __init__(self, context: IndexContext) -> None:
        self.context = context

    def render(self, directory: str) -> GeneratedDocument:
        ctx = self.context
        title = ctx.title(directory)
        children = ctx.sorted_children(directory)
        blocks = [
            render.render_header(title),
            render.render_description(ctx.description(directory)),
            render.render_navigation(
                [ctx.index_link(child, directory, short=True) for child in children]
            ),
        ]
        return GeneratedDocument(
            directory=directory,
            path=ctx.output_path(directory),
            kind="navigation",
            content=render.join_blocks(blocks),
            estimated_lines=estimate_lines(blocks),
            leaf=not children,
        )
