"""Bottom-up topic counts over the directory tree."""

from __future__ import annotations

from typing import Dict, List, Mapping

from llmsindex.index.grouper import DirectoryTree
from llmsindex.models import FileRecord, TopicCount


def aggregate_topic_counts(
    tree: DirectoryTree, grouping: Mapping[str, List[FileRecord]]
) -> Dict[str, TopicCount]:
    """Count direct and subtree topics for every directory in tree.

    Directories are visited deepest first so every child total exists before
    its parent sums it.
    """
    counts: Dict[str, TopicCount] = {}
    for directory in tree.bottom_up():
        file_topics = len(grouping.get(directory, ()))
        tree_topics = file_topics + sum(
            counts[child].tree_topics for child in tree.children(directory)
        )
        counts[directory] = TopicCount(file_topics=file_topics, tree_topics=tree_topics)
    return counts
