"""Line-budget classification and overflow rules."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Iterable, List


class BudgetStatus(str, enum.Enum):
    OK = "ok"
    OVER_SOFT = "over-soft"
    OVER_HARD = "over-hard"


@dataclass(slots=True)
class BudgetReport:
    directory: str
    lines: int
    topics: int
    status: BudgetStatus


def estimate_lines(blocks: Iterable[List[str]]) -> int:
    return sum(len(block) for block in blocks)


def classify(lines: int, *, soft: int, hard: int, leaf: bool) -> BudgetStatus:
    """Leaves are only over the hard budget past twice its size."""
    ceiling = hard * 2 if leaf else hard
    if lines > ceiling:
        return BudgetStatus.OVER_HARD
    if lines > soft:
        return BudgetStatus.OVER_SOFT
    return BudgetStatus.OK


def should_overflow(lines: int, *, hard: int, local_documents: int, child_indices: int) -> bool:
    """Whether local documents move into an extended index.

    A leaf keeps everything in one document since an extended index there
    would have nothing to link back from.
    """
    return lines > hard and local_documents > 1 and child_indices > 0


def offer_budget(offer_count: int, priority: int) -> int:
    """Number of offers a parent takes at the given priority percentage."""
    priority = min(max(priority, 0), 100)
    return min(math.ceil(offer_count * priority / 100), offer_count)
