"""Checks for generated index files."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List

from llmsindex.utils.files import iter_named_files

LINK_LINE_RE = re.compile(r"^-\s+\[([^\]]+)\]\(([^)\s]+)\)(?::\s+.+)?$")
INDEX_PATTERN = "llms*.txt"


@dataclass(slots=True)
class ValidationResult:
    path: Path
    line_count: int
    issues: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.issues


def validate_file(path: Path, *, max_lines: int = 75) -> ValidationResult:
    """Check line count and link syntax of one index file."""
    if not path.is_file():
        return ValidationResult(path=path, line_count=0, issues=[f"File does not exist: {path}"])

    lines = path.read_text(encoding="utf-8").splitlines()
    result = ValidationResult(path=path, line_count=len(lines))
    if len(lines) > max_lines:
        result.issues.append(f"File exceeds {max_lines} line limit: {len(lines)} lines")
    for number, line in enumerate(lines, start=1):
        stripped = line.strip()
        if stripped.startswith("-") and "[" in stripped and not LINK_LINE_RE.match(stripped):
            result.issues.append(f"Line {number}: Malformed link format")
    return result


def iter_index_files(root: Path) -> Iterator[Path]:
    yield from iter_named_files(Path(root), INDEX_PATTERN, excluded_dirs={".git"})
