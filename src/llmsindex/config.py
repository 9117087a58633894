"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_EXCLUDED_DIRS = frozenset(
    {
        ".git",
        ".github",
        ".venv",
        "__pycache__",
        "_site",
        "_themes",
        "bin",
        "node_modules",
        "obj",
    }
)

DEFAULT_EXCLUDED_FILENAMES = frozenset(
    {
        "changelog.md",
        "code_of_conduct.md",
        "contributing.md",
        "license.md",
        "readme.md",
        "security.md",
    }
)


@dataclass(slots=True)
class AppConfig:
    soft_budget: int = 50
    hard_budget: int = 75
    base_url: str | None = None
    index_filename: str = "llms.txt"
    extended_filename: str = "llms-extended.txt"
    customization_filename: str = "_llms.json"
    metadata_scan_lines: int = 30
    use_toc: bool = False
    excluded_dirs: frozenset[str] = field(default_factory=lambda: DEFAULT_EXCLUDED_DIRS)
    excluded_filenames: frozenset[str] = field(
        default_factory=lambda: DEFAULT_EXCLUDED_FILENAMES
    )

    def __post_init__(self) -> None:
        if self.soft_budget <= 0:
            raise ValueError(f"soft budget must be positive, got {self.soft_budget}")
        if self.hard_budget < self.soft_budget:
            raise ValueError(
                f"hard budget ({self.hard_budget}) must not be below "
                f"soft budget ({self.soft_budget})"
            )
        if self.base_url is not None:
            self.base_url = self.base_url.rstrip("/") or None
