"""Directory-keyed table of customization documents."""

from __future__ import annotations

import fnmatch
import logging
from pathlib import Path
from typing import Collection, Dict, List, Mapping, Tuple

import json5
from pydantic import ValidationError

from llmsindex.customization.models import (
    GuidanceSection,
    LlmsCustomization,
    NodeOverride,
    RelatedTopic,
    SectionDefinition,
)
from llmsindex.utils import paths
from llmsindex.utils.files import iter_named_files

LOGGER = logging.getLogger(__name__)

DEFAULT_FILENAME = "_llms.json"


def parse_customization(text: str) -> LlmsCustomization:
    """Parse one customization document.

    Comments and trailing commas are allowed. Raises ``ValueError`` for
    unparseable text or ``pydantic.ValidationError`` for schema violations.
    """
    data = json5.loads(text)
    if not isinstance(data, dict):
        raise ValueError("customization document must be a JSON object")
    return LlmsCustomization.model_validate(data)


def _matches(remaining: str, pattern: str) -> bool:
    pattern = paths.normalize(pattern).lower()
    remaining = remaining.lower()
    if not pattern:
        return False
    return (
        remaining == pattern
        or remaining.startswith(pattern + "/")
        or fnmatch.fnmatchcase(remaining, pattern)
    )


class CustomizationStore:
    """Read-only view over every customization document in a tree.

    Keys are directory paths relative to the tree root, ``""`` for the root.
    """

    def __init__(
        self,
        customizations: Mapping[str, LlmsCustomization] | None = None,
        *,
        errors: List[Tuple[str, str]] | None = None,
    ) -> None:
        self._customizations: Dict[str, LlmsCustomization] = {
            paths.normalize(key): value for key, value in (customizations or {}).items()
        }
        self.errors: List[Tuple[str, str]] = list(errors or [])

    @classmethod
    def load(
        cls,
        root: Path,
        filename: str = DEFAULT_FILENAME,
        *,
        excluded_dirs: Collection[str] = (),
    ) -> "CustomizationStore":
        """Discover and parse every customization document under root.

        A malformed document is logged and skipped; its directory proceeds
        without customization.
        """
        root = Path(root).resolve()
        found: Dict[str, LlmsCustomization] = {}
        errors: List[Tuple[str, str]] = []
        for path in iter_named_files(root, filename, excluded_dirs=excluded_dirs):
            rel = path.relative_to(root).as_posix()
            try:
                customization = parse_customization(path.read_text(encoding="utf-8"))
            except (OSError, ValueError, ValidationError) as exc:
                LOGGER.warning("Failed to parse %s: %s", rel, exc)
                errors.append((rel, str(exc)))
                continue
            found[paths.relative_key(path.parent, root)] = customization

        LOGGER.info("Loaded %d customization documents", len(found))
        return cls(found, errors=errors)

    def __len__(self) -> int:
        return len(self._customizations)

    def __contains__(self, directory: str) -> bool:
        return paths.normalize(directory) in self._customizations

    def get(self, directory: str) -> LlmsCustomization | None:
        return self._customizations.get(paths.normalize(directory))

    def title_override(self, directory: str) -> str | None:
        customization = self.get(directory)
        return customization.title if customization else None

    def description_override(self, directory: str) -> str | None:
        customization = self.get(directory)
        return customization.description if customization else None

    def short_description(self, directory: str) -> str | None:
        customization = self.get(directory)
        return customization.short_description if customization else None

    def preamble(self, directory: str) -> str | None:
        customization = self.get(directory)
        return customization.preamble if customization else None

    def guidance(self, directory: str) -> GuidanceSection | None:
        customization = self.get(directory)
        return customization.guidance if customization else None

    def offers(self, directory: str) -> List[str]:
        customization = self.get(directory)
        return list(customization.offers) if customization else []

    def sections(self, directory: str) -> List[SectionDefinition]:
        customization = self.get(directory)
        return list(customization.sections) if customization else []

    def related(self, directory: str) -> List[RelatedTopic]:
        customization = self.get(directory)
        return list(customization.related) if customization else []

    def node_override(self, directory: str, name: str) -> NodeOverride | None:
        """Look up a per-file override by path below directory, then by basename."""
        customization = self.get(directory)
        if customization is None or not customization.nodes:
            return None
        name = paths.normalize(name)
        override = customization.nodes.get(name)
        if override is None and "/" in name:
            override = customization.nodes.get(name.rsplit("/", 1)[1])
        return override

    def is_filtered(self, path: str) -> bool:
        """True if any ancestor's filter list excludes path."""
        path = paths.normalize(path)
        for directory in paths.ancestors(path):
            customization = self._customizations.get(directory)
            if customization is None or not customization.filter:
                continue
            remaining = paths.relative_to(path, directory)
            if any(_matches(remaining, entry) for entry in customization.filter):
                return True
        return False

    def promotion_target(self, path: str) -> str | None:
        """Effective directory of a promoted document, or None.

        Ancestor rules are checked root first and the first match wins. The
        result depends only on the document's original path.
        """
        path = paths.normalize(path)
        original = paths.parent(path) or ""
        for directory in paths.ancestors(path):
            customization = self._customizations.get(directory)
            if customization is None:
                continue
            remaining = paths.relative_to(path, directory)
            for rule in customization.promote:
                if _matches(remaining, rule.path):
                    return paths.move_up(original, rule.levels)
        return None
