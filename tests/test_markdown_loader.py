"""Tests for Markdown metadata extraction."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from llmsindex.ingestion.markdown_loader import (
    extract_metadata,
    first_heading,
    parse_front_matter,
    read_prefix,
)


class TestParseFrontMatter:
    """Tests for parse_front_matter function."""

    def test_basic_fields(self) -> None:
        """Should parse key/value pairs and unquote values."""
        lines = ["---", "title: Install", 'description: "How to install"', "---", "# Heading"]

        assert parse_front_matter(lines) == {
            "title": "Install",
            "description": "How to install",
        }

    def test_keys_lowercased_first_wins(self) -> None:
        lines = ["---", "Title: First", "title: Second", "---"]

        assert parse_front_matter(lines) == {"title": "First"}

    def test_nested_values_ignored(self) -> None:
        """Should skip indented lines belonging to nested values."""
        lines = ["---", "tags:", "  title: nested", "title: Top", "---"]

        fields = parse_front_matter(lines)

        assert fields["title"] == "Top"

    def test_no_front_matter(self) -> None:
        assert parse_front_matter(["# Title", "title: not metadata"]) == {}

    def test_leading_blank_lines_allowed(self) -> None:
        assert parse_front_matter(["", "---", "title: T", "---"]) == {"title": "T"}

    def test_value_with_colon(self) -> None:
        lines = ["---", "title: Setup: the basics", "---"]

        assert parse_front_matter(lines)["title"] == "Setup: the basics"

    def test_unterminated_block(self) -> None:
        """Should read fields up to the end of the scanned prefix."""
        assert parse_front_matter(["---", "title: T"]) == {"title": "T"}


class TestFirstHeading:
    """Tests for first_heading function."""

    def test_heading_after_front_matter(self) -> None:
        lines = ["---", "# not a heading: yaml comment", "---", "", "# Real Heading"]

        assert first_heading(lines) == "Real Heading"

    def test_second_level_heading_ignored(self) -> None:
        assert first_heading(["## Sub", "# Top"]) == "Top"

    def test_no_heading(self) -> None:
        assert first_heading(["plain text"]) is None


class TestExtractMetadata:
    """Tests for extract_metadata function."""

    def test_front_matter_title_wins(self, tmp_path: Path) -> None:
        doc = tmp_path / "install.md"
        doc.write_text("---\ntitle: Installing\ndescription: Steps\n---\n# Heading\n")

        metadata = extract_metadata(doc)

        assert metadata is not None
        assert metadata.title == "Installing"
        assert metadata.description == "Steps"

    def test_heading_fallback(self, tmp_path: Path) -> None:
        doc = tmp_path / "install.md"
        doc.write_text("# From Heading\n\nBody\n")

        metadata = extract_metadata(doc)

        assert metadata is not None
        assert metadata.title == "From Heading"
        assert metadata.description == ""

    def test_filename_fallback(self, tmp_path: Path) -> None:
        doc = tmp_path / "getting-started.md"
        doc.write_text("No heading at all\n")

        metadata = extract_metadata(doc)

        assert metadata is not None
        assert metadata.title == "Getting Started"

    def test_only_prefix_scanned(self, tmp_path: Path) -> None:
        """Should not look past the scan window for a heading."""
        doc = tmp_path / "late.md"
        doc.write_text("text\n" * 40 + "# Too Late\n")

        metadata = extract_metadata(doc, max_lines=30)

        assert metadata is not None
        assert metadata.title == "Late"

    def test_byte_order_mark(self, tmp_path: Path) -> None:
        doc = tmp_path / "bom.md"
        doc.write_bytes("\ufeff---\ntitle: With BOM\n---\n".encode("utf-8"))

        metadata = extract_metadata(doc)

        assert metadata is not None
        assert metadata.title == "With BOM"

    def test_unreadable_returns_none(self, tmp_path: Path) -> None:
        """Should return None when the document cannot be read."""
        doc = tmp_path / "doc.md"
        doc.write_text("# Doc")

        with patch(
            "llmsindex.ingestion.markdown_loader.read_prefix",
            side_effect=PermissionError("denied"),
        ):
            assert extract_metadata(doc) is None

    def test_read_prefix_limits_lines(self, tmp_path: Path) -> None:
        doc = tmp_path / "doc.md"
        doc.write_text("a\r\nb\r\nc\r\n")

        assert read_prefix(doc, 2) == ["a", "b"]
