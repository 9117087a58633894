"""Tests for index file validation."""

from __future__ import annotations

from pathlib import Path

from llmsindex.synthesis.validator import iter_index_files, validate_file


class TestValidateFile:
    """Tests for validate_file function."""

    def test_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "llms.txt"
        path.write_text(
            "# Guide\n\n- [Install](install.md): How to install\n- [Other](other.md)\n"
            "- plain bullet\n"
        )

        result = validate_file(path)

        assert result.valid
        assert result.line_count == 5

    def test_too_long(self, tmp_path: Path) -> None:
        path = tmp_path / "llms.txt"
        path.write_text("\n".join(f"line {number}" for number in range(80)))

        result = validate_file(path, max_lines=75)

        assert not result.valid
        assert result.issues == ["File exceeds 75 line limit: 80 lines"]

    def test_malformed_link(self, tmp_path: Path) -> None:
        path = tmp_path / "llms.txt"
        path.write_text("# Guide\n\n- [Broken](missing-close\n- [Spaced](a b.md)\n")

        result = validate_file(path)

        assert result.issues == [
            "Line 3: Malformed link format",
            "Line 4: Malformed link format",
        ]

    def test_missing_file(self, tmp_path: Path) -> None:
        result = validate_file(tmp_path / "llms.txt")

        assert not result.valid
        assert result.line_count == 0


class TestIterIndexFiles:
    """Tests for iter_index_files function."""

    def test_finds_primary_and_extended(self, tmp_path: Path) -> None:
        (tmp_path / "guide").mkdir()
        (tmp_path / "llms.txt").write_text("# Root\n")
        (tmp_path / "guide" / "llms-extended.txt").write_text("# Guide\n")
        (tmp_path / ".git").mkdir()
        (tmp_path / ".git" / "llms.txt").write_text("# Ignored\n")
        (tmp_path / "notes.txt").write_text("not an index\n")

        result = list(iter_index_files(tmp_path))

        assert result == [tmp_path / "guide" / "llms-extended.txt", tmp_path / "llms.txt"]
