"""Tests for file utilities."""

from __future__ import annotations

from pathlib import Path

from llmsindex.utils.files import find_git_root, iter_markdown_paths, iter_named_files


class TestIterMarkdownPaths:
    """Tests for iter_markdown_paths function."""

    def test_finds_nested_markdown(self, tmp_path: Path) -> None:
        """Should find Markdown files recursively in sorted order."""
        (tmp_path / "b.md").write_text("# B")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "a.md").write_text("# A")
        (tmp_path / "notes.txt").write_text("not markdown")

        result = list(iter_markdown_paths(tmp_path))

        assert result == [tmp_path / "b.md", tmp_path / "sub" / "a.md"]

    def test_excluded_dirs(self, tmp_path: Path) -> None:
        """Should skip files below excluded directories."""
        (tmp_path / "node_modules").mkdir()
        (tmp_path / "node_modules" / "pkg.md").write_text("# Pkg")
        (tmp_path / "doc.md").write_text("# Doc")

        result = list(iter_markdown_paths(tmp_path, excluded_dirs={"node_modules"}))

        assert result == [tmp_path / "doc.md"]

    def test_excluded_filenames_case_insensitive(self, tmp_path: Path) -> None:
        """Should compare excluded file names in lowercase."""
        (tmp_path / "README.md").write_text("# Readme")
        (tmp_path / "guide.md").write_text("# Guide")

        result = list(iter_markdown_paths(tmp_path, excluded_filenames={"readme.md"}))

        assert result == [tmp_path / "guide.md"]

    def test_single_file(self, tmp_path: Path) -> None:
        """Should yield a Markdown file passed directly."""
        doc = tmp_path / "doc.md"
        doc.write_text("# Doc")

        assert list(iter_markdown_paths(doc)) == [doc]

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert list(iter_markdown_paths(tmp_path)) == []


class TestIterNamedFiles:
    """Tests for iter_named_files function."""

    def test_finds_files_by_name(self, tmp_path: Path) -> None:
        (tmp_path / "a").mkdir()
        (tmp_path / "a" / "_llms.json").write_text("{}")
        (tmp_path / "_llms.json").write_text("{}")

        result = list(iter_named_files(tmp_path, "_llms.json"))

        assert result == [tmp_path / "_llms.json", tmp_path / "a" / "_llms.json"]

    def test_skips_excluded_dirs(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        (tmp_path / ".git" / "llms.txt").write_text("x")

        assert list(iter_named_files(tmp_path, "llms*.txt", excluded_dirs={".git"})) == []


class TestFindGitRoot:
    """Tests for find_git_root function."""

    def test_finds_ancestor(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        nested = tmp_path / "docs" / "guide"
        nested.mkdir(parents=True)

        assert find_git_root(nested) == tmp_path.resolve()

    def test_none_without_repository(self, tmp_path: Path) -> None:
        nested = tmp_path / "docs"
        nested.mkdir()

        result = find_git_root(nested)

        assert result is None or (result / ".git").exists()
