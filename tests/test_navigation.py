"""Tests for navigation-only indices."""

from __future__ import annotations

from llmsindex.synthesis.navigation import NavigationSynthesizer, find_gap_directories

from conftest import make_index


class TestFindGapDirectories:
    """Tests for find_gap_directories function."""

    def test_intermediate_directories(self) -> None:
        """Should return ancestors down to the common root."""
        gaps = find_gap_directories(["docs/a/x", "docs/b"])

        assert gaps == {"docs", "docs/a"}

    def test_root_becomes_gap(self) -> None:
        assert find_gap_directories(["a", "b/c"]) == {"", "b"}

    def test_content_root_is_not_a_gap(self) -> None:
        assert find_gap_directories(["", "a/b"]) == {"a"}

    def test_single_directory(self) -> None:
        assert find_gap_directories(["docs/a"]) == set()

    def test_empty(self) -> None:
        assert find_gap_directories([]) == set()

    def test_boundary_above_common_root(self) -> None:
        """A shallower boundary extends the walk up to it."""
        assert find_gap_directories(["docs/a", "docs/b"], boundary="") == {"", "docs"}

    def test_boundary_below_common_root_ignored(self) -> None:
        assert find_gap_directories(["docs/a", "docs/b"], boundary="docs/a") == {"docs"}


class TestNavigationSynthesizer:
    """Tests for NavigationSynthesizer.render."""

    def test_children_sorted_by_title(self, build_context) -> None:
        index = make_index(["guide/zeta/x.md", "guide/alpha/y.md", "guide/alpha/z.md"])
        context = build_context(index)

        document = NavigationSynthesizer(context).render("guide")

        assert document.kind == "navigation"
        assert document.content == (
            "# Guide\n"
            "\n"
            "## Topic Indices\n"
            "\n"
            "- [Alpha](alpha/llms.txt): 2 topics\n"
            "- [Zeta](zeta/llms.txt): 1 topic\n"
        )
        assert document.path == context.root / "guide" / "llms.txt"

    def test_customization_applies(self, build_context) -> None:
        index = make_index(["guide/a/x.md", "guide/b/y.md"])
        context = build_context(
            index,
            {
                "guide": {"title": "Handbook", "description": "Pick a part"},
                "guide/b": {"shortDescription": "Second part"},
            },
        )

        document = NavigationSynthesizer(context).render("guide")

        assert document.content.startswith("# Handbook\n\n> Pick a part\n\n")
        assert "- [B](b/llms.txt): Second part (1 topic)" in document.content

    def test_grandchildren_reached_through_gaps(self, build_context) -> None:
        """A gap lists the nearest indexed directories, not only content ones."""
        index = make_index(["a/x/one.md", "a/y/two.md", "b/three.md"])
        context = build_context(index)

        document = NavigationSynthesizer(context).render("")

        assert "- [A](a/llms.txt): 0 topics" in document.content
        assert "- [B](b/llms.txt): 1 topic" in document.content
