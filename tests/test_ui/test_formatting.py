"""Tests for display helpers."""

from conftest import make_node

from dft.models import Status
from dft.operations import mark_done, mark_open
from dft.ui.formatting import (
    child_count_label,
    completion_marker,
    format_breadcrumb,
    format_checkbox,
    format_tree,
    status_suffix,
    truncate,
)


class TestTruncate:
    def test_short_untouched(self):
        assert truncate("hello", 10) == "hello"

    def test_long_gets_ellipsis(self):
        assert truncate("abcdefghij", 8) == "abcde..."
        assert len(truncate("x" * 50, 20)) == 20


class TestCompletionMarker:
    def test_open(self):
        assert completion_marker(make_node("a")) is None
        assert status_suffix(make_node("a")) == ""

    def test_done_leaf(self):
        assert completion_marker(make_node("a", status=Status.DONE)) == "done"

    def test_done_with_all_done(self):
        node = make_node("a", make_node("b", make_node("c")))
        mark_done(node)
        assert completion_marker(node) == "done"
        assert status_suffix(node) == " (done)"

    def test_done_partial(self):
        grandchild = make_node("c")
        node = make_node("a", make_node("b", grandchild))
        mark_done(node)
        mark_open(grandchild)
        assert completion_marker(node) == "done, partial"
        assert status_suffix(node) == " (done, partial)"

    def test_reopened_parent_is_open_not_partial(self):
        grandchild = make_node("G")
        a = make_node("A", grandchild)
        mark_done(a)
        mark_open(a)
        assert grandchild.status == Status.DONE
        assert completion_marker(a) is None


class TestCounts:
    def test_child_count_is_total_descendants(self):
        node = make_node("a", make_node("b", make_node("c")), make_node("d"))
        assert child_count_label(node) == " [3]"

    def test_leaf_has_no_label(self):
        assert child_count_label(make_node("a")) == ""


class TestBreadcrumb:
    def test_root_shows_project_name(self):
        assert format_breadcrumb("demo", [], 80) == "demo"

    def test_joined_titles(self):
        path = [make_node("Home"), make_node("Kitchen")]
        assert format_breadcrumb("demo", path, 80) == "Home > Kitchen"

    def test_segments_truncated(self):
        crumb = format_breadcrumb("demo", [make_node("x" * 40)], 80)
        assert crumb == "x" * 17 + "..."

    def test_elided_from_left(self):
        path = [make_node(f"Level {i:02d} title") for i in range(8)]
        crumb = format_breadcrumb("demo", path, 40)
        assert crumb.startswith("... > ")
        assert crumb.endswith("Level 07 title")
        assert len(crumb) <= 40


class TestTree:
    def test_format_tree(self):
        root = make_node("root", make_node("A", make_node("A1", status=Status.DONE)), make_node("B"))
        assert format_tree(root) == [
            "[ ] root",
            "  [ ] A",
            "    [x] A1",
            "  [ ] B",
        ]

    def test_without_status(self):
        root = make_node("root", make_node("A"))
        assert format_tree(root, show_status=False) == ["root", "  A"]

    def test_checkbox(self):
        assert format_checkbox(Status.DONE) == "[x]"
        assert format_checkbox(Status.OPEN) == "[ ]"
