"""Tests for Rich rendering of a session."""

import readchar
from rich.console import Console

from conftest import make_node, make_project

from dft.models import Status
from dft.ui.render import build_panel, visible_window
from dft.ui.session import Session


class NullStore:
    def save(self, project):
        pass


def _session(root) -> Session:
    return Session(make_project(root), NullStore(), clock=lambda: 0.0)


def _text(session: Session, width: int = 76, height: int = 24) -> str:
    console = Console(width=width + 4, record=True, color_system=None)
    console.print(build_panel(session, width, height))
    return console.export_text()


class TestVisibleWindow:
    def test_fits(self):
        assert visible_window(3, 5, 10) == (0, 5)

    def test_scrolls_to_selection(self):
        assert visible_window(15, 20, 10) == (6, 16)

    def test_top_anchored(self):
        assert visible_window(4, 20, 10) == (0, 10)


class TestBuildPanel:
    def test_list_view(self):
        root = make_node(
            "root",
            make_node("Alpha", make_node("a1"), make_node("a2")),
            make_node("Beta", status=Status.DONE),
        )
        out = _text(_session(root))
        assert "demo" in out
        assert "> Alpha [2]" in out
        assert "Beta (done)" in out

    def test_empty_hint(self):
        out = _text(_session(make_node("root")))
        assert "No items" in out

    def test_breadcrumb_after_dive(self):
        root = make_node("root", make_node("Kitchen", make_node("Fridge")))
        session = _session(root)
        session.handle_key(readchar.key.RIGHT)
        out = _text(session)
        assert "Kitchen" in out
        assert "Fridge" in out

    def test_more_indicator(self):
        root = make_node("root", *[make_node(f"Item {i}") for i in range(40)])
        out = _text(_session(root), height=20)
        assert "more" in out

    def test_titles_with_brackets_are_literal(self):
        root = make_node("root", make_node("[bold]not markup[/bold]"))
        out = _text(_session(root))
        assert "[bold]not markup[/bold]" in out

    def test_modal_and_feedback(self):
        root = make_node("root", make_node("Only", make_node("child")))
        session = _session(root)
        session.handle_key("x")
        out = _text(session)
        assert "Delete Task?" in out
        assert "1 sub-tasks" in out

        session.handle_key(readchar.key.ESC)
        session.handle_key(readchar.key.UP)
        assert "At top" in _text(session)

    def test_help_modal(self):
        session = _session(make_node("root"))
        session.handle_key("?")
        assert "Key Bindings" in _text(session, height=40)

    def test_zen_view(self):
        root = make_node("root", make_node("First"), make_node("Second"))
        session = _session(root)
        session.handle_key("m")
        out = _text(session)
        assert "First" in out
        assert "Second" not in out
        assert "1/2" in out
