"""Tests for the terminal loop: final save and terminal restore on every exit path."""

from unittest.mock import MagicMock, patch

import pytest

from conftest import make_node, make_project

from dft.config import Config
from dft.ui import interactive


class StubLive:
    """Context manager standing in for rich.live.Live."""

    def __init__(self, *args, fail_on_exit=False, **kwargs):
        self.fail_on_exit = fail_on_exit
        self.refreshes = 0

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        if self.fail_on_exit:
            raise RuntimeError("teardown failed")
        return False

    def refresh(self):
        self.refreshes += 1


@pytest.fixture
def cfg(tmp_path):
    return Config.load(tmp_path / "config")


@pytest.fixture
def project():
    return make_project(make_node("root", make_node("A")))


@pytest.fixture
def restore():
    with patch.object(interactive, "restore_terminal") as mock:
        yield mock


def _run(project, store, cfg, keys, live=StubLive):
    with (
        patch.object(interactive, "Live", live),
        patch.object(interactive.readchar, "readkey", side_effect=keys),
    ):
        interactive.run_session(project, store, cfg)


class TestRunSession:
    def test_quit_saves_and_restores(self, project, cfg, restore):
        store = MagicMock()
        _run(project, store, cfg, ["j", "q"])

        store.save.assert_called_once_with(project)
        restore.assert_called_once()

    def test_keyboard_interrupt_saves_and_restores(self, project, cfg, restore):
        store = MagicMock()
        _run(project, store, cfg, KeyboardInterrupt)

        store.save.assert_called_once_with(project)
        restore.assert_called_once()

    def test_failing_save_still_restores(self, project, cfg, restore):
        store = MagicMock()
        store.save.side_effect = RuntimeError("disk gone")

        with pytest.raises(RuntimeError, match="disk gone"):
            _run(project, store, cfg, ["q"])

        assert store.save.called
        restore.assert_called_once()

    def test_failing_teardown_still_restores(self, project, cfg, restore):
        store = MagicMock()

        def failing_live(*args, **kwargs):
            return StubLive(fail_on_exit=True)

        with pytest.raises(RuntimeError, match="teardown failed"):
            _run(project, store, cfg, ["q"], live=failing_live)

        store.save.assert_called_once_with(project)
        restore.assert_called_once()

    def test_loop_error_attempts_final_save(self, project, cfg, restore):
        store = MagicMock()

        with pytest.raises(OSError):
            _run(project, store, cfg, OSError("tty closed"))

        store.save.assert_called_once_with(project)
        restore.assert_called_once()
