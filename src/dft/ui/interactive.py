"""Terminal loop for an interactive session."""

from __future__ import annotations

import sys

import readchar
from rich.console import Console
from rich.live import Live

from dft.config import Config
from dft.models import Project
from dft.storage import ProjectStore

from .render import build_panel
from .session import Session

LIVE_REFRESH_RATE = 20
DEFAULT_PANEL_WIDTH = 100  # Overridden by config.interactive_width

console = Console()


def restore_terminal() -> None:
    """Leave the alternate screen and show the cursor again."""
    sys.stdout.write("\033[?1049l\033[?25h\033[0m")
    sys.stdout.flush()


def run_session(project: Project, store: ProjectStore, cfg: Config) -> None:
    """Run the interactive session until the user quits.

    The final save and terminal restore happen even if the loop raises.
    """
    session = Session(
        project,
        store,
        feedback_timeout=float(cfg.feedback_timeout),
        view=cfg.default_view,
    )

    def current_panel():
        max_width = getattr(cfg, "interactive_width", DEFAULT_PANEL_WIDTH)
        term_width = console.width or max_width
        width = min(max_width, term_width - 4)
        return build_panel(session, width, console.height)

    try:
        with Live(
            console=console,
            screen=True,
            get_renderable=current_panel,
            refresh_per_second=LIVE_REFRESH_RATE,
        ) as live:
            while session.running:
                try:
                    key = readchar.readkey()
                except KeyboardInterrupt:
                    session.quit()
                    break
                session.handle_key(key)
                live.refresh()
    finally:
        try:
            if session.running:
                session.quit()
        finally:
            restore_terminal()
