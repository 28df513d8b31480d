"""simple-term-menu prompts."""

from simple_term_menu import TerminalMenu


class RichTerminalMenu:
    """Arrow-key selection menu for the CLI."""

    def select(self, options: list[str], title: str = "") -> int | None:
        """Show selection menu, return index or None if cancelled."""
        if not options:
            return None
        menu = TerminalMenu(options, title=title or None)
        return menu.show()
