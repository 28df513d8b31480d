"""Rich rendering of a session."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Group
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from dft.operations import count_descendants
from dft.ui.formatting import child_count_label, format_breadcrumb, status_suffix, truncate
from dft.ui.modals import DeleteModal, EditModal, HelpModal, NewModal
from dft.ui.session import VIEW_ZEN

if TYPE_CHECKING:
    from dft.models import Node
    from dft.ui.session import Session

DEFAULT_TERMINAL_HEIGHT = 24
MODAL_WIDTH = 50
EMPTY_LIST_HINT = "[dim]No items. Press 'n' to create one.[/dim]"
FOOTER = "[dim]  ↑↓ select · →/enter dive · ← back · n new · e edit · d done · x del · m mode · ? help · q quit[/dim]"

HELP_LINES = [
    "↑/k    Move up",
    "↓/j    Move down",
    "→/l    Enter / dive in",
    "←/h    Back / go up",
    "Enter  Enter selected",
    "n      New task",
    "e      Edit selected",
    "d      Toggle done",
    "x      Delete selected",
    "m      Zen / list view",
    "q      Quit",
]


def visible_window(selected: int, total: int, max_visible: int) -> tuple[int, int]:
    """Slice bounds that keep ``selected`` on screen, anchored at the top."""
    if total <= max_visible:
        return 0, total
    start = selected - max_visible + 1 if selected >= max_visible else 0
    return start, min(total, start + max_visible)


def _item_line(node: Node, selected: bool, title_width: int) -> str:
    marker = "[cyan]>[/cyan]" if selected else " "
    title = escape(truncate(node.title, title_width))
    suffix = escape(child_count_label(node) + status_suffix(node))
    if node.is_done:
        return f"{marker} [dim]{title}{suffix}[/dim]"
    if selected:
        return f"{marker} [bold]{title}[/bold]{suffix}"
    return f"{marker} {title}{suffix}"


def render_list(session: Session, width: int, max_items: int) -> list[str]:
    items = session.current_list
    if not items:
        return [EMPTY_LIST_HINT]

    selected = session.nav.selected_index
    start, end = visible_window(selected, len(items), max_items)
    lines = [_item_line(items[i], i == selected, width - 25) for i in range(start, end)]
    if end < len(items):
        lines.append(f"[dim]  +{len(items) - end} more[/dim]")
    return lines


def render_zen(session: Session, width: int) -> list[str]:
    node = session.selected_node
    if node is None:
        return [EMPTY_LIST_HINT]
    position = f"[dim]{session.nav.selected_index + 1}/{len(session.current_list)}[/dim]"
    return [_item_line(node, True, width - 4), "", position]


def render_modal(session: Session) -> Panel | None:
    modal = session.modal
    if modal is None:
        return None

    if isinstance(modal, HelpModal):
        body = "\n".join(escape(line) for line in HELP_LINES)
        hints = "Press any key to close"
        buttons = ""
    else:
        primary = modal.primary_label
        if modal.cancel_selected:
            buttons = f" {primary}  [reverse] Cancel [/reverse]"
        else:
            buttons = f"[reverse] {primary} [/reverse]  Cancel"
        hints = "Tab:switch  Enter:confirm  Esc:cancel"

        if isinstance(modal, (NewModal, EditModal)):
            value = escape(modal.input_buffer) if modal.input_buffer else "[dim](type here)[/dim]"
            error = f"[red]{escape(modal.error)}[/red]" if modal.error else ""
            body = f"Title: {value}[blink]_[/blink]\n{error}"
        else:
            body = _delete_body(session)

    content = f"{body}\n\n{buttons}\n\n[dim]{hints}[/dim]" if buttons else f"{body}\n\n[dim]{hints}[/dim]"
    return Panel(content, title=f"[bold]{modal.title}[/bold]", border_style="yellow", width=MODAL_WIDTH)


def _delete_body(session: Session) -> str:
    node = session.selected_node
    if node is None:
        return ""
    count = count_descendants(node)
    consequence = (
        f"This will delete {count} sub-tasks." if count else "This will delete this task."
    )
    return f'"{escape(truncate(node.title, MODAL_WIDTH - 8))}"\n{consequence}'


def build_panel(session: Session, width: int, height: int | None = None) -> Panel:
    """Whole screen for the current session state."""
    height = height or DEFAULT_TERMINAL_HEIGHT
    # borders(2) + breadcrumb(1) + blank(2) + feedback(1) + footer(1)
    max_items = max(1, height - 7)

    breadcrumb = format_breadcrumb(session.project.project_name, session.breadcrumb, width)
    lines = [f"[dim]{escape(breadcrumb)}[/dim]", ""]
    if session.view == VIEW_ZEN:
        lines.extend(render_zen(session, width))
    else:
        lines.extend(render_list(session, width, max_items))

    feedback = session.feedback_message
    status_line = f"  [bold yellow]{escape(feedback)}[/bold yellow]" if feedback else ""

    parts: list = [Text.from_markup("\n".join(lines))]
    modal_panel = render_modal(session)
    if modal_panel is not None:
        parts.extend([Text(""), modal_panel])
    parts.extend([Text(""), Text.from_markup(status_line), Text.from_markup(FOOTER)])

    return Panel(
        Group(*parts),
        title=f"[bold]dft[/bold] - {escape(session.project.project_name)}",
        border_style="blue",
        width=width + 4,
    )
