"""Display facts derived from nodes: markers, counts, breadcrumbs, tree text."""

from __future__ import annotations

from collections.abc import Sequence

from dft.models import Node, Status
from dft.operations import all_descendants_done, count_descendants

BREADCRUMB_SEGMENT_LEN = 20
BREADCRUMB_SEPARATOR = " > "
ELLIPSIS_PREFIX = "... > "


def truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[: max(0, max_len - 3)] + "..."


def format_checkbox(status: Status) -> str:
    return "[x]" if status == Status.DONE else "[ ]"


def completion_marker(node: Node) -> str | None:
    """``"done"``, ``"done, partial"`` or ``None`` for an open node.

    A DONE node is only fully done when every descendant is DONE too.
    """
    if node.status != Status.DONE:
        return None
    if not node.children or all_descendants_done(node):
        return "done"
    return "done, partial"


def status_suffix(node: Node) -> str:
    marker = completion_marker(node)
    return f" ({marker})" if marker else ""


def child_count_label(node: Node) -> str:
    """Total descendants as `` [N]``, empty for leaves."""
    count = count_descendants(node)
    return f" [{count}]" if count else ""


def format_breadcrumb(project_name: str, path: Sequence[Node], width: int) -> str:
    """Ancestor titles joined by ``>``, elided from the left to fit ``width``."""
    if not path:
        return truncate(project_name, width - 2)

    segments = [truncate(node.title, BREADCRUMB_SEGMENT_LEN) for node in path]
    breadcrumb = BREADCRUMB_SEPARATOR.join(segments)
    if len(breadcrumb) > width - 2:
        while len(segments) > 1 and len(breadcrumb) > width - 8:
            segments.pop(0)
            breadcrumb = ELLIPSIS_PREFIX + BREADCRUMB_SEPARATOR.join(segments)
    return breadcrumb


def format_tree(node: Node, show_status: bool = True, indent: int = 0) -> list[str]:
    """Plain-text lines for ``node`` and its subtree, two spaces per level."""
    prefix = "  " * indent
    status = f"{format_checkbox(node.status)} " if show_status else ""
    lines = [f"{prefix}{status}{node.title}"]
    for child in node.children:
        lines.extend(format_tree(child, show_status, indent + 1))
    return lines
