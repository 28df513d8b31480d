"""Navigation state machine.

The position is a stack of ancestor ids (root implicit, so an empty stack
means "viewing the root's children") plus a cursor into the list being
viewed. Every operation takes the state and the project root; none do I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dft.models import Node
from dft.operations import find_node

LIST_EMPTY = "List is empty"
AT_TOP = "At top"
AT_BOTTOM = "At bottom"
AT_ROOT = "At root"
NOTHING_SELECTED = "Nothing selected"


@dataclass
class NavigationState:
    ancestor_stack: list[str] = field(default_factory=list)
    selected_index: int = 0


@dataclass(frozen=True)
class NavResult:
    """Outcome of a movement; ``feedback`` explains a refusal."""

    success: bool
    feedback: str | None = None


_OK = NavResult(True)


def _fail(message: str) -> NavResult:
    return NavResult(False, message)


def get_current_parent(state: NavigationState, root: Node) -> Node | None:
    """Node whose children are being viewed, or ``None`` when at the root.

    A stale top-of-stack id also yields ``None`` so callers fall back to root.
    """
    if not state.ancestor_stack:
        return None
    return find_node(root, state.ancestor_stack[-1])


def get_current_list(state: NavigationState, root: Node) -> list[Node]:
    parent = get_current_parent(state, root)
    return (parent or root).children


def get_selected_node(state: NavigationState, root: Node) -> Node | None:
    items = get_current_list(state, root)
    if 0 <= state.selected_index < len(items):
        return items[state.selected_index]
    return None


def get_breadcrumb_path(state: NavigationState, root: Node) -> list[Node]:
    """Resolve the ancestor stack to nodes, skipping ids that no longer exist."""
    path = []
    for node_id in state.ancestor_stack:
        node = find_node(root, node_id)
        if node is not None:
            path.append(node)
    return path


def move_up(state: NavigationState, root: Node) -> NavResult:
    if not get_current_list(state, root):
        return _fail(LIST_EMPTY)
    if state.selected_index <= 0:
        return _fail(AT_TOP)
    state.selected_index -= 1
    return _OK


def move_down(state: NavigationState, root: Node) -> NavResult:
    items = get_current_list(state, root)
    if not items:
        return _fail(LIST_EMPTY)
    if state.selected_index >= len(items) - 1:
        return _fail(AT_BOTTOM)
    state.selected_index += 1
    return _OK


def dive_in(state: NavigationState, root: Node) -> NavResult:
    """View the selected node's children. Leaves may be entered (empty list)."""
    selected = get_selected_node(state, root)
    if selected is None:
        return _fail(NOTHING_SELECTED)
    state.ancestor_stack.append(selected.id)
    state.selected_index = 0
    return _OK


def go_back(state: NavigationState, root: Node) -> NavResult:
    """Pop one level. The cursor resets to 0, not to the node we came from."""
    if not state.ancestor_stack:
        return _fail(AT_ROOT)
    state.ancestor_stack.pop()
    state.selected_index = 0
    return _OK


def prune_stale_ancestors(state: NavigationState, root: Node) -> bool:
    """Truncate the stack at the first id that no longer resolves.

    Returns whether anything was dropped.
    """
    for depth, node_id in enumerate(state.ancestor_stack):
        if find_node(root, node_id) is None:
            del state.ancestor_stack[depth:]
            return True
    return False


def _clamp(state: NavigationState, length: int) -> None:
    if length == 0:
        state.selected_index = 0
    else:
        state.selected_index = max(0, min(state.selected_index, length - 1))


def ensure_valid_selection(state: NavigationState, root: Node) -> None:
    """Repair the position after the tree changed underneath it."""
    prune_stale_ancestors(state, root)
    _clamp(state, len(get_current_list(state, root)))


def adjust_selection_after_delete(
    state: NavigationState, root: Node, deleted_index: int
) -> None:
    """Keep the cursor near where it was after the item at ``deleted_index`` went away."""
    if deleted_index <= state.selected_index and state.selected_index > 0:
        state.selected_index -= 1
    _clamp(state, len(get_current_list(state, root)))
