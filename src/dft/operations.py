"""Tree operations.

Plain functions over ``Node`` trees. None of them perform I/O. Lookups that
find nothing return ``None`` (or ``False``/``-1``) rather than raising; only
invalid titles raise, as ``ValidationError``.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from datetime import datetime, timezone

from dft.errors import ValidationError
from dft.models import Node, Project, Status
from dft.validation import validate_title

DEFAULT_ROOT_TITLE = "root"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def generate_node_id() -> str:
    """Generate a fresh node id (UUID4, 36 characters)."""
    return str(uuid.uuid4())


def _checked_title(title: str) -> str:
    result = validate_title(title)
    if not result.is_valid:
        raise ValidationError(result.error)
    return title.strip()


def create_node(title: str) -> Node:
    """Create a detached OPEN node with a trimmed, validated title."""
    return Node(
        id=generate_node_id(),
        title=_checked_title(title),
        status=Status.OPEN,
        created_at=_now(),
    )


def add_child_node(parent: Node, title: str) -> Node:
    """Create a node and append it as the last child of ``parent``."""
    node = create_node(title)
    parent.children.append(node)
    return node


def edit_node_title(node: Node, new_title: str) -> None:
    """Replace the node's title. Raises ``ValidationError`` and leaves it unchanged if invalid."""
    node.title = _checked_title(new_title)


def mark_done(node: Node) -> None:
    """Mark ``node`` and every descendant DONE (pre-order, unconditional).

    Already-DONE descendants get a fresh ``completed_at`` too.
    """
    node.status = Status.DONE
    node.completed_at = _now()
    for child in node.children:
        mark_done(child)


def mark_open(node: Node) -> None:
    """Reopen ``node`` only; completed children stay completed."""
    node.status = Status.OPEN
    node.completed_at = None


def toggle_status(node: Node) -> None:
    if node.status == Status.OPEN:
        mark_done(node)
    else:
        mark_open(node)


def delete_child(parent: Node, node_id: str) -> bool:
    """Remove the child with ``node_id`` (and its subtree). Returns whether one was removed."""
    index = get_sibling_index(parent.children, node_id)
    if index == -1:
        return False
    del parent.children[index]
    return True


def find_node(root: Node, node_id: str) -> Node | None:
    """Depth-first pre-order search for ``node_id``."""
    if root.id == node_id:
        return root
    for child in root.children:
        found = find_node(child, node_id)
        if found is not None:
            return found
    return None


def find_parent(root: Node, child_id: str) -> Node | None:
    """Return the node whose direct children include ``child_id``.

    ``None`` for the root itself or an unknown id.
    """
    for child in root.children:
        if child.id == child_id:
            return root
        found = find_parent(child, child_id)
        if found is not None:
            return found
    return None


def get_node_path(root: Node, target_id: str) -> list[Node] | None:
    """Root-to-target path, both ends inclusive, or ``None`` if not in the tree."""
    if root.id == target_id:
        return [root]
    for child in root.children:
        path = get_node_path(child, target_id)
        if path is not None:
            return [root, *path]
    return None


def get_sibling_index(siblings: Sequence[Node], node_id: str) -> int:
    """Index of ``node_id`` in ``siblings``, or -1."""
    for index, sibling in enumerate(siblings):
        if sibling.id == node_id:
            return index
    return -1


def get_previous_sibling(siblings: Sequence[Node], node_id: str) -> Node | None:
    index = get_sibling_index(siblings, node_id)
    if index <= 0:
        return None
    return siblings[index - 1]


def get_next_sibling(siblings: Sequence[Node], node_id: str) -> Node | None:
    index = get_sibling_index(siblings, node_id)
    if index == -1 or index >= len(siblings) - 1:
        return None
    return siblings[index + 1]


def count_descendants(node: Node) -> int:
    """Number of nodes below ``node``, excluding itself."""
    return len(node.children) + sum(count_descendants(child) for child in node.children)


def count_nodes(node: Node) -> int:
    """Number of nodes in the subtree, including ``node``."""
    return 1 + count_descendants(node)


def all_descendants_done(node: Node) -> bool:
    for child in node.children:
        if child.status != Status.DONE or not all_descendants_done(child):
            return False
    return True


def new_project(name: str, root_title: str = DEFAULT_ROOT_TITLE) -> Project:
    """Build an in-memory project with an empty root.

    ``name`` must already be validated and normalized.
    """
    root = create_node(root_title)
    return Project(
        project_name=name,
        root=root,
        created_at=root.created_at,
        modified_at=root.created_at,
    )
