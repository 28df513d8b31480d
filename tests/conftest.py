"""Pytest fixtures for dft tests."""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from dft.models import Node, Project, Status


@pytest.fixture(autouse=True)
def clear_caches():
    """Clear module-level caches before each test."""
    from dft.config import clear_config_cache

    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def store(tmp_path: Path):
    from dft.storage import ProjectStore

    return ProjectStore(tmp_path / "projects")


_COUNTER = 0


def make_node(title: str, *children: Node, status: Status = Status.OPEN) -> Node:
    """Build a node with a deterministic UUID-shaped id."""
    global _COUNTER
    _COUNTER += 1
    return Node(
        id=f"00000000-0000-4000-8000-{_COUNTER:012d}",
        title=title,
        status=status,
        created_at=datetime(2024, 1, 9, 10, 30, tzinfo=timezone.utc),
        children=list(children),
        completed_at=(
            datetime(2024, 1, 9, 11, 0, tzinfo=timezone.utc) if status == Status.DONE else None
        ),
    )


def make_project(root: Node, name: str = "demo") -> Project:
    ts = datetime(2024, 1, 9, 10, 30, tzinfo=timezone.utc)
    return Project(project_name=name, root=root, created_at=ts, modified_at=ts)
