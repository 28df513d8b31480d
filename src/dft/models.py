"""Data models for dft."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

SCHEMA_VERSION = "1.0.0"


class Status(Enum):
    """Node status."""

    OPEN = "open"
    DONE = "done"


@dataclass(eq=False)
class Node:
    """A single problem in the tree.

    Children are owned exclusively by their parent; there is no back-pointer,
    parents are found with ``operations.find_parent``.
    """

    id: str
    title: str
    status: Status
    created_at: datetime
    children: list[Node] = field(default_factory=list)
    completed_at: datetime | None = None

    @property
    def is_done(self) -> bool:
        return self.status == Status.DONE

    def to_dict(self) -> dict:
        """Serialize to the on-disk JSON shape (recursively)."""
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status.value,
            "children": [child.to_dict() for child in self.children],
            "created_at": self.created_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Node:
        """Build a node tree from already-validated JSON data."""
        completed = data.get("completed_at")
        return cls(
            id=data["id"],
            title=data["title"],
            status=Status(data["status"]),
            created_at=datetime.fromisoformat(data["created_at"]),
            children=[cls.from_dict(child) for child in data["children"]],
            completed_at=datetime.fromisoformat(completed) if completed else None,
        )


@dataclass(eq=False)
class Project:
    """A named tree of nodes - the unit of persistence."""

    project_name: str
    root: Node
    created_at: datetime
    modified_at: datetime
    version: str = SCHEMA_VERSION
    open_count: int | None = None

    def to_dict(self) -> dict:
        data = {
            "project_name": self.project_name,
            "version": self.version,
            "created_at": self.created_at.isoformat(),
            "modified_at": self.modified_at.isoformat(),
        }
        if self.open_count is not None:
            data["open_count"] = self.open_count
        data["root"] = self.root.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Project:
        return cls(
            project_name=data["project_name"],
            version=data["version"],
            created_at=datetime.fromisoformat(data["created_at"]),
            modified_at=datetime.fromisoformat(data["modified_at"]),
            open_count=data.get("open_count"),
            root=Node.from_dict(data["root"]),
        )
