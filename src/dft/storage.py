"""JSON project storage: one file per project, atomically replaced on save."""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from dft.errors import CorruptedError, FilesystemError, NotFoundError
from dft.models import Project, Status
from dft.operations import count_nodes
from dft.validation import MAX_TITLE_LENGTH, normalize_project_name, validate_project_name

logger = logging.getLogger("dft.storage")

_NODE_ID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)
_STATUSES = {s.value for s in Status}


class SchemaError(ValueError):
    """Raised internally when a document does not match the project schema."""


def _is_timestamp(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        datetime.fromisoformat(value)
    except ValueError:
        return False
    return True


def validate_node_data(node: Any, path: str = "root") -> None:
    """Recursively check one serialized node. Raises ``SchemaError``."""
    if not isinstance(node, dict):
        raise SchemaError(f"Invalid node at {path}: expected object")

    node_id = node.get("id")
    if not isinstance(node_id, str) or not _NODE_ID_PATTERN.match(node_id):
        raise SchemaError(f"Invalid node at {path}: id must be a 36-character UUID")

    title = node.get("title")
    if not isinstance(title, str) or not 1 <= len(title) <= MAX_TITLE_LENGTH:
        raise SchemaError(
            f"Invalid node at {path}: title must be 1-{MAX_TITLE_LENGTH} characters"
        )

    if node.get("status") not in _STATUSES:
        raise SchemaError(f'Invalid node at {path}: status must be "open" or "done"')

    children = node.get("children")
    if not isinstance(children, list):
        raise SchemaError(f"Invalid node at {path}: children must be an array")

    if not _is_timestamp(node.get("created_at")):
        raise SchemaError(f"Invalid node at {path}: created_at must be an ISO-8601 timestamp")

    completed = node.get("completed_at")
    if completed is not None and not _is_timestamp(completed):
        raise SchemaError(
            f"Invalid node at {path}: completed_at must be an ISO-8601 timestamp or null"
        )

    for i, child in enumerate(children):
        validate_node_data(child, f"{path}.children[{i}]")


def validate_project_data(data: Any) -> None:
    """Check a whole project document, including every node. Raises ``SchemaError``."""
    if not isinstance(data, dict):
        raise SchemaError("Project must be an object")
    if not isinstance(data.get("project_name"), str):
        raise SchemaError("Project must have a project_name string")
    if not isinstance(data.get("version"), str):
        raise SchemaError("Project must have a version string")
    if not _is_timestamp(data.get("created_at")):
        raise SchemaError("Project must have a created_at timestamp")
    if not _is_timestamp(data.get("modified_at")):
        raise SchemaError("Project must have a modified_at timestamp")
    open_count = data.get("open_count")
    if open_count is not None and (
        not isinstance(open_count, int) or isinstance(open_count, bool) or open_count < 0
    ):
        raise SchemaError("Project open_count must be a non-negative integer")
    validate_node_data(data.get("root"))


@dataclass(frozen=True)
class ProjectInfo:
    """Summary row for ``ProjectStore.list``."""

    name: str
    node_count: int
    created_at: datetime

    @property
    def task_count(self) -> int:
        """Nodes excluding the implicit root."""
        return self.node_count - 1


class ProjectStore:
    """Loads and saves projects as ``<projects_dir>/<name>.json``."""

    def __init__(self, projects_dir: Path):
        self._dir = projects_dir

    @property
    def projects_dir(self) -> Path:
        return self._dir

    def path_for(self, name: str) -> Path:
        """File for ``name``. Raises ``NotFoundError`` if it isn't a valid project name."""
        normalized = normalize_project_name(name)
        result = validate_project_name(normalized)
        if not result.is_valid:
            raise NotFoundError(f"Invalid project name '{name}': {result.error}")
        return self._dir / f"{normalized}.json"

    def exists(self, name: str) -> bool:
        try:
            return self.path_for(name).is_file()
        except NotFoundError:
            return False

    def load(self, name: str) -> Project:
        """Load and validate a project.

        Raises:
            NotFoundError: no file for ``name``
            CorruptedError: invalid JSON or schema
        """
        name = normalize_project_name(name)
        path = self.path_for(name)
        if not path.is_file():
            raise NotFoundError(
                f"Project '{name}' not found. Use 'dft list' to see available projects."
            )

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise CorruptedError(
                f"Project '{name}' has invalid JSON. The file may be corrupted."
            ) from e
        except OSError as e:
            raise FilesystemError(f"Cannot read project '{name}': {e}") from e

        try:
            validate_project_data(data)
        except SchemaError as e:
            raise CorruptedError(f"Project '{name}' has invalid structure: {e}") from e

        return Project.from_dict(data)

    def save(self, project: Project) -> None:
        """Persist ``project``, bumping ``modified_at`` first.

        Writes a temp file beside the target and renames it over, so readers
        never see a half-written document.
        """
        project.modified_at = datetime.now(timezone.utc)
        content = json.dumps(project.to_dict(), indent=2)
        path = self.path_for(project.project_name)
        tmp_path = path.with_name(path.name + ".tmp")

        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(content, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            try:
                tmp_path.unlink(missing_ok=True)
            except OSError:
                logger.debug("Could not remove temp file %s", tmp_path)
            raise FilesystemError(
                f"Cannot write to project directory. Check permissions. {e}"
            ) from e
        logger.debug("Saved project %s to %s", project.project_name, path)

    def delete(self, name: str) -> None:
        name = normalize_project_name(name)
        path = self.path_for(name)
        if not path.is_file():
            raise NotFoundError(
                f"Project '{name}' not found. Use 'dft list' to see available projects."
            )
        try:
            path.unlink()
        except OSError as e:
            raise FilesystemError("Cannot delete project file. Check permissions.") from e
        logger.debug("Deleted project %s", name)

    def list(self) -> list[ProjectInfo]:
        """All readable projects, newest first. Unreadable files are skipped."""
        if not self._dir.is_dir():
            return []

        projects: list[ProjectInfo] = []
        for path in self._dir.glob("*.json"):
            try:
                project = self.load(path.stem)
            except (CorruptedError, NotFoundError, FilesystemError) as e:
                logger.warning("Skipping %s: %s", path.name, e)
                continue
            projects.append(
                ProjectInfo(
                    name=project.project_name,
                    node_count=count_nodes(project.root),
                    created_at=project.created_at,
                )
            )

        projects.sort(key=lambda p: _sortable(p.created_at), reverse=True)
        return projects


def _sortable(ts: datetime) -> datetime:
    # Naive timestamps from hand-edited files are treated as UTC
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)
