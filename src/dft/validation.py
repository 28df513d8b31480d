"""Title and project-name validation."""

from __future__ import annotations

import re
from dataclasses import dataclass

MAX_TITLE_LENGTH = 200
MAX_PROJECT_NAME_LENGTH = 50

# Top-level command names (and aliases) that would make `dft <name>` ambiguous
RESERVED_NAMES = frozenset(
    {
        "new",
        "create",
        "init",
        "add",
        "list",
        "ls",
        "projects",
        "show",
        "delete",
        "rm",
        "remove",
        "open",
        "use",
        "start",
        "run",
        "tree",
        "view",
        "update",
        "config",
        "help",
        "version",
    }
)

_NAME_START = re.compile(r"^[a-zA-Z0-9]")
_NAME_CHARS = re.compile(r"^[a-zA-Z0-9_-]+$")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation check; ``error`` is set only when invalid."""

    is_valid: bool
    error: str | None = None

    def __bool__(self) -> bool:
        return self.is_valid


_VALID = ValidationResult(True)


def validate_title(title: str) -> ValidationResult:
    """Check a node title: 1-200 characters after stripping whitespace."""
    trimmed = title.strip()
    if not trimmed:
        return ValidationResult(False, "Title cannot be empty or contain only whitespace.")
    if len(trimmed) > MAX_TITLE_LENGTH:
        return ValidationResult(False, f"Title must be {MAX_TITLE_LENGTH} characters or less.")
    return _VALID


def validate_project_name(name: str) -> ValidationResult:
    """Check a project name against the identifier rules."""
    if len(name) < 1:
        return ValidationResult(False, "Project name must be at least 1 character long.")
    if len(name) > MAX_PROJECT_NAME_LENGTH:
        return ValidationResult(
            False, f"Project name must be {MAX_PROJECT_NAME_LENGTH} characters or less."
        )
    if not _NAME_START.match(name):
        return ValidationResult(False, "Project name must start with a letter or number.")
    if not _NAME_CHARS.match(name):
        return ValidationResult(
            False,
            "Project name can only contain letters, numbers, hyphens, and underscores.",
        )
    if name.lower() in RESERVED_NAMES:
        return ValidationResult(False, f"'{name}' is a reserved name. Please choose another.")
    return _VALID


def is_valid_project_name(name: str) -> bool:
    return validate_project_name(name).is_valid


def normalize_project_name(name: str) -> str:
    """Case-fold a project name to its on-disk form."""
    return name.strip().lower()
