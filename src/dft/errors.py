"""Error taxonomy and CLI exit codes."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit statuses for one-shot commands.

    Several names share a value: callers only need to tell "doesn't exist"
    apart from "exists but unreadable".
    """

    SUCCESS = 0
    INVALID_NAME = 1
    NOT_FOUND = 1
    ALREADY_EXISTS = 2
    CANCELLED = 2
    CORRUPTED = 2
    FILESYSTEM_ERROR = 3
    TUI_ERROR = 3


class DftError(Exception):
    """Base class for dft errors."""

    exit_code: ExitCode = ExitCode.FILESYSTEM_ERROR


class ValidationError(DftError, ValueError):
    """Raised when a title or project name breaks its constraints."""

    exit_code = ExitCode.INVALID_NAME


class NotFoundError(DftError):
    """Raised when a project file does not exist."""

    exit_code = ExitCode.NOT_FOUND


class AlreadyExistsError(DftError):
    """Raised when creating a project whose name is taken."""

    exit_code = ExitCode.ALREADY_EXISTS


class CorruptedError(DftError):
    """Raised when a project file fails JSON or schema validation."""

    exit_code = ExitCode.CORRUPTED


class FilesystemError(DftError):
    """Raised when a save or delete fails at the OS level."""

    exit_code = ExitCode.FILESYSTEM_ERROR
