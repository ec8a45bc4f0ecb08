"""Custom exception hierarchy for tfs-shell.

All exceptions that cross layer boundaries must inherit from
:class:`TfsShellError`.  Raw third-party exceptions (e.g. from requests)
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Every class carries an :class:`ErrorKind` tag.  The command router
inspects the tag, not the class, when it turns a failure into a
user-facing message.

Hierarchy
---------
TfsShellError
├── InvalidPathError
├── FileDoesNotExistError
├── FileAlreadyExistsError
├── ServiceError
├── ConfigurationError
└── MissingDependencyError
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Discriminator shared by exceptions and operation results."""

    INVALID_PATH = "invalid_path"
    FILE_DOES_NOT_EXIST = "file_does_not_exist"
    FILE_ALREADY_EXISTS = "file_already_exists"
    IO_ERROR = "io_error"
    REPORTED_FAILURE = "reported_failure"
    """The collaborator returned a failure sentinel instead of raising."""


class TfsShellError(Exception):
    """Base exception for all tfs-shell errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    kind: ErrorKind = ErrorKind.IO_ERROR

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Paths -----------------------------------------------------------------

class InvalidPathError(TfsShellError):
    """Raised when a path is malformed or spans two services."""

    kind = ErrorKind.INVALID_PATH


class FileDoesNotExistError(TfsShellError):
    """Raised when the remote file or directory is absent."""

    kind = ErrorKind.FILE_DOES_NOT_EXIST


class FileAlreadyExistsError(TfsShellError):
    """Raised when a create would overwrite an existing remote path."""

    kind = ErrorKind.FILE_ALREADY_EXISTS


# --- Remote service --------------------------------------------------------

class ServiceError(TfsShellError):
    """Raised when the remote service is unreachable or answers badly."""


# --- Environment / tooling -------------------------------------------------

class MissingDependencyError(TfsShellError):
    """Raised when an optional runtime dependency is not available."""


class ConfigurationError(TfsShellError):
    """Raised when ``TFS_*`` settings fail validation."""
