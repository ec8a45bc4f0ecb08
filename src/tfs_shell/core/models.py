"""Domain models for tfs-shell.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O, zero dependencies on
external packages, and live for a single command invocation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from tfs_shell.exceptions import ErrorKind


# ---------------------------------------------------------------------------
# Addressing
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ServiceAddress:
    """Host and port of one file-system master.

    Equality is exact: host names are compared case-sensitively.
    """

    host: str
    port: int

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass(frozen=True, slots=True)
class ResolvedPath:
    """A user path split into its service and its in-service path."""

    address: ServiceAddress
    path: str
    """Absolute, normalised path inside the service (``/`` is the root)."""


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

class CommandKind(Enum):
    """The seven shell verbs with their arity and usage text."""

    LIST = ("ls", 2, "<path>")
    MAKE_DIR = ("mkdir", 2, "<path>")
    REMOVE = ("rm", 2, "<path>")
    RENAME = ("mv", 3, "<src> <dst>")
    COPY_FROM_LOCAL = ("copyFromLocal", 3, "<src> <remoteDst>")
    COPY_TO_LOCAL = ("copyToLocal", 3, "<src> <localDst>")
    LOCATION = ("location", 2, "<path>")

    def __init__(self, verb: str, arity: int, arg_help: str) -> None:
        self.verb = verb
        self.arity = arity
        """Required argv length, the verb itself included."""
        self.arg_help = arg_help

    @property
    def usage(self) -> str:
        return f"Usage: tfs {self.verb} {self.arg_help}"


@dataclass(frozen=True, slots=True)
class Command:
    """A parsed, arity-checked shell command."""

    kind: CommandKind
    args: tuple[str, ...]
    """Positional arguments, verb excluded."""


# ---------------------------------------------------------------------------
# Remote listing entry
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True, order=True)
class FileInfo:
    """Status of one remote file or directory.

    Instances compare field by field in declaration order, which is the
    total order used to sort listings.
    """

    id: int
    name: str
    path: str
    size_bytes: int
    creation_time_ms: int
    in_memory: bool
    is_folder: bool


class WriteType(str, Enum):
    """Persistence mode of a remote output stream."""

    CACHE = "CACHE"
    """Memory tier only."""

    WRITE_THROUGH = "WRITE_THROUGH"
    """Memory tier plus durable backing storage."""


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TransferResult:
    """Outcome of one file transfer, kept for diagnostics."""

    ok: bool
    bytes_transferred: int


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Single discriminated result of a shell operation.

    Raised exceptions and sentinel failures reported by the remote
    client are both folded into this shape, so the renderer needs only
    one way of detecting failure.
    """

    ok: bool
    message: str | None = None
    error_kind: ErrorKind | None = None

    @classmethod
    def succeeded(cls, message: str | None = None) -> OperationResult:
        return cls(ok=True, message=message)

    @classmethod
    def failed(
        cls,
        kind: ErrorKind = ErrorKind.REPORTED_FAILURE,
        message: str | None = None,
    ) -> OperationResult:
        return cls(ok=False, message=message, error_kind=kind)

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else -1
