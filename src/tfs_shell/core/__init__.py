"""Core / service layer — path resolution, command parsing and transfer.

Rules
-----
* No ``print()`` calls.
* No network I/O; local file I/O only in :mod:`tfs_shell.core.transfer`.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from tfs_shell.core.commands import UsageError, parse_command
from tfs_shell.core.models import (
    Command,
    CommandKind,
    FileInfo,
    OperationResult,
    ResolvedPath,
    ServiceAddress,
    TransferResult,
    WriteType,
)
from tfs_shell.core.path_resolver import PathResolver, require_same_service
from tfs_shell.core.protocols import FileSystemClient, OutStream, RemoteFile

__all__: list[str] = [
    "Command",
    "CommandKind",
    "FileInfo",
    "FileSystemClient",
    "OperationResult",
    "OutStream",
    "PathResolver",
    "RemoteFile",
    "ResolvedPath",
    "ServiceAddress",
    "TransferResult",
    "UsageError",
    "WriteType",
    "parse_command",
    "require_same_service",
]
