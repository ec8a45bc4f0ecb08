"""Command router — argv to operation, outcome to message and exit code.

Each command is handled by one ``_do_*`` method that returns an
:class:`~tfs_shell.core.models.OperationResult`.  Typed exceptions and
local ``OSError`` s are folded into the same result shape by
:meth:`CommandRouter.execute`, so rendering has a single input.

Usage failures (unknown verb, wrong argument count) are reported before
any path is resolved or any client is opened.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from contextlib import closing
from typing import Any

from tfs_shell.cli import exit_codes
from tfs_shell.cli.console import console as default_console
from tfs_shell.core.commands import UsageError, parse_command
from tfs_shell.core.models import (
    Command,
    CommandKind,
    OperationResult,
    ResolvedPath,
    WriteType,
)
from tfs_shell.core.path_resolver import PathResolver, require_same_service
from tfs_shell.core.protocols import FAILED_FILE_ID, ClientFactory, FileSystemClient
from tfs_shell.core.transfer import copy_from_local, copy_to_local
from tfs_shell.exceptions import ErrorKind, FileDoesNotExistError, TfsShellError
from tfs_shell.utils.formatting import format_size, format_timestamp_ms

logger = logging.getLogger(__name__)

_MESSAGE_PREFIX: dict[ErrorKind, str] = {
    ErrorKind.INVALID_PATH: "Invalid Path: ",
    ErrorKind.FILE_DOES_NOT_EXIST: "File Does Not Exist: ",
    ErrorKind.FILE_ALREADY_EXISTS: "File Already Exists: ",
}


def render_failure(result: OperationResult) -> str | None:
    """Return the one-line diagnostic for a failed *result*, if any."""
    if result.message is None:
        return None
    prefix = _MESSAGE_PREFIX.get(result.error_kind, "") if result.error_kind else ""
    return f"{prefix}{result.message}"


class CommandRouter:
    """Validate, dispatch and report one shell command.

    Parameters
    ----------
    resolver:
        Turns user paths into service address + internal path.
    connect:
        Opens a client for a service address; the router closes it
        when the command finishes.
    console:
        Object with a ``print`` method receiving output lines.
    """

    def __init__(
        self,
        resolver: PathResolver,
        connect: ClientFactory,
        console: Any = default_console,
    ) -> None:
        self._resolver = resolver
        self._connect = connect
        self._console = console
        self._handlers: dict[CommandKind, Callable[[Command], OperationResult]] = {
            CommandKind.LIST: self._do_list,
            CommandKind.MAKE_DIR: self._do_mkdir,
            CommandKind.REMOVE: self._do_remove,
            CommandKind.RENAME: self._do_rename,
            CommandKind.COPY_FROM_LOCAL: self._do_copy_from_local,
            CommandKind.COPY_TO_LOCAL: self._do_copy_to_local,
            CommandKind.LOCATION: self._do_location,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, argv: Sequence[str]) -> int:
        """Run the command in *argv* (verb first) and return its exit code."""
        try:
            command = parse_command(argv)
        except UsageError as exc:
            for line in exc.usage_lines:
                self._print(line)
            return exit_codes.FAILURE

        result = self.execute(command)
        if result.ok:
            if result.message is not None:
                self._print(result.message)
            return exit_codes.SUCCESS

        line = render_failure(result)
        if line is not None:
            self._print(line)
        return exit_codes.FAILURE

    def execute(self, command: Command) -> OperationResult:
        """Run *command* and fold every expected failure into the result."""
        logger.debug("Executing %s %s", command.kind.verb, command.args)
        try:
            return self._handlers[command.kind](command)
        except TfsShellError as exc:
            logger.debug("%s failed: %s", command.kind.verb, exc)
            return OperationResult.failed(exc.kind, str(exc))
        except OSError as exc:
            logger.debug("%s failed with local I/O error: %s", command.kind.verb, exc)
            return OperationResult.failed(ErrorKind.IO_ERROR, str(exc))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _print(self, line: str) -> None:
        self._console.print(line)

    def _client_for(self, resolved: ResolvedPath) -> closing[FileSystemClient]:
        return closing(self._connect(resolved.address))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def _do_list(self, command: Command) -> OperationResult:
        resolved = self._resolver.resolve(command.args[0])
        with self._client_for(resolved) as client:
            files = sorted(client.list_status(resolved.path))

        for info in files:
            self._print(
                f"{format_size(info.size_bytes):<10}"
                f"{format_timestamp_ms(info.creation_time_ms):<25}"
                f"{'In Memory' if info.in_memory else 'Not In Memory':<15}"
                f"{info.path:<5}"
            )
        return OperationResult.succeeded()

    def _do_mkdir(self, command: Command) -> OperationResult:
        resolved = self._resolver.resolve(command.args[0])
        with self._client_for(resolved) as client:
            if not client.mkdir(resolved.path):
                return OperationResult.failed()
        return OperationResult.succeeded(f"Successfully created directory {resolved.path}")

    def _do_remove(self, command: Command) -> OperationResult:
        resolved = self._resolver.resolve(command.args[0])
        with self._client_for(resolved) as client:
            if not client.delete(resolved.path, recursive=True):
                return OperationResult.failed()
        return OperationResult.succeeded(f"{resolved.path} has been removed")

    def _do_rename(self, command: Command) -> OperationResult:
        src = self._resolver.resolve(command.args[0])
        dst = self._resolver.resolve(command.args[1])
        require_same_service(src, dst)

        with self._client_for(src) as client:
            if not client.rename(src.path, dst.path):
                return OperationResult.failed()
        return OperationResult.succeeded(f"Renamed {src.path} to {dst.path}")

    def _do_copy_to_local(self, command: Command) -> OperationResult:
        src_arg, dst_arg = command.args
        resolved = self._resolver.resolve(src_arg)
        with self._client_for(resolved) as client:
            remote_file = client.get_file(resolved.path)
            # The lookup reports a missing file as None rather than raising.
            if remote_file is None:
                raise FileDoesNotExistError(resolved.path)
            result = copy_to_local(remote_file, dst_arg)

        logger.debug("copyToLocal moved %d bytes", result.bytes_transferred)
        return OperationResult.succeeded(f"Copied {src_arg} to {dst_arg}")

    def _do_copy_from_local(self, command: Command) -> OperationResult:
        src_arg, dst_arg = command.args
        if not os.path.exists(src_arg):
            return OperationResult.failed(
                ErrorKind.REPORTED_FAILURE,
                f"Local file {src_arg} does not exist.",
            )

        resolved = self._resolver.resolve(dst_arg)
        with self._client_for(resolved) as client:
            file_id = client.create_file(resolved.path)
            if file_id == FAILED_FILE_ID:
                return OperationResult.failed()
            remote_file = client.get_file(file_id)
            if remote_file is None:
                raise FileDoesNotExistError(resolved.path)
            result = copy_from_local(src_arg, remote_file, WriteType.WRITE_THROUGH)

        logger.debug("copyFromLocal moved %d bytes", result.bytes_transferred)
        return OperationResult.succeeded(f"Copied {src_arg} to {dst_arg}")

    def _do_location(self, command: Command) -> OperationResult:
        resolved = self._resolver.resolve(command.args[0])
        with self._client_for(resolved) as client:
            file_id = client.get_file_id(resolved.path)
            hosts = client.get_file_hosts(file_id)

        self._print(f"{resolved.path} with file id {file_id} are on nodes: ")
        for host in hosts:
            self._print(host)
        return OperationResult.succeeded()
