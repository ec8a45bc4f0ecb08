"""Protocols (interfaces) consumed by the core layer.

These define the contracts that a remote file-system client must
satisfy.  Core and CLI code depend ONLY on these protocols — never on
concrete implementations — so any backend can be plugged in.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from tfs_shell.core.models import FileInfo, ServiceAddress, WriteType

FAILED_FILE_ID: int = -1
"""Sentinel returned by :meth:`FileSystemClient.create_file` on failure."""


class OutStream(Protocol):
    """Write side of a newly created remote file."""

    def write(self, data: bytes) -> None:
        """Append *data* to the remote file."""
        ...  # pragma: no cover

    def close(self) -> None:
        """Flush and commit the file.  Safe to call more than once."""
        ...  # pragma: no cover


class RemoteFile(Protocol):
    """Handle to one remote file."""

    def read_bytes(self) -> bytes:
        """Return the full file contents, taking the file's read lock."""
        ...  # pragma: no cover

    def open_output(self, write_type: WriteType) -> OutStream:
        """Open a stream that writes with the given persistence mode."""
        ...  # pragma: no cover

    def release_lock(self) -> None:
        """Release the read lock if one is held."""
        ...  # pragma: no cover


class FileSystemClient(Protocol):
    """Contract for remote file-system backends.

    Implementations must map all backend-specific exceptions to
    :class:`~tfs_shell.exceptions.TfsShellError` subclasses.  Reported
    failures (``False`` or :data:`FAILED_FILE_ID`) are part of the
    contract and are NOT raised.
    """

    def list_status(self, path: str) -> list[FileInfo]:
        """Return the direct children of directory *path*.

        Raises
        ------
        FileDoesNotExistError
            When *path* is absent.
        InvalidPathError
            When *path* is malformed.
        """
        ...  # pragma: no cover

    def mkdir(self, path: str) -> bool:
        """Create *path* and any missing ancestors."""
        ...  # pragma: no cover

    def delete(self, path: str, recursive: bool = True) -> bool:
        """Delete *path*; directories are removed with their contents."""
        ...  # pragma: no cover

    def rename(self, src: str, dst: str) -> bool:
        """Atomically rename *src* to *dst* within this service."""
        ...  # pragma: no cover

    def create_file(self, path: str) -> int:
        """Create an empty file and return its id or :data:`FAILED_FILE_ID`.

        Raises
        ------
        FileAlreadyExistsError
            When *path* already exists.
        """
        ...  # pragma: no cover

    def get_file(self, path_or_id: str | int) -> RemoteFile | None:
        """Look a file up by path or id; ``None`` when it does not exist."""
        ...  # pragma: no cover

    def get_file_id(self, path: str) -> int:
        """Return the id of the file at *path*."""
        ...  # pragma: no cover

    def get_file_hosts(self, file_id: int) -> list[str]:
        """Return the hosts holding data of file *file_id*."""
        ...  # pragma: no cover

    def close(self) -> None:
        """Release the connection to the service."""
        ...  # pragma: no cover


ClientFactory = Callable[[ServiceAddress], FileSystemClient]
"""Opens a client bound to one service address."""
