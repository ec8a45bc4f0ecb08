"""Infrastructure layer — external system integration.

This layer wraps all interaction with the remote master over HTTP.
Every raw third-party exception must be caught here and re-raised as a
:class:`~tfs_shell.exceptions.TfsShellError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from tfs_shell.infra.http_client import (
    HttpFileSystemClient,
    HttpOutStream,
    HttpRemoteFile,
    connect,
)

__all__: list[str] = [
    "HttpFileSystemClient",
    "HttpOutStream",
    "HttpRemoteFile",
    "connect",
]
