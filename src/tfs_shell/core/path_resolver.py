"""Path resolution — split user paths into service address and file path.

A user path is either a URL naming its service
(``tachyon://master:19998/data/a.txt``) or a bare absolute path
(``/data/a.txt``) that targets the configured default service.

Guarantees
----------
* Pure — no I/O; the result depends only on the input and on the
  configuration passed to the constructor.
* Host names are kept exactly as written (no case folding).
"""

from __future__ import annotations

import logging
import re

from tfs_shell.core.models import ResolvedPath, ServiceAddress
from tfs_shell.exceptions import InvalidPathError

logger = logging.getLogger(__name__)

DEFAULT_PORT: int = 19998

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")

_URL_RE = re.compile(
    r"^(?P<scheme>[A-Za-z][A-Za-z0-9+.\-]*)://"
    r"(?P<host>[^/:]*)"
    r"(?::(?P<port>[^/]*))?"
    r"(?P<path>/.*)?$"
)


class PathResolver:
    """Resolve user-supplied paths against an optional default service.

    Parameters
    ----------
    default_address:
        Service used for bare paths, or ``None`` when bare paths are
        not allowed.
    default_port:
        Port assumed when a URL names a host without one.
    """

    def __init__(
        self,
        default_address: ServiceAddress | None = None,
        default_port: int = DEFAULT_PORT,
    ) -> None:
        self._default_address = default_address
        self._default_port = default_port

    def resolve(self, path: str) -> ResolvedPath:
        """Split *path* into a :class:`ResolvedPath`.

        Raises
        ------
        InvalidPathError
            If *path* is empty, has a bad host or port, lacks an
            internal path, or is bare with no default service.
        """
        if not path:
            raise InvalidPathError("Path must not be empty.")

        if _SCHEME_RE.match(path):
            resolved = self._resolve_url(path)
        else:
            resolved = self._resolve_bare(path)

        logger.debug("Resolved %s to %s%s", path, resolved.address, resolved.path)
        return resolved

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve_url(self, path: str) -> ResolvedPath:
        match = _URL_RE.match(path)
        if match is None:
            raise InvalidPathError(f"Malformed path {path}")

        host = match.group("host")
        if not host:
            raise InvalidPathError(f"No host in path {path}")

        port = self._parse_port(match.group("port"), path)
        internal = match.group("path")
        if not internal:
            raise InvalidPathError(f"No file path in {path}")

        return ResolvedPath(
            address=ServiceAddress(host=host, port=port),
            path=normalize_path(internal),
        )

    def _resolve_bare(self, path: str) -> ResolvedPath:
        if not path.startswith("/"):
            raise InvalidPathError(f"Path {path} must be absolute")
        if self._default_address is None:
            raise InvalidPathError(
                f"Path {path} names no service and no default master is configured",
            )
        return ResolvedPath(address=self._default_address, path=normalize_path(path))

    def _parse_port(self, raw: str | None, path: str) -> int:
        if raw is None:
            return self._default_port
        if not raw.isdigit():
            raise InvalidPathError(f"Invalid port {raw!r} in path {path}")
        port = int(raw)
        if not 0 < port < 65536:
            raise InvalidPathError(f"Port {port} out of range in path {path}")
        return port


def normalize_path(path: str) -> str:
    """Collapse repeated slashes and drop a trailing one.

    Raises
    ------
    InvalidPathError
        If any component is ``.`` or ``..``.
    """
    parts = [part for part in path.split("/") if part]
    for part in parts:
        if part in (".", ".."):
            raise InvalidPathError(f"Path {path} contains a relative component {part!r}")
    return "/" + "/".join(parts)


def require_same_service(src: ResolvedPath, dst: ResolvedPath) -> None:
    """Raise :class:`InvalidPathError` unless both paths share a service.

    A rename is a single atomic call on one master; it cannot span two.
    """
    if (
        src.address.host != dst.address.host
        or src.address.port != dst.address.port
    ):
        raise InvalidPathError(
            "The file system of source and destination must be the same",
        )
