"""requests-backed implementation of :class:`~tfs_shell.core.protocols.FileSystemClient`.

Talks JSON to the master's REST gateway at
``http://<host>:<port>/api/v1``.  This module is the **only** place in
the codebase that touches :mod:`requests`; every requests exception is
caught here and re-raised as a :class:`~tfs_shell.exceptions.TfsShellError`
subclass.

Error responses carry ``{"error": <kind>, "message": <text>}``.  Known
kinds map to typed exceptions; anything else becomes
:class:`~tfs_shell.exceptions.ServiceError`.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from tfs_shell.core.models import FileInfo, ServiceAddress, WriteType
from tfs_shell.core.protocols import FAILED_FILE_ID
from tfs_shell.exceptions import (
    FileAlreadyExistsError,
    FileDoesNotExistError,
    InvalidPathError,
    ServiceError,
    TfsShellError,
)

logger = logging.getLogger(__name__)

API_PREFIX: str = "/api/v1"

_ERROR_TYPES: dict[str, type[TfsShellError]] = {
    "InvalidPathException": InvalidPathError,
    "FileDoesNotExistException": FileDoesNotExistError,
    "FileAlreadyExistException": FileAlreadyExistsError,
}


def _parse_file_info(raw: dict[str, Any]) -> FileInfo:
    try:
        return FileInfo(
            id=int(raw["id"]),
            name=str(raw.get("name", "")),
            path=str(raw["path"]),
            size_bytes=int(raw.get("sizeBytes", 0)),
            creation_time_ms=int(raw.get("creationTimeMs", 0)),
            in_memory=bool(raw.get("inMemory", False)),
            is_folder=bool(raw.get("folder", False)),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ServiceError(f"Malformed file info from master: {raw!r}") from exc


class HttpFileSystemClient:
    """Concrete :class:`FileSystemClient` speaking HTTP to one master.

    This class satisfies the protocol structurally — no explicit
    inheritance required.

    Parameters
    ----------
    address:
        Master to talk to.
    timeout:
        Per-request timeout in seconds.
    session:
        Optional pre-built session; a new one is created otherwise.
    """

    def __init__(
        self,
        address: ServiceAddress,
        *,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.address: ServiceAddress = address
        self._timeout = timeout
        self._session: requests.Session = session or requests.Session()
        self._base_url = f"http://{address.host}:{address.port}{API_PREFIX}"

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _send(self, method: str, endpoint: str, **kwargs: Any) -> requests.Response:
        url = f"{self._base_url}{endpoint}"
        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.exceptions.Timeout as exc:
            raise ServiceError(f"Timed out talking to master {self.address}") from exc
        except requests.exceptions.RequestException as exc:
            raise ServiceError(f"Cannot reach master {self.address}: {exc}") from exc
        except UnicodeError as exc:
            raise InvalidPathError(f"Request to {endpoint} is not valid UTF-8") from exc

        if not response.ok:
            raise self._error_from(response)
        return response

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        allow_missing: bool = False,
        **kwargs: Any,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        With *allow_missing*, a "does not exist" answer yields ``None``
        instead of raising.
        """
        try:
            response = self._send(method, endpoint, **kwargs)
        except FileDoesNotExistError:
            if allow_missing:
                return None
            raise

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ServiceError(f"Master {self.address} sent a non-JSON reply") from exc

    def download(self, endpoint: str) -> bytes:
        """Return the raw body of a GET on *endpoint*."""
        return self._send("GET", endpoint).content

    def _error_from(self, response: requests.Response) -> TfsShellError:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        message = str(body.get("message") or response.reason or response.status_code)
        error_type = _ERROR_TYPES.get(str(body.get("error", "")), ServiceError)
        if error_type is ServiceError and response.status_code == 404:
            error_type = FileDoesNotExistError
        return error_type(message)

    def _success(self, payload: Any) -> bool:
        return bool(isinstance(payload, dict) and payload.get("success"))

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def list_status(self, path: str) -> list[FileInfo]:
        payload = self.request("GET", "/paths/list", params={"path": path})
        return [_parse_file_info(item) for item in payload or []]

    def mkdir(self, path: str) -> bool:
        return self._success(self.request("POST", "/paths/mkdir", json={"path": path}))

    def delete(self, path: str, recursive: bool = True) -> bool:
        payload = self.request(
            "POST", "/paths/delete", json={"path": path, "recursive": recursive},
        )
        return self._success(payload)

    def rename(self, src: str, dst: str) -> bool:
        payload = self.request("POST", "/paths/rename", json={"src": src, "dst": dst})
        return self._success(payload)

    def create_file(self, path: str) -> int:
        payload = self.request("POST", "/files/create", json={"path": path})
        if not isinstance(payload, dict) or payload.get("fileId") is None:
            return FAILED_FILE_ID
        return int(payload["fileId"])

    def get_file(self, path_or_id: str | int) -> HttpRemoteFile | None:
        if isinstance(path_or_id, int):
            params: dict[str, Any] = {"id": path_or_id}
        else:
            params = {"path": path_or_id}
        payload = self.request("GET", "/files/info", params=params, allow_missing=True)
        if payload is None:
            return None
        return HttpRemoteFile(self, _parse_file_info(payload))

    def get_file_id(self, path: str) -> int:
        payload = self.request("GET", "/files/id", params={"path": path})
        if not isinstance(payload, dict) or payload.get("fileId") is None:
            raise FileDoesNotExistError(path)
        return int(payload["fileId"])

    def get_file_hosts(self, file_id: int) -> list[str]:
        payload = self.request("GET", f"/files/{file_id}/hosts")
        return [str(host) for host in payload or []]

    def close(self) -> None:
        self._session.close()


class HttpRemoteFile:
    """Handle to one remote file, bound to the client that found it."""

    def __init__(self, client: HttpFileSystemClient, info: FileInfo) -> None:
        self._client = client
        self.info: FileInfo = info
        self._locked = False

    def read_bytes(self) -> bytes:
        """Lock the file for reading and fetch its full contents."""
        file_id = self.info.id
        self._client.request("POST", f"/files/{file_id}/lock")
        self._locked = True
        return self._client.download(f"/files/{file_id}/content")

    def open_output(self, write_type: WriteType) -> HttpOutStream:
        return HttpOutStream(self._client, self.info.id, write_type)

    def release_lock(self) -> None:
        if not self._locked:
            return
        self._locked = False
        self._client.request("DELETE", f"/files/{self.info.id}/lock")


class HttpOutStream:
    """Uploads each written chunk as one block, commits on close."""

    def __init__(
        self,
        client: HttpFileSystemClient,
        file_id: int,
        write_type: WriteType,
    ) -> None:
        self._client = client
        self._file_id = file_id
        self._write_type = write_type
        self._closed = False

    def write(self, data: bytes) -> None:
        if self._closed:
            raise ValueError("write to a closed stream")
        self._client.request(
            "POST",
            f"/files/{self._file_id}/blocks",
            params={"writeType": self._write_type.value},
            data=bytes(data),
            headers={"Content-Type": "application/octet-stream"},
        )

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._client.request(
            "POST",
            f"/files/{self._file_id}/complete",
            json={"writeType": self._write_type.value},
        )


def connect(address: ServiceAddress, *, timeout: float = 30.0) -> HttpFileSystemClient:
    """Open a client for *address*."""
    return HttpFileSystemClient(address, timeout=timeout)
