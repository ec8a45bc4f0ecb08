"""Byte transfer between the local file system and a remote file.

Both directions use unbuffered local channels and tolerate partial I/O:
a single ``write`` may accept fewer bytes than offered and a single
``readinto`` may fill less than the whole buffer.  Loops run until the
data is drained (outbound to local) or the source reports end of input
(inbound from local).

Resource rules
--------------
* The remote read lock taken by :func:`copy_to_local` is released
  exactly once, after the local file is closed, on every exit path.
  When the copy itself fails, a failed release is only logged and the
  copy error propagates.
* :func:`copy_from_local` closes the remote stream before the local
  channel, on every exit path.
* Nothing is rolled back on failure.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import closing, contextmanager
from pathlib import Path
from typing import BinaryIO

from tfs_shell.core.models import TransferResult, WriteType
from tfs_shell.core.protocols import OutStream, RemoteFile

logger = logging.getLogger(__name__)

CHUNK_SIZE: int = 1024
"""Bytes read from a local source per iteration."""


# ---------------------------------------------------------------------------
# Loops
# ---------------------------------------------------------------------------

def drain(channel: BinaryIO, data: bytes) -> int:
    """Write all of *data* to *channel*, looping on short writes.

    Returns the number of bytes written.

    Raises
    ------
    OSError
        If the channel accepts no bytes on a write call.
    """
    view = memoryview(data)
    total = 0
    while view:
        written = channel.write(view)
        if not written:
            raise OSError(f"Write accepted no bytes with {len(view)} remaining")
        view = view[written:]
        total += written
    return total


def pump(channel: BinaryIO, out_stream: OutStream, chunk_size: int = CHUNK_SIZE) -> int:
    """Copy *channel* to *out_stream* in chunks of at most *chunk_size*.

    Returns the number of bytes copied.
    """
    buffer = bytearray(chunk_size)
    view = memoryview(buffer)
    total = 0
    while True:
        count = channel.readinto(buffer)
        if not count:
            break
        out_stream.write(bytes(view[:count]))
        total += count
    return total


# ---------------------------------------------------------------------------
# Directions
# ---------------------------------------------------------------------------

@contextmanager
def _read_lock(remote_file: RemoteFile) -> Iterator[RemoteFile]:
    try:
        yield remote_file
    except BaseException:
        # The copy failure is the one to report; a failed release only logs.
        try:
            remote_file.release_lock()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Could not release read lock: %s", exc)
        raise
    remote_file.release_lock()


def copy_to_local(remote_file: RemoteFile, local_path: str | Path) -> TransferResult:
    """Copy *remote_file* into a new or truncated local file.

    The remote contents are read into memory in one call, then drained
    to the local file.
    """
    with _read_lock(remote_file):
        data = remote_file.read_bytes()
        with open(local_path, "wb", buffering=0) as channel:
            written = drain(channel, data)

    logger.debug("Wrote %d bytes to %s", written, local_path)
    return TransferResult(ok=written == len(data), bytes_transferred=written)


def copy_from_local(
    local_path: str | Path,
    remote_file: RemoteFile,
    write_type: WriteType = WriteType.WRITE_THROUGH,
    *,
    chunk_size: int = CHUNK_SIZE,
) -> TransferResult:
    """Stream the local file at *local_path* into *remote_file*."""
    with open(local_path, "rb", buffering=0) as channel, \
            closing(remote_file.open_output(write_type)) as out_stream:
        copied = pump(channel, out_stream, chunk_size)

    logger.debug("Streamed %d bytes from %s", copied, local_path)
    return TransferResult(ok=True, bytes_transferred=copied)
