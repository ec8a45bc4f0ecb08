"""Shared pytest fixtures and configuration for the tfs-shell test suite.

Guidelines
----------
* No network access in any test.
* The remote file-system client must be mocked at the protocol boundary.
* Core tests must be pure — local file I/O only under ``tmp_path``.
* Tests must not depend on ``TFS_*`` variables of the calling shell.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from tfs_shell.cli.router import CommandRouter
from tfs_shell.core.models import ServiceAddress
from tfs_shell.core.path_resolver import PathResolver


@pytest.fixture(autouse=True)
def _clean_tfs_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TFS_MASTER_HOST", "TFS_MASTER_PORT", "TFS_HTTP_TIMEOUT_SECONDS", "TFS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class RecordingConsole:
    """Stand-in for the CLI console that keeps printed lines."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def print(self, *objects: object, style: str | None = None) -> None:
        self.lines.append(" ".join(str(obj) for obj in objects))


@pytest.fixture
def client() -> MagicMock:
    return MagicMock(name="client")


@pytest.fixture
def connect(client: MagicMock) -> MagicMock:
    return MagicMock(name="connect", return_value=client)


@pytest.fixture
def out() -> RecordingConsole:
    return RecordingConsole()


@pytest.fixture
def router(connect: MagicMock, out: RecordingConsole) -> CommandRouter:
    resolver = PathResolver(default_address=ServiceAddress("master", 19998))
    return CommandRouter(resolver, connect, out)
