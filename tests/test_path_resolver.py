"""Tests for path resolution (core/path_resolver.py).

Pure tests — no I/O.

Coverage:
* URL and bare-path forms.
* Port defaults and validation.
* Normalisation and rejected components.
* Same-service rule used by rename.
"""

from __future__ import annotations

import pytest

from tfs_shell.core.models import ResolvedPath, ServiceAddress
from tfs_shell.core.path_resolver import (
    DEFAULT_PORT,
    PathResolver,
    normalize_path,
    require_same_service,
)
from tfs_shell.exceptions import ErrorKind, InvalidPathError


DEFAULT = ServiceAddress("master", 19998)


# ---------------------------------------------------------------------------
# URL form
# ---------------------------------------------------------------------------

class TestResolveUrl:
    def test_host_port_and_path(self) -> None:
        resolved = PathResolver().resolve("svc://h:1/dir")
        assert resolved == ResolvedPath(ServiceAddress("h", 1), "/dir")

    def test_any_scheme_accepted(self) -> None:
        resolved = PathResolver().resolve("tachyon://node-1.local:19998/a/b.txt")
        assert resolved.address == ServiceAddress("node-1.local", 19998)
        assert resolved.path == "/a/b.txt"

    def test_root_path(self) -> None:
        assert PathResolver().resolve("svc://h:1/").path == "/"

    def test_missing_port_uses_default(self) -> None:
        resolver = PathResolver(default_port=7000)
        assert resolver.resolve("svc://h/x").address == ServiceAddress("h", 7000)

    def test_default_port_constant(self) -> None:
        assert PathResolver().resolve("svc://h/x").address.port == DEFAULT_PORT

    def test_url_ignores_default_address(self) -> None:
        resolved = PathResolver(default_address=DEFAULT).resolve("svc://other:5/x")
        assert resolved.address == ServiceAddress("other", 5)

    def test_host_case_preserved(self) -> None:
        assert PathResolver().resolve("svc://Master:1/x").address.host == "Master"

    def test_deterministic(self) -> None:
        resolver = PathResolver(default_address=DEFAULT)
        first = resolver.resolve("svc://h:1/dir/file")
        for _ in range(5):
            assert resolver.resolve("svc://h:1/dir/file") == first

    @pytest.mark.parametrize(
        "path",
        [
            "svc://h:1",
            "svc://:1/x",
            "svc://h:abc/x",
            "svc://h:0/x",
            "svc://h:70000/x",
            "svc://h:/x",
            "://h:1/x",
        ],
    )
    def test_invalid_urls(self, path: str) -> None:
        with pytest.raises(InvalidPathError):
            PathResolver().resolve(path)


# ---------------------------------------------------------------------------
# Bare form
# ---------------------------------------------------------------------------

class TestResolveBare:
    def test_uses_default_address(self) -> None:
        resolved = PathResolver(default_address=DEFAULT).resolve("/data/x")
        assert resolved == ResolvedPath(DEFAULT, "/data/x")

    def test_no_default_configured(self) -> None:
        with pytest.raises(InvalidPathError, match="no default master"):
            PathResolver().resolve("/data/x")

    def test_embedded_scheme_separator_stays_bare(self) -> None:
        resolved = PathResolver(default_address=DEFAULT).resolve("/logs/http://x")
        assert resolved.address == DEFAULT
        assert resolved.path == "/logs/http:/x"

    def test_relative_rejected(self) -> None:
        with pytest.raises(InvalidPathError, match="absolute"):
            PathResolver(default_address=DEFAULT).resolve("data/x")

    def test_empty_rejected(self) -> None:
        with pytest.raises(InvalidPathError):
            PathResolver(default_address=DEFAULT).resolve("")

    def test_error_kind(self) -> None:
        with pytest.raises(InvalidPathError) as exc_info:
            PathResolver().resolve("")
        assert exc_info.value.kind is ErrorKind.INVALID_PATH


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------

class TestNormalizePath:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("/", "/"),
            ("//", "/"),
            ("/a//b", "/a/b"),
            ("/a/b/", "/a/b"),
            ("/a b/c", "/a b/c"),
        ],
    )
    def test_normalised(self, raw: str, expected: str) -> None:
        assert normalize_path(raw) == expected

    @pytest.mark.parametrize("raw", ["/a/../b", "/./a", "/a/.."])
    def test_relative_components_rejected(self, raw: str) -> None:
        with pytest.raises(InvalidPathError):
            normalize_path(raw)


# ---------------------------------------------------------------------------
# Same-service rule
# ---------------------------------------------------------------------------

class TestRequireSameService:
    def test_same_service_passes(self) -> None:
        src = ResolvedPath(ServiceAddress("h", 1), "/a")
        dst = ResolvedPath(ServiceAddress("h", 1), "/b")
        require_same_service(src, dst)

    @pytest.mark.parametrize(
        "other",
        [ServiceAddress("h", 2), ServiceAddress("g", 1), ServiceAddress("H", 1)],
    )
    def test_differing_service_fails(self, other: ServiceAddress) -> None:
        src = ResolvedPath(ServiceAddress("h", 1), "/a")
        dst = ResolvedPath(other, "/b")
        with pytest.raises(InvalidPathError, match="must be the same"):
            require_same_service(src, dst)
