"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.

Command output goes to stdout through :data:`console`; diagnostics of
the top-level error boundary go to stderr through :data:`err_console`.
Text is never parsed as Rich markup, so paths such as ``/a[1]`` print
verbatim.
"""

from __future__ import annotations

import sys
from typing import Any

from tfs_shell.exceptions import MissingDependencyError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``MissingDependencyError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise MissingDependencyError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(*, stderr: bool = False) -> Any:
	"""Create a Rich console instance targeting stdout or stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=stderr, soft_wrap=True, highlight=False)


def _printable(obj: object) -> str:
	"""Return *obj* as text that any UTF-8 stream accepts.

	Undecodable bytes smuggled in as surrogates (non-UTF-8 file names)
	are shown as ``\\xNN`` escapes.
	"""
	text = str(obj)
	try:
		raw = text.encode("utf-8", "surrogateescape")
	except UnicodeEncodeError:
		return text.encode("utf-8", "backslashreplace").decode("utf-8")
	return raw.decode("utf-8", "backslashreplace")


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def __init__(self, *, stderr: bool = False) -> None:
		self._stderr = stderr

	def print(self, *objects: object, style: str | None = None) -> None:
		"""Render with Rich when available, else plain print."""
		objects = tuple(_printable(obj) for obj in objects)
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except MissingDependencyError:
			print(*objects, file=sys.stderr if self._stderr else sys.stdout)
			return
		rich_console.print(*objects, style=style, markup=False, emoji=False)


console = _ConsoleProxy()
err_console = _ConsoleProxy(stderr=True)
