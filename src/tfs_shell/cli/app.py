"""CLI application entry point for tfs-shell.

This module owns the process lifecycle: it parses global options, reads
settings, wires the router to a client factory, and converts the
router's result into an OS exit code.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the router,
  the core layer, and the infrastructure client.
* :func:`cli` is the last-resort error boundary: anything the router
  did not fold into a result is rendered without a stack trace.
"""

from __future__ import annotations

import argparse
import sys
from functools import partial

from tfs_shell.cli import exit_codes
from tfs_shell.cli.console import err_console
from tfs_shell.core.config import ShellSettings, load_settings
from tfs_shell.exceptions import TfsShellError
from tfs_shell.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Only global options are parsed here; the verb and its operands are
    passed through untouched so the router can apply its own arity
    rules:

    * ``tfs <command> [args...]`` — run one file-system command
    * ``tfs --version``
    """
    parser = argparse.ArgumentParser(
        prog="tfs",
        description="Command-line client for a memory-centric distributed file system.",
        epilog=(
            "commands: ls <path> | mkdir <path> | rm <path> | mv <src> <dst> | "
            "copyFromLocal <src> <remoteDst> | copyToLocal <src> <localDst> | "
            "location <path>"
        ),
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug details to stderr.",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command verb followed by its paths.",
    )
    return parser


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None, settings: ShellSettings | None = None) -> int:
    """Run the tfs-shell CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.
    settings:
        Explicit settings; read from the environment when ``None``.

    Returns
    -------
    int
        ``0`` on success, ``-1`` on any command failure.
    """
    from tfs_shell.cli.router import CommandRouter
    from tfs_shell.core.path_resolver import PathResolver
    from tfs_shell.infra.http_client import connect
    from tfs_shell.utils.log import configure_logging

    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = settings or load_settings()
    configure_logging("DEBUG" if args.verbose else settings.log_level)

    resolver = PathResolver(
        default_address=settings.default_address,
        default_port=settings.master_port,
    )
    router = CommandRouter(
        resolver,
        partial(connect, timeout=settings.http_timeout_seconds),
    )
    return router.run(args.command)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except TfsShellError as exc:
        err_console.print(f"Error: {exc}", style="bold red")
        if exc.hint:
            err_console.print(f"Hint: {exc.hint}", style="yellow")
        sys.exit(exit_codes.FAILURE)
    except KeyboardInterrupt:
        err_console.print("\nAborted by user.", style="yellow")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        err_console.print(
            "Unexpected error. Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}",
            style="bold red",
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
