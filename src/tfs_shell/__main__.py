"""Allow ``python -m tfs_shell`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m tfs_shell`` behaves identically to the ``tfs`` console
script.
"""

from __future__ import annotations

from tfs_shell.cli.app import cli

if __name__ == "__main__":
    cli()
