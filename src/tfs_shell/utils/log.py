"""Logging setup for the ``tfs_shell`` logger.

Records go to stderr so that command output on stdout stays clean.
Rich's handler is used when Rich is importable; otherwise a plain
stream handler with a timestamped format takes its place.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME: str = "tfs_shell"


def _build_handler() -> logging.Handler:
    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        return handler
    return RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )


def configure_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Install a single stderr handler on the package logger.

    Calling this again replaces the previous handler instead of
    stacking a second one.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger.setLevel(level)
    logger.addHandler(_build_handler())
    logger.propagate = False
    return logger
