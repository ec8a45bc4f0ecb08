"""Command parsing — verb lookup and strict arity checking.

Pure transforms from an argument vector to a :class:`Command`.  No
printing happens here; the router decides what to show on failure.
"""

from __future__ import annotations

from collections.abc import Sequence

from tfs_shell.core.models import Command, CommandKind

_ALIASES: dict[str, CommandKind] = {
    "list": CommandKind.LIST,
    "remove": CommandKind.REMOVE,
    "rename": CommandKind.RENAME,
}

GLOBAL_USAGE: tuple[str, ...] = (
    "Usage: tfs <command> [args]",
    "       [ls <path>]",
    "       [mkdir <path>]",
    "       [rm <path>]",
    "       [mv <src> <dst>]",
    "       [copyFromLocal <src> <remoteDst>]",
    "       [copyToLocal <src> <localDst>]",
    "       [location <path>]",
)


class UsageError(Exception):
    """Raised when argv does not form a valid command.

    ``kind`` is the recognised verb whose arity was wrong, or ``None``
    when the verb itself is missing or unknown.
    """

    def __init__(self, kind: CommandKind | None) -> None:
        super().__init__(kind.usage if kind is not None else GLOBAL_USAGE[0])
        self.kind: CommandKind | None = kind

    @property
    def usage_lines(self) -> tuple[str, ...]:
        if self.kind is None:
            return GLOBAL_USAGE
        return (self.kind.usage,)


def lookup_verb(verb: str) -> CommandKind | None:
    """Return the :class:`CommandKind` for *verb*, or ``None``.

    Verbs are case-sensitive, matching the usage text.
    """
    for kind in CommandKind:
        if kind.verb == verb:
            return kind
    return _ALIASES.get(verb)


def parse_command(argv: Sequence[str]) -> Command:
    """Build a :class:`Command` from *argv* (verb first).

    Raises
    ------
    UsageError
        On an empty vector, an unknown verb, or a wrong argument count.
    """
    if not argv:
        raise UsageError(None)

    kind = lookup_verb(argv[0])
    if kind is None:
        raise UsageError(None)
    if len(argv) != kind.arity:
        raise UsageError(kind)

    return Command(kind=kind, args=tuple(argv[1:]))
