"""tfs-shell — command-line client for a memory-centric distributed file system.

Built as a thin shell over a remote file-system client with a strict
layered architecture.
"""

from tfs_shell.version import __version__

__all__: list[str] = ["__version__"]
