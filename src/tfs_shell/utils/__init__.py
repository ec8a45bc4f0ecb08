"""Shared utilities — text formatting and logging setup.

Rules
-----
* No business logic.
* No file or network I/O.
* Importable by any layer.
"""
