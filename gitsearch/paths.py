"""Root normalization: turn a user path into an absolute, slash-terminated directory."""

from __future__ import annotations

import os
from typing import Optional

from gitsearch.errors import InvalidArgument

NOT_A_DIRECTORY = "A non-directory argument was provided."


def with_trailing_sep(path: str) -> str:
    """Return path with exactly one terminal separator appended if missing."""
    return path if path.endswith(os.sep) else path + os.sep


def normalize_root(path: Optional[str] = None) -> str:
    """Resolve path (default: the current directory) for the scanner.

    `.` and `..` components and symlinks are resolved the way `realpath`
    resolves them, without changing the process working directory.
    Raises InvalidArgument when path does not name an existing directory.
    """
    if path:
        candidate = os.path.expanduser(path)
        if not os.path.isdir(candidate):
            raise InvalidArgument(NOT_A_DIRECTORY)
    else:
        candidate = os.getcwd()

    return with_trailing_sep(os.path.realpath(candidate))
