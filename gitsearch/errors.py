"""Error types raised while normalizing a root or scanning a tree."""

from __future__ import annotations


class GitSearchError(Exception):
    """Base class for every gitsearch error."""


class InvalidArgument(GitSearchError):
    """The root supplied by the user (or the environment) is unusable."""


class UnreadableDirectory(GitSearchError):
    """A directory could not be listed during traversal."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}" if reason else path)


class InspectionFailure(GitSearchError):
    """`git status` could not report on a detected repository."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
