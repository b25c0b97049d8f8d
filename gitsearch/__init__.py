"""gitsearch: find git repositories with uncommitted work under a directory."""

__version__ = "0.1.0"
