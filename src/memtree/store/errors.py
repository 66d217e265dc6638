"""Exceptions raised by the tree store."""


class TreeStoreError(Exception):
    """Base class for tree store errors."""


class InvalidPathError(TreeStoreError, ValueError):
    """Path is empty, malformed, or does not name a target."""


class ConflictError(TreeStoreError):
    """A file and a directory collide at the same path segment."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class EntryNotFoundError(TreeStoreError, FileNotFoundError):
    """No entry exists at the requested path."""
