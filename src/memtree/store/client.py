"""In-memory tree store for file operations."""

import logging
import threading
from contextlib import nullcontext
from typing import ContextManager

from memtree.store.errors import ConflictError, EntryNotFoundError, InvalidPathError
from memtree.store.models import (
    Directory,
    DirectoryEntry,
    DirectoryListing,
    Entry,
    EntryInfo,
    File,
    TreeNode,
)
from memtree.store.paths import ROOT_LABEL, join_path, split_dir_path, split_file_path, validate_name

logger = logging.getLogger(__name__)


class TreeStore:
    """Path-addressed hierarchy of files and directories held in memory.

    Every public operation runs under a single store-wide lock so that each
    call observes and leaves a consistent tree. Composite operations (move,
    copy) re-enter the lock and are atomic as a whole.

    Example:
        >>> store = TreeStore()
        >>> store.create_file("docs/readme.md", "hello")
        >>> store.read_file("/docs/readme.md")
        'hello'
        >>> store.search_file("readme.md")
        ['docs/readme.md']
    """

    def __init__(self, thread_safe: bool = True) -> None:
        """Initialize an empty store.

        Args:
            thread_safe: Guard each operation with a re-entrant lock
        """
        self.root = Directory()
        self._lock: ContextManager = threading.RLock() if thread_safe else nullcontext()

    # ------------------------------------------------------------------
    # Resolution helpers (callers hold the lock)
    # ------------------------------------------------------------------

    def _find_directory(self, segments: list[str]) -> Directory | None:
        """Walk directory segments without creating anything."""
        current = self.root
        for segment in segments:
            child = current.children.get(segment)
            if not isinstance(child, Directory):
                return None
            current = child
        return current

    def _resolve(self, segments: list[str]) -> Entry | None:
        if not segments:
            return self.root
        parent = self._find_directory(segments[:-1])
        if parent is None:
            return None
        return parent.children.get(segments[-1])

    def _resolve_directory(self, path: str) -> tuple[str, Directory]:
        """Resolve a path that must name an existing directory.

        Raises:
            EntryNotFoundError: If nothing exists at the path
            ConflictError: If the path names a file
        """
        segments = split_dir_path(path)
        entry = self._resolve(segments)
        if entry is None:
            raise EntryNotFoundError(f"Directory not found: {path}")
        if isinstance(entry, File):
            raise ConflictError(path, "Not a directory")
        return join_path(*segments), entry

    # ------------------------------------------------------------------
    # Core operations
    # ------------------------------------------------------------------

    def create_file(self, path: str, content: str) -> None:
        """Create or overwrite a file, creating missing parent directories.

        The whole path is checked before anything is created, so a
        conflicting call leaves the tree untouched.

        Args:
            path: File path
            content: Text content

        Raises:
            InvalidPathError: If the path is malformed
            ConflictError: If a parent segment is a file or the leaf is a directory
        """
        dir_segments, name = split_file_path(path)

        with self._lock:
            current = self.root
            missing_at: int | None = None
            for index, segment in enumerate(dir_segments):
                child = current.children.get(segment)
                if child is None:
                    missing_at = index
                    break
                if isinstance(child, File):
                    raise ConflictError(join_path(*dir_segments[: index + 1]), "Path segment is a file")
                current = child

            if missing_at is None:
                if isinstance(current.children.get(name), Directory):
                    raise ConflictError(join_path(*dir_segments, name), "Cannot overwrite directory with file")
            else:
                for segment in dir_segments[missing_at:]:
                    created = Directory()
                    current.children[segment] = created
                    current = created
                logger.debug(f"Created directories for {path}: {dir_segments[missing_at:]}")

            current.children[name] = File(content)

    def make_directory(self, path: str) -> None:
        """Create a directory and any missing parents.

        Existing directories along the path are left as they are.

        Raises:
            InvalidPathError: If the path is malformed or names the root
            ConflictError: If any segment is an existing file
        """
        segments = split_dir_path(path)
        if not segments:
            raise InvalidPathError("Root directory always exists")

        with self._lock:
            current = self.root
            for index, segment in enumerate(segments):
                child = current.children.get(segment)
                if child is None:
                    break
                if isinstance(child, File):
                    raise ConflictError(join_path(*segments[: index + 1]), "Path segment is a file")
                current = child
            else:
                return

            for segment in segments[index:]:
                created = Directory()
                current.children[segment] = created
                current = created
            logger.debug(f"Created directory {path}")

    def read_file(self, path: str) -> str | None:
        """Read file content.

        Args:
            path: File path

        Returns:
            The content, or None if no file exists at the path
        """
        dir_segments, name = split_file_path(path)

        with self._lock:
            parent = self._find_directory(dir_segments)
            if parent is None:
                return None
            entry = parent.children.get(name)
            if isinstance(entry, File):
                return entry.content
            return None

    def list_files_and_directories(self, path: str) -> set[str]:
        """List immediate child names of a directory.

        Args:
            path: Directory path; ``""`` or ``"/"`` for the root

        Returns:
            Set of names, empty if the path is not an existing directory
        """
        segments = split_dir_path(path)

        with self._lock:
            directory = self._find_directory(segments)
            if directory is None:
                return set()
            return set(directory.children)

    def delete_file(self, path: str) -> None:
        """Delete a file or a whole directory subtree.

        Missing paths are ignored.

        Args:
            path: Path of the entry to remove

        Raises:
            InvalidPathError: If the path is malformed or names the root
        """
        segments = split_dir_path(path)
        if not segments:
            raise InvalidPathError("Cannot delete the root directory")

        with self._lock:
            parent = self._find_directory(segments[:-1])
            if parent is None:
                return
            if parent.children.pop(segments[-1], None) is not None:
                logger.debug(f"Deleted {path}")

    def rename_file(self, old_path: str, new_path: str) -> bool:
        """Rename a file. Alias for :meth:`move_file`."""
        return self.move_file(old_path, new_path)

    def move_file(self, old_path: str, new_path: str) -> bool:
        """Move a file to a new path, overwriting any file there.

        Only files move; if ``old_path`` is not a file nothing happens.

        Args:
            old_path: Current file path
            new_path: Destination file path

        Returns:
            True if a file was moved, False if there was nothing to move

        Raises:
            ConflictError: If the destination collides with a directory
        """
        with self._lock:
            content = self.read_file(old_path)
            if content is None:
                logger.debug(f"Move skipped, no file at {old_path}")
                return False
            if split_file_path(old_path) == split_file_path(new_path):
                return True
            self.create_file(new_path, content)
            self.delete_file(old_path)
            return True

    def copy_file(self, path: str, new_path: str) -> bool:
        """Copy a file to a new path, overwriting any file there.

        Args:
            path: Source file path
            new_path: Destination file path

        Returns:
            True if a file was copied, False if there was nothing to copy

        Raises:
            ConflictError: If the destination collides with a directory
        """
        with self._lock:
            content = self.read_file(path)
            if content is None:
                logger.debug(f"Copy skipped, no file at {path}")
                return False
            self.create_file(new_path, content)
            return True

    def search_file(self, file_name: str) -> list[str]:
        """Find every file with the given name.

        Args:
            file_name: Exact file name to match

        Returns:
            Full paths (no leading slash) in depth-first traversal order
        """
        validate_name(file_name)
        results: list[str] = []

        with self._lock:
            self._search(file_name, self.root, "", results)

        return results

    def _search(self, file_name: str, directory: Directory, prefix: str, results: list[str]) -> None:
        for name, entry in directory.children.items():
            path = join_path(prefix, name)
            if isinstance(entry, File):
                if name == file_name:
                    results.append(path)
            else:
                self._search(file_name, entry, path, results)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def exists(self, path: str = "") -> bool:
        """Check if a file or directory exists at the path."""
        segments = split_dir_path(path)
        with self._lock:
            return self._resolve(segments) is not None

    def get_info(self, path: str = "") -> EntryInfo:
        """Get information about a file or directory.

        Args:
            path: Entry path

        Returns:
            EntryInfo describing the entry

        Raises:
            EntryNotFoundError: If path does not exist
        """
        segments = split_dir_path(path)
        with self._lock:
            entry = self._resolve(segments)
            if entry is None:
                raise EntryNotFoundError(f"Path not found: {path}")
            return EntryInfo.from_entry(join_path(*segments) or ROOT_LABEL, entry)

    def list_directory(self, path: str = "") -> DirectoryListing:
        """List contents of a directory with entry types.

        Entries are sorted with directories first, then by name.

        Args:
            path: Directory path

        Returns:
            DirectoryListing with entries

        Raises:
            EntryNotFoundError: If path does not exist
            ConflictError: If path is a file
        """
        with self._lock:
            canonical, directory = self._resolve_directory(path)
            entries: list[DirectoryEntry] = []
            total_files = 0
            total_directories = 0

            ordered = sorted(
                directory.children.items(),
                key=lambda item: (isinstance(item[1], File), item[0].lower()),
            )
            for name, entry in ordered:
                if isinstance(entry, File):
                    total_files += 1
                    entries.append(DirectoryEntry(name=name, entry_type=entry.entry_type, size=len(entry.content)))
                else:
                    total_directories += 1
                    entries.append(DirectoryEntry(name=name, entry_type=entry.entry_type))

        return DirectoryListing(
            path=canonical or ROOT_LABEL,
            entries=entries,
            total_files=total_files,
            total_directories=total_directories,
        )

    def get_tree(self, path: str = "", max_depth: int = 3) -> TreeNode:
        """Get a tree representation of a directory.

        Args:
            path: Directory path
            max_depth: Maximum depth to traverse

        Returns:
            TreeNode representing the directory structure

        Raises:
            EntryNotFoundError: If path does not exist
            ConflictError: If path is a file
        """
        with self._lock:
            canonical, directory = self._resolve_directory(path)
            name = canonical.rsplit("/", 1)[-1] if canonical else ROOT_LABEL
            return self._build_tree(name, directory, max_depth, 0)

    def _build_tree(self, name: str, entry: Entry, max_depth: int, current_depth: int) -> TreeNode:
        if isinstance(entry, File):
            return TreeNode(name=name, entry_type=entry.entry_type)

        children: list[TreeNode] = []
        if current_depth < max_depth:
            ordered = sorted(
                entry.children.items(),
                key=lambda item: (isinstance(item[1], File), item[0].lower()),
            )
            for child_name, child in ordered:
                children.append(self._build_tree(child_name, child, max_depth, current_depth + 1))

        return TreeNode(name=name, entry_type=entry.entry_type, children=children)

    def get_tree_string(self, path: str = "", max_depth: int = 3) -> str:
        """Get a string representation of the directory tree."""
        return self.get_tree(path, max_depth).to_string()

    def walk_files(self, path: str = "") -> list[tuple[str, str]]:
        """Collect every file below a directory.

        Args:
            path: Directory path

        Returns:
            List of (path, content) pairs in depth-first order

        Raises:
            EntryNotFoundError: If path does not exist
            ConflictError: If path is a file
        """
        files: list[tuple[str, str]] = []
        with self._lock:
            canonical, directory = self._resolve_directory(path)
            stack: list[tuple[str, Directory]] = [(canonical, directory)]
            while stack:
                prefix, current = stack.pop()
                subdirs: list[tuple[str, Directory]] = []
                for name, entry in current.children.items():
                    child_path = join_path(prefix, name)
                    if isinstance(entry, File):
                        files.append((child_path, entry.content))
                    else:
                        subdirs.append((child_path, entry))
                stack.extend(reversed(subdirs))
        return files

    def clear(self) -> None:
        """Remove every entry from the store."""
        with self._lock:
            self.root = Directory()
