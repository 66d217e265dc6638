"""MCP server exposing an in-memory tree store."""

import logging
import sys
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from memtree.config import Settings
from memtree.store.client import TreeStore
from memtree.store.errors import TreeStoreError
from memtree.store.seed import load_seed

logger = logging.getLogger(__name__)

mcp = FastMCP("memtree")
_store: TreeStore | None = None
_settings: Settings | None = None


def _get_store() -> TreeStore:
    """Get the TreeStore instance, raising if not initialized."""
    if _store is None:
        raise RuntimeError("TreeStore not initialized")
    return _store


def _max_depth(max_depth: int | None) -> int:
    if max_depth is not None:
        return max_depth
    return _settings.tree_max_depth if _settings else 3


# ----------------------------------------------------------------------------
# Mutating tools return failures as text
# ----------------------------------------------------------------------------


@mcp.tool()
def create_file(path: str, content: str) -> str:
    """Create or overwrite a file, creating parent directories as needed.

    Args:
        path: File path, e.g. "docs/readme.md" (leading slash optional)
        content: Text content of the file

    Returns:
        Confirmation message or error description
    """
    logger.info(f"[FS] create_file: {path}")
    try:
        _get_store().create_file(path, content)
    except TreeStoreError as e:
        return f"Error: {e}"
    return f"Created {path}"


@mcp.tool()
def delete_file(path: str) -> str:
    """Delete a file or a directory with everything below it.

    Args:
        path: Path to delete. Missing paths are ignored.

    Returns:
        Confirmation message or error description
    """
    logger.info(f"[FS] delete_file: {path}")
    try:
        _get_store().delete_file(path)
    except TreeStoreError as e:
        return f"Error: {e}"
    return f"Deleted {path}"


@mcp.tool()
def move_file(old_path: str, new_path: str) -> str:
    """Move a file, overwriting any file at the destination.

    Args:
        old_path: Current file path
        new_path: Destination file path

    Returns:
        Confirmation message or error description
    """
    logger.info(f"[FS] move_file: {old_path} -> {new_path}")
    try:
        if not _get_store().move_file(old_path, new_path):
            return f"Error: File not found: {old_path}"
    except TreeStoreError as e:
        return f"Error: {e}"
    return f"Moved {old_path} to {new_path}"


@mcp.tool()
def rename_file(old_path: str, new_path: str) -> str:
    """Rename a file. Same as move_file.

    Args:
        old_path: Current file path
        new_path: New file path

    Returns:
        Confirmation message or error description
    """
    return move_file(old_path, new_path)


@mcp.tool()
def copy_file(path: str, new_path: str) -> str:
    """Copy a file, overwriting any file at the destination.

    Args:
        path: Source file path
        new_path: Destination file path

    Returns:
        Confirmation message or error description
    """
    logger.info(f"[FS] copy_file: {path} -> {new_path}")
    try:
        if not _get_store().copy_file(path, new_path):
            return f"Error: File not found: {path}"
    except TreeStoreError as e:
        return f"Error: {e}"
    return f"Copied {path} to {new_path}"


# ----------------------------------------------------------------------------
# Query tools
# ----------------------------------------------------------------------------


@mcp.tool()
def read_file(path: str) -> str | None:
    """Read contents of a file.

    Args:
        path: File path

    Returns:
        File content, or null if no file exists at the path
    """
    logger.info(f"[FS] read_file: {path}")
    return _get_store().read_file(path)


@mcp.tool()
def list_files_and_directories(path: str = "/") -> list[str]:
    """List names directly inside a directory.

    Args:
        path: Directory path ("/" for the root)

    Returns:
        Sorted list of names, empty if the directory does not exist
    """
    logger.info(f"[FS] list_files_and_directories: {path}")
    return sorted(_get_store().list_files_and_directories(path))


@mcp.tool()
def list_directory(path: str = "/") -> dict:
    """List contents of a directory with entry types.

    Args:
        path: Directory path ("/" for the root)

    Returns:
        Dict with path, entries, total_files, total_directories
    """
    logger.info(f"[FS] list_directory: {path}")
    return _get_store().list_directory(path).model_dump(mode="json")


@mcp.tool()
def search_file(file_name: str) -> list[str]:
    """Find all files with the given name anywhere in the tree.

    Args:
        file_name: Exact file name, e.g. "readme.md"

    Returns:
        Full paths of matching files
    """
    logger.info(f"[FS] search_file: {file_name}")
    return _get_store().search_file(file_name)


@mcp.tool()
def get_tree(path: str = "/", max_depth: int | None = None) -> str:
    """Get string representation of directory tree.

    Args:
        path: Directory path ("/" for the root)
        max_depth: Maximum depth to traverse (defaults to configured depth)

    Returns:
        String representation of the directory tree
    """
    depth = _max_depth(max_depth)
    logger.info(f"[FS] get_tree: {path} (depth={depth})")
    return _get_store().get_tree_string(path, depth)


@mcp.tool()
def file_exists(path: str = "/") -> bool:
    """Check if a file or directory exists.

    Args:
        path: Path to check

    Returns:
        True if path exists
    """
    logger.info(f"[FS] file_exists: {path}")
    return _get_store().exists(path)


@mcp.tool()
def get_file_info(path: str = "/") -> dict:
    """Get information about a file or directory.

    Args:
        path: Entry path

    Returns:
        Dict with path, name, entry_type, size, children
    """
    logger.info(f"[FS] get_file_info: {path}")
    return _get_store().get_info(path).model_dump(mode="json")


def init_store(
    settings: Settings,
    seed_file: Path | None = None,
    store: TreeStore | None = None,
) -> TreeStore:
    """Install the served store.

    A store passed in is served as is. Otherwise a new one is created and
    the seed document, if any, is loaded into it.
    """
    global _store, _settings

    _settings = settings
    if store is not None:
        _store = store
        return _store

    _store = TreeStore(thread_safe=settings.thread_safe)
    seed = seed_file or settings.seed_file
    if seed is not None:
        load_seed(_store, seed)

    return _store


def run_server(
    settings: Settings | None = None,
    seed_file: Path | None = None,
    store: TreeStore | None = None,
) -> None:
    """Start the MCP server (called from CLI or __main__)."""
    # Suppress noisy MCP server "Processing request" logs
    logging.getLogger("mcp.server").setLevel(logging.WARNING)
    logging.getLogger("mcp.server.lowlevel").setLevel(logging.WARNING)

    settings = settings or Settings()

    # Send application logs to stderr (stdout is the MCP transport)
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    store = init_store(settings, seed_file, store)
    logger.info(f"memtree MCP server starting ({len(store.walk_files())} files seeded)")
    mcp.run()


if __name__ == "__main__":
    run_server(seed_file=Path(sys.argv[1]) if len(sys.argv) > 1 else None)
