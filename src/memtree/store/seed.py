"""Populate a tree store from a YAML seed document."""

import logging
from pathlib import Path
from typing import Any

import yaml

from memtree.store.client import TreeStore
from memtree.store.paths import join_path, validate_name

logger = logging.getLogger(__name__)


_SCALAR_TYPES = (str, int, float, bool)


def _seed_text(path: str, value: Any) -> str:
    """Convert a scalar seed value to file content."""
    if value is None:
        return ""
    if not isinstance(value, _SCALAR_TYPES):
        raise ValueError(f"Unsupported seed value at {path}: {type(value).__name__}")
    return str(value)


def _apply_nested(store: TreeStore, tree: dict[str, Any], prefix: str) -> int:
    """Load a nested mapping: mappings are directories, strings are files."""
    count = 0
    for name, value in tree.items():
        path = join_path(prefix, validate_name(str(name)))
        if isinstance(value, dict):
            if not value:
                store.make_directory(path)
            count += _apply_nested(store, value, path)
        else:
            store.create_file(path, _seed_text(path, value))
            count += 1
    return count


def apply_seed(store: TreeStore, data: dict[str, Any]) -> int:
    """Apply a parsed seed document to a store.

    Two sections are recognised and may be combined:

    - ``files``: flat mapping of file path to content
    - ``tree``: nested mapping where a mapping is a directory and a scalar is a file

    Args:
        store: Store to populate
        data: Parsed seed document

    Returns:
        Number of files written
    """
    count = 0

    files = data.get("files") or {}
    if not isinstance(files, dict):
        raise ValueError("Seed 'files' section must be a mapping")
    for path, content in files.items():
        store.create_file(str(path), _seed_text(str(path), content))
        count += 1

    tree = data.get("tree") or {}
    if not isinstance(tree, dict):
        raise ValueError("Seed 'tree' section must be a mapping")
    count += _apply_nested(store, tree, "")

    return count


def load_seed(store: TreeStore, seed_file: str | Path) -> int:
    """Load a YAML seed file into a store.

    Args:
        store: Store to populate
        seed_file: Path to the YAML document

    Returns:
        Number of files written

    Raises:
        FileNotFoundError: If the seed file does not exist
    """
    path = Path(seed_file).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"Seed file not found: {path}")

    logger.debug(f"Loading seed from {path}")
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Seed file must contain a mapping: {path}")

    count = apply_seed(store, data)
    logger.info(f"Seeded {count} files from {path}")
    return count
