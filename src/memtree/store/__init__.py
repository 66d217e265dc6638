"""In-memory tree store: files and directories addressed by slash paths."""

from memtree.store.client import TreeStore
from memtree.store.errors import (
    ConflictError,
    EntryNotFoundError,
    InvalidPathError,
    TreeStoreError,
)
from memtree.store.models import (
    Directory,
    DirectoryEntry,
    DirectoryListing,
    Entry,
    EntryInfo,
    EntryType,
    File,
    TreeNode,
)
from memtree.store.seed import apply_seed, load_seed

__all__ = [
    # Store
    "TreeStore",
    # Seeding
    "apply_seed",
    "load_seed",
    # Nodes
    "Entry",
    "File",
    "Directory",
    "EntryType",
    # Result Models
    "EntryInfo",
    "DirectoryEntry",
    "DirectoryListing",
    "TreeNode",
    # Errors
    "TreeStoreError",
    "InvalidPathError",
    "ConflictError",
    "EntryNotFoundError",
]
