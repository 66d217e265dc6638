"""Data models for the tree store."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from pydantic import BaseModel, Field


class EntryType(str, Enum):
    """Type of tree entry."""

    FILE = "file"
    DIRECTORY = "directory"


# ============================================================================
# TREE NODES
# ============================================================================


@dataclass
class File:
    """Leaf entry holding text content."""

    content: str = ""

    @property
    def entry_type(self) -> EntryType:
        return EntryType.FILE


@dataclass
class Directory:
    """Internal entry owning a mapping of name to child entry."""

    children: dict[str, "Entry"] = field(default_factory=dict)

    @property
    def entry_type(self) -> EntryType:
        return EntryType.DIRECTORY


Entry = Union[File, Directory]


# ============================================================================
# RESULT MODELS
# ============================================================================


class EntryInfo(BaseModel):
    """Information about a file or directory."""

    path: str = Field(description="Path from root without leading slash (\"/\" for root)")
    name: str = Field(description="File or directory name (empty for root)")
    entry_type: EntryType = Field(description="Type of entry")
    size: int = Field(default=0, description="Content length in characters (0 for directories)")
    children: int = Field(default=0, description="Number of immediate children (0 for files)")

    @classmethod
    def from_entry(cls, path: str, entry: Entry) -> "EntryInfo":
        """Create EntryInfo from a tree entry.

        Args:
            path: Canonical path of the entry
            entry: The entry itself

        Returns:
            EntryInfo instance
        """
        name = path.rstrip("/").rsplit("/", 1)[-1]
        if isinstance(entry, File):
            return cls(path=path, name=name, entry_type=entry.entry_type, size=len(entry.content))
        return cls(path=path, name=name, entry_type=entry.entry_type, children=len(entry.children))


class DirectoryEntry(BaseModel):
    """Entry in a directory listing."""

    name: str = Field(description="Entry name")
    entry_type: EntryType = Field(description="Type of entry")
    size: int = Field(default=0, description="Content length in characters")


class DirectoryListing(BaseModel):
    """Result of listing a directory."""

    path: str = Field(description="Directory path")
    entries: list[DirectoryEntry] = Field(default_factory=list, description="Directory contents")
    total_files: int = Field(default=0, description="Number of files")
    total_directories: int = Field(default=0, description="Number of directories")

    @property
    def names(self) -> set[str]:
        return {entry.name for entry in self.entries}


class TreeNode(BaseModel):
    """Node in a rendered directory tree."""

    name: str = Field(description="Entry name")
    entry_type: EntryType = Field(description="Type of entry")
    children: list["TreeNode"] = Field(default_factory=list, description="Child nodes")

    def to_string(self, prefix: str = "", is_last: bool = True) -> str:
        """Convert tree node to string representation.

        Args:
            prefix: Current line prefix
            is_last: Whether this is the last sibling

        Returns:
            String representation of the tree
        """
        connector = "└── " if is_last else "├── "
        is_dir = self.entry_type == EntryType.DIRECTORY
        suffix = "/" if is_dir and not self.name.endswith("/") else ""
        result = f"{prefix}{connector}{self.name}{suffix}\n"

        child_prefix = prefix + ("    " if is_last else "│   ")
        for i, child in enumerate(self.children):
            result += child.to_string(child_prefix, i == len(self.children) - 1)

        return result
