"""Path parsing for the tree store.

Conventions applied by every store operation:

- ``/`` separates segments.
- A single leading ``/`` is optional and stripped.
- A single trailing ``/`` is accepted when the path addresses a directory,
  rejected when it addresses a file.
- Empty segments (``a//b``) and the ``.``/``..`` segments are rejected.
- ``""`` and ``"/"`` both denote the root directory.
- Result models (``EntryInfo``, ``DirectoryListing``, ``TreeNode``) label the
  root ``"/"``. Every other path is reported without a leading slash.
"""

from memtree.store.errors import InvalidPathError

SEPARATOR = "/"
ROOT_PATHS = {"", SEPARATOR}
ROOT_LABEL = SEPARATOR

_RESERVED_SEGMENTS = {".", ".."}


def _check_segments(path: str, segments: list[str]) -> list[str]:
    for segment in segments:
        if not segment:
            raise InvalidPathError(f"Empty path segment in: {path!r}")
        if segment in _RESERVED_SEGMENTS:
            raise InvalidPathError(f"Relative segment {segment!r} not allowed in: {path!r}")
    return segments


def split_dir_path(path: str) -> list[str]:
    """Split a directory path into its segments.

    Args:
        path: Directory path; ``""`` or ``"/"`` for the root

    Returns:
        List of segments, empty for the root

    Raises:
        InvalidPathError: If the path contains empty or relative segments
    """
    if path in ROOT_PATHS:
        return []
    trimmed = path.removeprefix(SEPARATOR).removesuffix(SEPARATOR)
    if not trimmed:
        raise InvalidPathError(f"Invalid path: {path!r}")
    return _check_segments(path, trimmed.split(SEPARATOR))


def split_file_path(path: str) -> tuple[list[str], str]:
    """Split a file path into directory segments and the leaf name.

    Args:
        path: File path such as ``"docs/readme.md"`` or ``"/docs/readme.md"``

    Returns:
        Tuple of (directory segments, leaf name)

    Raises:
        InvalidPathError: If the path is the root, ends with ``/``, or
            contains empty or relative segments
    """
    if path in ROOT_PATHS:
        raise InvalidPathError(f"Path does not name a file: {path!r}")
    if path.endswith(SEPARATOR):
        raise InvalidPathError(f"File path must not end with '/': {path!r}")
    segments = _check_segments(path, path.removeprefix(SEPARATOR).split(SEPARATOR))
    return segments[:-1], segments[-1]


def validate_name(name: str) -> str:
    """Check that ``name`` is usable as a single entry name."""
    if not name or SEPARATOR in name or name in _RESERVED_SEGMENTS:
        raise InvalidPathError(f"Invalid entry name: {name!r}")
    return name


def join_path(*segments: str) -> str:
    """Join segments into a canonical path (no leading slash)."""
    return SEPARATOR.join(s for s in segments if s)
