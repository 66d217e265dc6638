"""
Global Pytest Configuration and Fixtures.

Makes the 'src' directory importable and provides shared stores and
seed documents.
"""

import os
import sys
from pathlib import Path

import pytest

_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from memtree import config as config_module  # noqa: E402
from memtree.store import TreeStore  # noqa: E402

SEED_YAML = """\
files:
  dir/a.txt: Hello
  dir/b.txt: World
  dir/sub/b.txt: Nested
tree:
  docs:
    readme.md: "# Docs"
    empty: {}
"""


@pytest.fixture
def store() -> TreeStore:
    """Return an empty store."""
    return TreeStore()


@pytest.fixture
def populated_store() -> TreeStore:
    """
    Return a store holding:

        dir/a.txt        "Hello"
        dir/b.txt        "World"
        dir/sub/b.txt    "Nested"
        notes.txt        "top"
    """
    store = TreeStore()
    store.create_file("dir/a.txt", "Hello")
    store.create_file("dir/b.txt", "World")
    store.create_file("dir/sub/b.txt", "Nested")
    store.create_file("notes.txt", "top")
    return store


@pytest.fixture
def seed_file(tmp_path: Path) -> Path:
    """Write the shared seed document and return its path."""
    path = tmp_path / "seed.yaml"
    path.write_text(SEED_YAML)
    return path


@pytest.fixture
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Run with no config files, no MEMTREE_* variables and a fresh settings cache.

    Returns the temporary working directory.
    """
    for key in list(os.environ):
        if key.startswith("MEMTREE_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATHS", [tmp_path / "memtree.yaml"])
    monkeypatch.setattr(config_module, "settings", None)
    monkeypatch.setattr(config_module, "_config_file", None)
    return tmp_path
