"""
Unit tests for the core TreeStore operations.

Verifies:
1. Create/read round trips, overwrite, and nested directory creation.
2. Listing, deletion, move/rename and copy semantics.
3. Search across depths.
4. Conflict and invalid-path handling leave the tree unchanged.
"""

import threading

import pytest

from memtree.store import ConflictError, Directory, File, InvalidPathError, TreeStore


# -----------------------------------------------------------------------------
# create_file / read_file
# -----------------------------------------------------------------------------
def test_create_and_read_file(store):
    store.create_file("/a.txt", "Hello")
    assert store.read_file("/a.txt") == "Hello"


def test_leading_slash_is_optional(store):
    store.create_file("a.txt", "Hello")
    assert store.read_file("/a.txt") == "Hello"
    assert store.read_file("a.txt") == "Hello"


def test_read_non_existent_file(store):
    assert store.read_file("/b.txt") is None
    assert store.read_file("missing/dir/b.txt") is None


def test_read_does_not_create_directories(store):
    store.read_file("x/y/z.txt")
    assert store.list_files_and_directories("/") == set()


def test_create_overwrites_file(store):
    store.create_file("dir/a.txt", "old")
    store.create_file("dir/a.txt", "new")
    assert store.read_file("dir/a.txt") == "new"


def test_empty_content_is_a_file(store):
    store.create_file("empty.txt", "")
    assert store.read_file("empty.txt") == ""


def test_create_nested_file_materializes_directories(store):
    store.create_file("a/b/c.txt", "x")
    assert store.read_file("a/b/c.txt") == "x"
    assert store.list_files_and_directories("a") == {"b"}
    assert store.list_files_and_directories("a/b") == {"c.txt"}
    assert isinstance(store.root.children["a"], Directory)


def test_read_directory_returns_none(populated_store):
    assert populated_store.read_file("dir/sub") is None


def test_read_through_file_returns_none(populated_store):
    assert populated_store.read_file("notes.txt/inner.txt") is None


# -----------------------------------------------------------------------------
# Conflicts
# -----------------------------------------------------------------------------
def test_create_through_file_raises_conflict(populated_store):
    with pytest.raises(ConflictError) as excinfo:
        populated_store.create_file("dir/a.txt/deeper/x.txt", "x")
    assert excinfo.value.path == "dir/a.txt"
    assert populated_store.read_file("dir/a.txt") == "Hello"


def test_create_over_directory_raises_conflict(populated_store):
    with pytest.raises(ConflictError):
        populated_store.create_file("dir/sub", "x")
    assert populated_store.list_files_and_directories("dir/sub") == {"b.txt"}


def test_conflict_leaves_no_partial_directories(store):
    store.create_file("a/file", "x")
    with pytest.raises(ConflictError):
        store.create_file("a/file/b/c.txt", "y")
    assert store.list_files_and_directories("a") == {"file"}
    assert isinstance(store.root.children["a"].children["file"], File)


# -----------------------------------------------------------------------------
# Invalid paths
# -----------------------------------------------------------------------------
@pytest.mark.parametrize("path", ["", "/", "dir/", "a//b.txt"])
def test_create_rejects_invalid_paths(store, path):
    with pytest.raises(InvalidPathError):
        store.create_file(path, "x")
    assert store.list_files_and_directories("") == set()


def test_delete_root_rejected(populated_store):
    with pytest.raises(InvalidPathError):
        populated_store.delete_file("/")


# -----------------------------------------------------------------------------
# list_files_and_directories
# -----------------------------------------------------------------------------
def test_list_files_and_directories(store):
    store.create_file("/dir/a.txt", "Hello")
    store.create_file("/dir/b.txt", "World")
    assert store.list_files_and_directories("/dir") == {"a.txt", "b.txt"}


@pytest.mark.parametrize("root", ["", "/"])
def test_list_root(populated_store, root):
    assert populated_store.list_files_and_directories(root) == {"dir", "notes.txt"}


def test_list_includes_directories(populated_store):
    assert populated_store.list_files_and_directories("dir") == {"a.txt", "b.txt", "sub"}


def test_list_missing_or_file_is_empty(populated_store):
    assert populated_store.list_files_and_directories("nope") == set()
    assert populated_store.list_files_and_directories("notes.txt") == set()
    assert populated_store.list_files_and_directories("dir/a.txt") == set()


def test_list_returns_copy(populated_store):
    names = populated_store.list_files_and_directories("dir")
    names.add("injected")
    assert "injected" not in populated_store.list_files_and_directories("dir")


# -----------------------------------------------------------------------------
# delete_file
# -----------------------------------------------------------------------------
def test_delete_file(store):
    store.create_file("/a.txt", "Hello")
    store.delete_file("/a.txt")
    assert store.read_file("/a.txt") is None

    store.create_file("/dir1/dir2/a.txt", "Hello")
    store.delete_file("/dir1/dir2/a.txt")
    assert store.read_file("/dir1/dir2/a.txt") is None


def test_delete_keeps_empty_directories(store):
    store.create_file("dir1/dir2/a.txt", "Hello")
    store.delete_file("dir1/dir2/a.txt")
    assert store.list_files_and_directories("dir1") == {"dir2"}
    assert store.list_files_and_directories("dir1/dir2") == set()


def test_delete_nonexistent_is_noop(populated_store):
    before = populated_store.walk_files()
    populated_store.delete_file("missing.txt")
    populated_store.delete_file("missing/dir/file.txt")
    populated_store.delete_file("notes.txt/child")
    assert populated_store.walk_files() == before


def test_delete_directory_removes_subtree(populated_store):
    populated_store.delete_file("dir/")
    assert populated_store.list_files_and_directories("/") == {"notes.txt"}
    assert populated_store.search_file("b.txt") == []


# -----------------------------------------------------------------------------
# move_file / rename_file / copy_file
# -----------------------------------------------------------------------------
def test_rename_file(store):
    store.create_file("/a.txt", "Hello")
    assert store.rename_file("/a.txt", "/b.txt") is True
    assert store.read_file("/a.txt") is None
    assert store.read_file("/b.txt") == "Hello"


def test_move_file_into_new_directory(store):
    store.create_file("/a.txt", "Hello")
    store.move_file("/a.txt", "/archive/2024/a.txt")
    assert store.read_file("/a.txt") is None
    assert store.read_file("archive/2024/a.txt") == "Hello"


def test_move_overwrites_destination(populated_store):
    populated_store.move_file("dir/a.txt", "dir/b.txt")
    assert populated_store.read_file("dir/a.txt") is None
    assert populated_store.read_file("dir/b.txt") == "Hello"


def test_move_missing_source_leaves_destination(populated_store):
    assert populated_store.move_file("missing.txt", "notes.txt") is False
    assert populated_store.read_file("notes.txt") == "top"


def test_move_onto_itself_keeps_file(populated_store):
    assert populated_store.move_file("dir/a.txt", "/dir/a.txt") is True
    assert populated_store.read_file("dir/a.txt") == "Hello"


def test_move_directory_is_noop(populated_store):
    assert populated_store.move_file("dir/sub", "moved") is False
    assert populated_store.read_file("dir/sub/b.txt") == "Nested"
    assert not populated_store.exists("moved")


def test_move_onto_directory_raises_and_keeps_source(populated_store):
    with pytest.raises(ConflictError):
        populated_store.move_file("notes.txt", "dir/sub")
    assert populated_store.read_file("notes.txt") == "top"


def test_copy_file(store):
    store.create_file("/a.txt", "Hello")
    assert store.copy_file("/a.txt", "/b.txt") is True
    assert store.read_file("/a.txt") == "Hello"
    assert store.read_file("/b.txt") == "Hello"


def test_copy_missing_source_is_noop(populated_store):
    assert populated_store.copy_file("missing.txt", "copy.txt") is False
    assert populated_store.read_file("copy.txt") is None


def test_copies_are_independent(store):
    store.create_file("a.txt", "one")
    store.copy_file("a.txt", "b.txt")
    store.create_file("a.txt", "two")
    assert store.read_file("b.txt") == "one"


# -----------------------------------------------------------------------------
# search_file
# -----------------------------------------------------------------------------
def test_search_file(store):
    store.create_file("/dir/a.txt", "Hello")
    store.create_file("/dir/subdir/b.txt", "World")
    assert store.search_file("a.txt") == ["dir/a.txt"]
    assert store.search_file("b.txt") == ["dir/subdir/b.txt"]


def test_search_finds_all_depths(populated_store):
    assert sorted(populated_store.search_file("b.txt")) == ["dir/b.txt", "dir/sub/b.txt"]


def test_search_top_level_has_no_leading_slash(populated_store):
    assert populated_store.search_file("notes.txt") == ["notes.txt"]


def test_search_excludes_directories(populated_store):
    populated_store.create_file("other/sub.txt", "x")
    assert populated_store.search_file("sub") == []


def test_search_no_match(populated_store):
    assert populated_store.search_file("nothing.txt") == []


@pytest.mark.parametrize("name", ["", "dir/a.txt"])
def test_search_rejects_invalid_names(populated_store, name):
    with pytest.raises(InvalidPathError):
        populated_store.search_file(name)


# -----------------------------------------------------------------------------
# Concurrency
# -----------------------------------------------------------------------------
@pytest.mark.parametrize("thread_safe", [True, False])
def test_store_works_with_and_without_lock(thread_safe):
    store = TreeStore(thread_safe=thread_safe)
    store.create_file("a/b.txt", "x")
    store.copy_file("a/b.txt", "a/c.txt")
    assert store.list_files_and_directories("a") == {"b.txt", "c.txt"}


def test_concurrent_creates_lose_nothing():
    store = TreeStore()
    workers = 8
    per_worker = 50

    def write(worker: int) -> None:
        for i in range(per_worker):
            store.create_file(f"shared/w{worker}/f{i}.txt", str(i))

    threads = [threading.Thread(target=write, args=(n,)) for n in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store.list_files_and_directories("shared")) == workers
    assert len(store.walk_files()) == workers * per_worker
