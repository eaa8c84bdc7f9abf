"""
Semantic test: local disk filesystem.

Invariant:
A rooted LocalFileSystem lists, reads, writes and deletes by logical
paths, and reports matches with the same logical paths the in-memory
filesystem would.
"""

from __future__ import annotations

from pathlib import Path

from partition_resolver.io.local_fs import LocalFileSystem
from partition_resolver.io.memory_fs import MemoryFileSystem


def test_write_creates_parents_and_lists_logically(tmp_path: Path) -> None:
    fs = LocalFileSystem(root=tmp_path)

    fs.write_bytes("/logs/2012/01/30/part-00000", b"a\n")

    assert (tmp_path / "logs/2012/01/30/part-00000").read_bytes() == b"a\n"
    entries = fs.list("/logs/2012/01/30/*")
    assert [(entry.path, entry.name, entry.is_dir) for entry in entries] == [
        ("/logs/2012/01/30/part-00000", "part-00000", False),
    ]


def test_directories_are_reported(tmp_path: Path) -> None:
    fs = LocalFileSystem(root=tmp_path)
    fs.write_bytes("/logs/2012/01/30/part-00000", b"")

    entries = fs.list("/logs/2012/01/*")

    assert [(entry.path, entry.is_dir) for entry in entries] == [("/logs/2012/01/30", True)]


def test_listing_matches_memory_filesystem(tmp_path: Path) -> None:
    local = LocalFileSystem(root=tmp_path)
    memory = MemoryFileSystem()
    for path in ("/d/2012/01/01/part-00000", "/d/2012/01/01/_SUCCESS", "/d/2012/01/02/x"):
        local.write_bytes(path, b"")
        memory.write_bytes(path, b"")

    for pattern in ("/d/2012/01/*", "/d/2012/01/01/*", "/d/2012/02/*"):
        assert local.list(pattern) == memory.list(pattern)


def test_delete_removes_trees_and_ignores_missing(tmp_path: Path) -> None:
    fs = LocalFileSystem(root=tmp_path)
    fs.write_bytes("/out/2012/part-00000", b"x")

    fs.delete("/out/2012")
    fs.delete("/out/missing")

    assert fs.list("/out/*") == []


def test_root_with_glob_characters_is_literal(tmp_path: Path) -> None:
    root = tmp_path / "data[1]"
    fs = LocalFileSystem(root=root)
    fs.write_bytes("/logs/2012/01/30/part-00000", b"a\n")

    assert [(entry.path, entry.is_dir) for entry in fs.list("/logs/2012/01/*")] == [
        ("/logs/2012/01/30", True),
    ]
    assert fs.list("/logs/2012/01/30/part-00000")[0].name == "part-00000"
