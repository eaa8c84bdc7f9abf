"""Filesystem capability consumed by path validation and taps.

Local and object-storage implementations must behave identically from the
resolver's point of view: ``list`` is a glob where ``*`` never crosses a
``/`` boundary and matched entries may be files or (implicit) directories.
"""

from __future__ import annotations

from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Iterable, Protocol


@dataclass(frozen=True, slots=True)
class FileStatus:
    path: str
    name: str
    is_dir: bool = False


class FileSystem(Protocol):
    def list(self, pattern: str) -> list[FileStatus]:
        """Return the entries matching ``pattern``; empty when nothing matches."""

    def read_bytes(self, path: str) -> bytes:
        """Return the full content of a file."""

    def write_bytes(self, path: str, data: bytes) -> None:
        """Create or overwrite a file, creating parents as needed."""

    def delete(self, path: str) -> None:
        """Remove a file or a whole directory tree; missing paths are ignored."""


def split_path(path: str) -> list[str]:
    return [part for part in path.strip("/").split("/") if part]


def glob_entries(pattern: str, keys: Iterable[str]) -> list[FileStatus]:
    """
    Match flat object keys against a path glob.

    Keys deeper than the pattern produce an implicit directory entry at the
    pattern's depth, the way a hierarchical filesystem would report it.
    """
    pattern_parts = split_path(pattern)
    depth = len(pattern_parts)
    leading = "/" if pattern.startswith("/") else ""

    entries: dict[str, FileStatus] = {}
    for key in keys:
        key_parts = split_path(key)
        if len(key_parts) < depth:
            continue

        head = key_parts[:depth]
        if not all(fnmatchcase(part, pat) for part, pat in zip(head, pattern_parts)):
            continue

        entry_path = leading + "/".join(head)
        is_dir = len(key_parts) > depth
        known = entries.get(entry_path)
        if known is None or (is_dir and not known.is_dir):
            entries[entry_path] = FileStatus(path=entry_path, name=head[-1], is_dir=is_dir)

    return [entries[path] for path in sorted(entries)]
