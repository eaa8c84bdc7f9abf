from __future__ import annotations

from partition_resolver.core.ports.filesystem import FileStatus, glob_entries, split_path


class MemoryFileSystem:
    """In-process FileSystem (used for tests and dry runs).

    Files live in a flat dict keyed by normalized path; directories exist
    implicitly as prefixes of file keys.
    """

    def __init__(self, files: dict[str, bytes] | None = None) -> None:
        self._files: dict[str, bytes] = {}
        self.list_calls: list[str] = []
        for path, data in (files or {}).items():
            self.write_bytes(path, data)

    @staticmethod
    def _key(path: str) -> str:
        return "/" + "/".join(split_path(path))

    def touch(self, path: str) -> None:
        self.write_bytes(path, b"")

    def list(self, pattern: str) -> list[FileStatus]:
        self.list_calls.append(pattern)
        return glob_entries(self._key(pattern), self._files)

    def read_bytes(self, path: str) -> bytes:
        try:
            return self._files[self._key(path)]
        except KeyError:
            raise FileNotFoundError(path) from None

    def write_bytes(self, path: str, data: bytes) -> None:
        self._files[self._key(path)] = bytes(data)

    def delete(self, path: str) -> None:
        key = self._key(path)
        for existing in [k for k in self._files if k == key or k.startswith(key + "/")]:
            del self._files[existing]

    def keys(self) -> list[str]:
        return sorted(self._files)
