from __future__ import annotations

import glob
import shutil
from pathlib import Path

from partition_resolver.core.ports.filesystem import FileStatus


class LocalFileSystem:
    """
    FileSystem backed by the local disk.

    With a ``root``, every path is interpreted relative to it (a leading
    ``/`` is ignored) and listed entries are reported back as rooted
    logical paths, so templates stay identical across environments.
    """

    def __init__(self, root: str | Path | None = None) -> None:
        self._root = Path(root) if root is not None else None

    def _resolve(self, path: str) -> Path:
        if self._root is None:
            return Path(path)
        return self._root / path.lstrip("/")

    def list(self, pattern: str) -> list[FileStatus]:
        if self._root is None:
            matches = sorted(glob.glob(pattern))
            return [
                FileStatus(path=match, name=Path(match).name, is_dir=Path(match).is_dir())
                for match in matches
            ]

        # Only the pattern is glob syntax; the root is matched literally.
        matches = sorted(glob.glob(pattern.lstrip("/"), root_dir=self._root))
        return [
            FileStatus(
                path="/" + Path(match).as_posix(),
                name=Path(match).name,
                is_dir=(self._root / match).is_dir(),
            )
            for match in matches
        ]

    def read_bytes(self, path: str) -> bytes:
        return self._resolve(path).read_bytes()

    def write_bytes(self, path: str, data: bytes) -> None:
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    def delete(self, path: str) -> None:
        target = self._resolve(path)
        if target.is_dir():
            shutil.rmtree(target)
        elif target.exists():
            target.unlink()

    def __repr__(self) -> str:
        return f"LocalFileSystem(root={self._root})"
