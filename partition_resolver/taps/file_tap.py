from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Sequence

from partition_resolver.core.domain.types import SinkMode
from partition_resolver.core.validation.path_validator import SUCCESS_MARKER

if TYPE_CHECKING:
    from partition_resolver.core.ports.filesystem import FileStatus, FileSystem
    from partition_resolver.core.ports.tap import Scheme, Tap

LOGGER = logging.getLogger(__name__)

PART_FILE = "part-00000"

# Bookkeeping entries (markers, temp files) are never read as data.
HIDDEN_PREFIXES = ("_", ".")


def _data_files(filesystem: FileSystem, pattern: str) -> Iterator[FileStatus]:
    for status in filesystem.list(pattern):
        if status.name.startswith(HIDDEN_PREFIXES):
            continue
        if status.is_dir:
            yield from _data_files(filesystem, f"{status.path.rstrip('/')}/*")
        else:
            yield status


@dataclass(frozen=True, slots=True)
class FileTap:
    """Tap over the entries matched by one physical path (or glob)."""

    scheme: Scheme
    path: str
    sink_mode: SinkMode = SinkMode.KEEP

    @property
    def identifier(self) -> str:
        return self.path

    @property
    def paths(self) -> tuple[str, ...]:
        return (self.path,)

    def iter_records(self, filesystem: FileSystem) -> Iterator[Any]:
        for status in _data_files(filesystem, self.path):
            yield from self.scheme.decode(filesystem.read_bytes(status.path))

    def write_records(self, filesystem: FileSystem, records: Iterable[Any]) -> str:
        """
        Write ``records`` below this tap's path and mark the write complete.

        The completion marker is written last, so readers gated on it never
        observe a partially written location. Returns the data file path.
        """
        if filesystem.list(self.path):
            if self.sink_mode is SinkMode.KEEP:
                raise FileExistsError(f"{self.path} already exists and sink mode is KEEP")
            LOGGER.info("replacing existing output at %s", self.path)
            filesystem.delete(self.path)

        base = self.path.rstrip("/")
        data_path = f"{base}/{PART_FILE}"
        filesystem.write_bytes(data_path, self.scheme.encode(records))
        filesystem.write_bytes(f"{base}/{SUCCESS_MARKER}", b"")
        return data_path


class MultiSourceTap:
    """
    Composite read tap over several child taps.

    Reads its children one after another, in the order given (chronological
    for time-pathed sources), and is addressed by a single synthetic
    identifier instead of one derived from its children.
    """

    def __init__(self, taps: Sequence[Tap], *, identifier: str) -> None:
        if not taps:
            raise ValueError("MultiSourceTap needs at least one child tap")
        if not identifier:
            raise ValueError("identifier must be non-empty")
        self._taps = tuple(taps)
        self._identifier = identifier

    @property
    def identifier(self) -> str:
        return self._identifier

    @property
    def taps(self) -> tuple[Tap, ...]:
        return self._taps

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(path for tap in self._taps for path in tap.paths)

    @property
    def scheme(self) -> Scheme:
        return self._taps[0].scheme

    @property
    def sink_mode(self) -> SinkMode:
        return SinkMode.KEEP

    def iter_records(self, filesystem: FileSystem) -> Iterator[Any]:
        for tap in self._taps:
            yield from tap.iter_records(filesystem)

    def __repr__(self) -> str:
        return f"MultiSourceTap(identifier={self._identifier!r}, paths={list(self.paths)})"
