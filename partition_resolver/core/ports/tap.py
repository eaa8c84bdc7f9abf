"""Tap and scheme protocols.

A tap is an access handle for records at one or more physical locations;
a scheme encodes and decodes those records. Path resolution only threads
physical paths into taps and never interprets record content.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Iterator, Protocol

if TYPE_CHECKING:
    from partition_resolver.core.domain.types import SinkMode
    from partition_resolver.core.ports.filesystem import FileSystem


class Scheme(Protocol):
    def decode(self, data: bytes) -> Iterator[Any]:
        """Yield the records stored in one file."""

    def encode(self, records: Iterable[Any]) -> bytes:
        """Serialize records into the content of one file."""


class Tap(Protocol):
    @property
    def identifier(self) -> str:
        """Stable name the execution engine addresses this tap by."""

    @property
    def paths(self) -> tuple[str, ...]:
        """Physical paths read by this tap, in chronological order."""

    @property
    def scheme(self) -> Scheme:
        """Record encoding of the underlying files."""

    @property
    def sink_mode(self) -> SinkMode:
        """Behavior on write when the location already exists."""

    def iter_records(self, filesystem: FileSystem) -> Iterator[Any]:
        """Yield every record readable through this tap."""
