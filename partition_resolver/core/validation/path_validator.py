"""
Path validators.

A validator answers "is this physical path usable?" with exactly one
filesystem listing per call. Results are never cached: the filesystem is
the source of truth and may change between calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from partition_resolver.core.ports.filesystem import FileSystem

SUCCESS_MARKER = "_SUCCESS"


class PathValidator(Protocol):
    def is_good(self, path: str) -> bool:
        """Return True when ``path`` may be read."""


class ExistenceValidator:
    """A path is good when it resolves to at least one entry."""

    def __init__(self, filesystem: FileSystem) -> None:
        self._filesystem = filesystem

    def is_good(self, path: str) -> bool:
        return len(self._filesystem.list(path)) > 0


class CompletionMarkerValidator:
    """
    A path is good when one of its entries is the completion marker.

    Used for sources that must wait for an explicit "write finished" signal
    instead of trusting partially written output.
    """

    def __init__(self, filesystem: FileSystem, marker: str = SUCCESS_MARKER) -> None:
        if not marker:
            raise ValueError("marker must be non-empty")
        self._filesystem = filesystem
        self._marker = marker

    @property
    def marker(self) -> str:
        return self._marker

    def is_good(self, path: str) -> bool:
        return any(status.name == self._marker for status in self._filesystem.list(path))


def make_validator(filesystem: FileSystem, completion_marker: str | None = None) -> PathValidator:
    """Pick the validator variant for a source."""
    if completion_marker:
        return CompletionMarkerValidator(filesystem, completion_marker)
    return ExistenceValidator(filesystem)
