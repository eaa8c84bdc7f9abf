"""Failure taxonomy for source resolution.

Every failure raised while resolving or validating a source derives from
``InvalidSourceError`` so callers can abort a job with a single handler.
Filesystem errors are never wrapped: they surface unchanged from the
filesystem capability.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from partition_resolver.core.domain.types import PathCandidate


class InvalidSourceError(Exception):
    """Base class for sources that cannot be turned into usable paths."""


class TemplateError(InvalidSourceError):
    """Path template is malformed.

    Raised when no recognized time-unit token is present, or when a write
    template does not end in the wildcard segment.
    """


class _CandidateFailure(InvalidSourceError):
    def __init__(self, message: str, *, candidates: Iterable[PathCandidate]) -> None:
        super().__init__(message)
        self.candidates: tuple[PathCandidate, ...] = tuple(candidates)

    @property
    def paths(self) -> list[str]:
        return [candidate.path for candidate in self.candidates]

    @property
    def bad_paths(self) -> list[str]:
        return [candidate.path for candidate in self.candidates if not candidate.is_good]


class IncompletePartitions(_CandidateFailure):
    """One or more expected partitions are missing or incomplete (strict policy)."""


class NoUsablePartitions(_CandidateFailure):
    """No partition anywhere in the range is usable."""
