"""Resolution events emitted while sources are validated and resolved."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class PathValidated:
    source: str
    path: str
    instant: datetime | None
    is_good: bool


@dataclass(frozen=True, slots=True)
class SourceResolved:
    source: str
    policy: str
    candidate_count: int
    selected_paths: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class SourceRejected:
    source: str
    policy: str
    reason: str
    message: str
    bad_paths: tuple[str, ...]


ResolutionEvent = PathValidated | SourceResolved | SourceRejected
