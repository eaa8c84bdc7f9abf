"""Core value types used across path resolution.

All types here are immutable. Instants are always timezone-aware; the
time zone used for calendar arithmetic is passed explicitly and never
taken from the host.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from enum import Enum
from typing import TYPE_CHECKING, Iterator
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

if TYPE_CHECKING:
    from partition_resolver.core.domain.durations import Duration
    from partition_resolver.core.ports.tap import Tap

# Smallest representable step; closes a half-open step into an inclusive range.
_EPSILON = timedelta(microseconds=1)


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class SourcePolicy(str, Enum):
    """Decides which validated candidates survive into the read handle."""

    STRICT_ALL = "strict_all"
    LENIENT_ANY = "lenient_any"
    MOST_RECENT_GOOD = "most_recent_good"


class AccessMode(str, Enum):
    READ = "read"
    WRITE = "write"


class SinkMode(str, Enum):
    """What a write tap does with an existing location."""

    KEEP = "keep"
    REPLACE = "replace"


class IdentityStrategy(str, Enum):
    """How a composite tap derives its identifier."""

    RANDOM = "random"
    CONTENT_HASH = "content_hash"


# ---------------------------------------------------------------------------
# Time
# ---------------------------------------------------------------------------


def resolve_timezone(tz: str | tzinfo) -> tzinfo:
    """Return a tzinfo for an IANA name or pass an existing tzinfo through."""
    if isinstance(tz, tzinfo):
        return tz

    if not tz:
        raise ValueError("time zone must be given explicitly")

    if tz.upper() == "UTC":
        return timezone.utc

    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown time zone: {tz}") from exc


def parse_instant(text: str, tz: tzinfo) -> datetime:
    """Parse an ISO-8601 date or datetime, reading naive values in ``tz``."""
    value = datetime.fromisoformat(text)
    if value.tzinfo is None:
        value = value.replace(tzinfo=tz)
    return value


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive range of instants, ``start <= end``."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start.tzinfo is None or self.end.tzinfo is None:
            raise ValueError("DateRange bounds must be timezone-aware")
        if self.start > self.end:
            raise ValueError(
                f"DateRange start must be <= end ({self.start} > {self.end})"
            )

    @classmethod
    def parse(cls, start: str, end: str, tz: str | tzinfo) -> DateRange:
        zone = resolve_timezone(tz)
        return cls(parse_instant(start, zone), parse_instant(end, zone))

    def each(self, duration: Duration, tz: tzinfo) -> Iterator[DateRange]:
        """
        Enumerate start-aligned sub-ranges of size ``duration``.

        The n-th step begins at ``start + n * duration`` (evaluated in
        ``tz``); the last step is clipped to ``end``.
        """
        index = 0
        while True:
            step_start = duration.add_to(self.start, tz, times=index)
            if step_start > self.end:
                return

            next_start = duration.add_to(self.start, tz, times=index + 1)
            yield DateRange(step_start, min(next_start - _EPSILON, self.end))
            index += 1

    def __str__(self) -> str:
        return f"{self.start.isoformat()}..{self.end.isoformat()}"


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PathStep:
    """One expanded, not yet validated, physical path."""

    path: str
    instant: datetime | None = None


@dataclass(frozen=True, slots=True)
class PathCandidate:
    """A physical path together with its validation verdict."""

    path: str
    instant: datetime | None
    is_good: bool


@dataclass(frozen=True, slots=True)
class ResolvedHandle:
    """
    Outcome of a read resolution.

    ``tap`` is a single physical tap, a composite over several, or the
    placeholder tap when nothing usable was found and failure is deferred.
    """

    tap: Tap
    policy: SourcePolicy
    candidates: tuple[PathCandidate, ...]

    @property
    def identifier(self) -> str:
        return self.tap.identifier

    @property
    def paths(self) -> tuple[str, ...]:
        return self.tap.paths

    @property
    def is_composite(self) -> bool:
        return len(self.tap.paths) > 1
