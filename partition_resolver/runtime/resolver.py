"""
Resolution entry points.

Stateless functions over (template, date range, time zone, policy). Every
call re-reads filesystem state; nothing is cached between calls.
"""

from __future__ import annotations

from datetime import tzinfo
from typing import TYPE_CHECKING

from partition_resolver.sources.time_pathed import TimePathedSource

if TYPE_CHECKING:
    from partition_resolver.core.domain.types import DateRange, ResolvedHandle, SourcePolicy
    from partition_resolver.core.ports.tap import Scheme
    from partition_resolver.sources.mode import ExecutionMode


def resolve_read(
    template: str,
    date_range: DateRange,
    tz: str | tzinfo,
    policy: SourcePolicy,
    *,
    mode: ExecutionMode,
    scheme: Scheme | None = None,
    completion_marker: str | None = None,
) -> ResolvedHandle:
    """
    Resolve a time-partitioned source for reading.

    Raises
    ------
    TemplateError
        The template carries no time-unit token.
    IncompletePartitions
        STRICT_ALL and at least one partition is not good.
    NoUsablePartitions
        No partition in the range is good.
    """
    source = TimePathedSource(
        template,
        date_range,
        tz,
        scheme=scheme,
        policy=policy,
        completion_marker=completion_marker,
    )
    return source.read_handle(mode)


def resolve_write(template: str, date_range: DateRange, tz: str | tzinfo) -> str:
    """Return the path written for ``date_range``: the partition of its end time."""
    return TimePathedSource(template, date_range, tz).write_path()


def validate(
    template: str,
    date_range: DateRange,
    tz: str | tzinfo,
    policy: SourcePolicy,
    *,
    mode: ExecutionMode,
    completion_marker: str | None = None,
) -> None:
    """Pre-flight a read without building taps; raises like ``resolve_read``."""
    source = TimePathedSource(
        template,
        date_range,
        tz,
        policy=policy,
        completion_marker=completion_marker,
    )
    source.validate_taps(mode)
