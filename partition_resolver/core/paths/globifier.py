"""
Minimal glob pattern sets.

Covers a date range with as few glob patterns as possible: a calendar
bucket (year, month, day) that the range covers entirely is emitted once
with all finer tokens replaced by ``*``; partially covered buckets are
split at the next finer unit present in the template.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import TYPE_CHECKING, Iterator

from partition_resolver.core.domain.durations import (
    Duration,
    duration_for_template,
    template_units,
)
from partition_resolver.core.paths.templater import render

if TYPE_CHECKING:
    from partition_resolver.core.domain.types import DateRange


def globify(template: str, date_range: DateRange, tz: tzinfo) -> list[str]:
    """Return the chronologically ordered minimal glob set for ``date_range``."""
    finest = duration_for_template(template)
    levels = template_units(template)

    start = finest.floor(date_range.start, tz)
    return list(
        _globify_level(
            template=template,
            levels=levels,
            index=0,
            low=start,
            high=date_range.end,
            finest=finest,
            tz=tz,
        )
    )


def _globify_level(
    *,
    template: str,
    levels: list[tuple[str, Duration]],
    index: int,
    low: datetime,
    high: datetime,
    finest: Duration,
    tz: tzinfo,
) -> Iterator[str]:
    _, unit = levels[index]
    is_finest = index == len(levels) - 1

    bucket = unit.floor(low, tz)
    while bucket <= high:
        next_bucket = unit.add_to(bucket, tz)

        if is_finest:
            yield render(template, bucket, tz)
        else:
            # Last finest-unit step inside this bucket.
            last_step = finest.add_to(next_bucket, tz, times=-1)

            if bucket >= low and last_step <= high:
                yield render(_wildcard_finer(template, levels[index + 1:]), bucket, tz)
            else:
                yield from _globify_level(
                    template=template,
                    levels=levels,
                    index=index + 1,
                    low=max(low, bucket),
                    high=min(high, last_step),
                    finest=finest,
                    tz=tz,
                )

        bucket = next_bucket


def _wildcard_finer(template: str, finer: list[tuple[str, Duration]]) -> str:
    for token, _ in finer:
        template = template.replace(token, "*")
    return template
