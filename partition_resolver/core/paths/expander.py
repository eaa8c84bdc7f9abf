"""
Date range expansion.

Turns a path template and a date range into the ordered sequence of
physical paths, one per step of the template's finest time unit.
"""

from __future__ import annotations

from datetime import tzinfo
from typing import TYPE_CHECKING, Iterator

from partition_resolver.core.domain.durations import Duration, duration_for_template
from partition_resolver.core.domain.types import PathStep
from partition_resolver.core.paths.templater import render

if TYPE_CHECKING:
    from partition_resolver.core.domain.types import DateRange


def expand(template: str, date_range: DateRange, tz: tzinfo) -> Iterator[PathStep]:
    """
    Lazily expand ``date_range`` into chronologically ordered path steps.

    The first step is exactly ``date_range.start``; every next step adds
    one unit of the template's duration; the last step is the latest one
    not after ``date_range.end``. A zero-length range yields one step.

    Raises
    ------
    TemplateError
        Immediately (not on first iteration) when the template carries no
        time-unit token.
    """
    duration = duration_for_template(template)
    return _iter_steps(template, date_range, tz, duration)


def _iter_steps(
    template: str,
    date_range: DateRange,
    tz: tzinfo,
    duration: Duration,
) -> Iterator[PathStep]:
    for step in date_range.each(duration, tz):
        yield PathStep(path=render(template, step.start, tz), instant=step.start)
