"""
Semantic test: calendar-aware stepping.

Invariant:
Month and year steps are counted from range.start (no day-of-month
drift), day steps follow the wall clock of the given zone across DST
switches, and hour steps are absolute.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from partition_resolver.core.domain.durations import DAYS, MONTHS
from partition_resolver.core.domain.types import DateRange
from partition_resolver.core.paths.expander import expand

UTC = timezone.utc


def test_month_steps_do_not_drift_after_short_months() -> None:
    date_range = DateRange(datetime(2012, 1, 31, tzinfo=UTC), datetime(2012, 4, 30, tzinfo=UTC))

    steps = list(date_range.each(MONTHS, UTC))

    assert [step.start.day for step in steps] == [31, 29, 31, 30]
    assert [s.path for s in expand("/%Y/%m/*", date_range, UTC)] == [
        "/2012/01/*",
        "/2012/02/*",
        "/2012/03/*",
        "/2012/04/*",
    ]


def test_each_clips_last_step_to_range_end() -> None:
    date_range = DateRange(
        datetime(2012, 1, 1, tzinfo=UTC),
        datetime(2012, 1, 2, 12, tzinfo=UTC),
    )

    steps = list(date_range.each(DAYS, UTC))

    assert len(steps) == 2
    assert steps[-1].end == date_range.end
    assert steps[0].end < steps[1].start


def test_day_steps_follow_local_wall_clock_across_dst() -> None:
    date_range = DateRange.parse("2012-03-10", "2012-03-12", "America/New_York")

    paths = [step.path for step in expand("/%Y/%m/%d/*", date_range, date_range.start.tzinfo)]

    assert paths == ["/2012/03/10/*", "/2012/03/11/*", "/2012/03/12/*"]


def test_hour_steps_are_absolute_across_spring_forward() -> None:
    date_range = DateRange.parse(
        "2012-03-11T00:00",
        "2012-03-11T04:00",
        "America/New_York",
    )

    paths = [step.path for step in expand("/%Y/%m/%d/%H/*", date_range, date_range.start.tzinfo)]

    # 02:00 local does not exist on this day.
    assert paths == [
        "/2012/03/11/00/*",
        "/2012/03/11/01/*",
        "/2012/03/11/03/*",
        "/2012/03/11/04/*",
    ]


def test_range_must_be_ordered_and_aware() -> None:
    with pytest.raises(ValueError):
        DateRange(datetime(2012, 1, 2, tzinfo=UTC), datetime(2012, 1, 1, tzinfo=UTC))

    with pytest.raises(ValueError):
        DateRange(datetime(2012, 1, 1), datetime(2012, 1, 2))


def test_unknown_zone_is_rejected() -> None:
    with pytest.raises(ValueError):
        DateRange.parse("2012-01-01", "2012-01-02", "Mars/Olympus_Mons")
