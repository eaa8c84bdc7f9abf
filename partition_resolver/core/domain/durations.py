"""
Duration unit table.

Maps the date-format tokens understood in path templates to calendar
durations. The table is ordered finest-first, so a template carrying both
an hour and a day token is handled at hour granularity.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from enum import Enum

from dateutil.relativedelta import relativedelta

from partition_resolver.core.domain.errors import TemplateError


class DurationUnit(str, Enum):
    HOUR = "hour"
    DAY = "day"
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True, slots=True)
class Duration:
    """
    Calendar-aware duration.

    Hours are absolute. Days, months and years are wall-clock steps in the
    zone passed to ``add_to``, so a day across a DST switch is 23 or 25
    hours and a month step lands on the same day-of-month (clipped to the
    month's length).
    """

    unit: DurationUnit
    count: int = 1

    def __post_init__(self) -> None:
        if self.count <= 0:
            raise ValueError("Duration count must be > 0")

    def add_to(self, instant: datetime, tz: tzinfo, *, times: int = 1) -> datetime:
        """Return ``instant + times * self``, evaluated in ``tz``."""
        steps = self.count * times

        if self.unit is DurationUnit.HOUR:
            return instant.astimezone(timezone.utc) + timedelta(hours=steps)

        local = instant.astimezone(tz)
        if self.unit is DurationUnit.DAY:
            shifted = local + relativedelta(days=steps)
        elif self.unit is DurationUnit.MONTH:
            shifted = local + relativedelta(months=steps)
        else:
            shifted = local + relativedelta(years=steps)

        return shifted

    def floor(self, instant: datetime, tz: tzinfo) -> datetime:
        """Truncate ``instant`` to the start of its unit bucket in ``tz``."""
        local = instant.astimezone(tz).replace(minute=0, second=0, microsecond=0)

        if self.unit is DurationUnit.HOUR:
            return local
        local = local.replace(hour=0)
        if self.unit is DurationUnit.DAY:
            return local
        local = local.replace(day=1)
        if self.unit is DurationUnit.MONTH:
            return local
        return local.replace(month=1)


HOURS = Duration(DurationUnit.HOUR)
DAYS = Duration(DurationUnit.DAY)
MONTHS = Duration(DurationUnit.MONTH)
YEARS = Duration(DurationUnit.YEAR)

# Finest first: the first token found in a template selects its unit.
UNIT_TABLE: tuple[tuple[str, Duration], ...] = (
    ("%H", HOURS),
    ("%d", DAYS),
    ("%m", MONTHS),
    ("%Y", YEARS),
)


def duration_for_template(template: str) -> Duration:
    """Return the finest duration whose token appears in ``template``."""
    for token, duration in UNIT_TABLE:
        if token in template:
            return duration

    tokens = ", ".join(token for token, _ in UNIT_TABLE)
    raise TemplateError(
        f"Template {template!r} contains no time-unit token (expected one of {tokens})"
    )


def template_units(template: str) -> list[tuple[str, Duration]]:
    """Return every (token, duration) present in ``template``, coarsest first."""
    return [(token, duration) for token, duration in reversed(UNIT_TABLE) if token in template]
