"""Rendering of path templates against concrete instants."""

from __future__ import annotations

import re
from datetime import datetime, tzinfo
from typing import TYPE_CHECKING

from partition_resolver.core.domain.durations import duration_for_template
from partition_resolver.core.domain.errors import TemplateError

if TYPE_CHECKING:
    from partition_resolver.core.domain.types import DateRange

WILDCARD_SEGMENT = "/*"

YEAR_MONTH_DAY = "/%Y/%m/%d"
YEAR_MONTH_DAY_HOUR = "/%Y/%m/%d/%H"

_TOKEN_RE = re.compile(r"%([YmdH])")


def render(template: str, instant: datetime, tz: tzinfo) -> str:
    """
    Substitute date tokens in ``template`` with the fields of ``instant``.

    The instant is interpreted in ``tz``. Years are rendered with four
    digits; months, days and hours are zero-padded to two. Any other text,
    including glob characters, is kept verbatim.
    """
    local = instant.astimezone(tz)
    fields = {
        "Y": f"{local.year:04d}",
        "m": f"{local.month:02d}",
        "d": f"{local.day:02d}",
        "H": f"{local.hour:02d}",
    }
    return _TOKEN_RE.sub(lambda match: fields[match.group(1)], template)


def strip_wildcard(template: str) -> str:
    """Drop the trailing ``/*`` segment a read template must end with."""
    if not template.endswith(WILDCARD_SEGMENT):
        raise TemplateError(f"Pattern must end with {WILDCARD_SEGMENT}: {template}")
    return template[: template.rindex("/")]


def write_path(template: str, date_range: DateRange, tz: tzinfo) -> str:
    """
    Return the directory a time-pathed source writes to.

    Data is always written to the partition owned by the range's end time.
    """
    duration_for_template(template)
    return render(strip_wildcard(template), date_range.end, tz)
