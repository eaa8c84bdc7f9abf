"""
Semantic test: range expansion.

Invariant:
expand() yields one path per step of the template's unit, starting at
range.start, in non-decreasing time order, and the number of steps is
floor((end - start) / unit) + 1.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from partition_resolver.core.domain.errors import TemplateError
from partition_resolver.core.domain.types import DateRange
from partition_resolver.core.paths.expander import expand
from partition_resolver.core.paths.templater import render

UTC = timezone.utc
TEMPLATE = "/%Y/%m/%d/*"


def test_example_range_expands_to_four_days_in_order() -> None:
    date_range = DateRange(datetime(2012, 1, 30, tzinfo=UTC), datetime(2012, 2, 2, tzinfo=UTC))

    paths = [step.path for step in expand(TEMPLATE, date_range, UTC)]

    assert paths == [
        "/2012/01/30/*",
        "/2012/01/31/*",
        "/2012/02/01/*",
        "/2012/02/02/*",
    ]


def test_single_unit_range_yields_render_of_start() -> None:
    start = datetime(2012, 5, 17, 8, 30, tzinfo=UTC)
    date_range = DateRange(start, start + timedelta(hours=23))

    steps = list(expand(TEMPLATE, date_range, UTC))

    assert len(steps) == 1
    assert steps[0].path == render(TEMPLATE, start, UTC)
    assert steps[0].instant == start


def test_zero_length_range_yields_exactly_one_step() -> None:
    instant = datetime(2012, 2, 2, tzinfo=UTC)

    steps = list(expand(TEMPLATE, DateRange(instant, instant), UTC))

    assert [step.path for step in steps] == ["/2012/02/02/*"]


def test_step_count_matches_floor_formula_and_is_ordered() -> None:
    start = datetime(2012, 1, 1, tzinfo=UTC)
    end = start + timedelta(hours=29, minutes=30)

    steps = list(expand("/%Y/%m/%d/%H/*", DateRange(start, end), UTC))

    assert len(steps) == (end - start) // timedelta(hours=1) + 1
    instants = [step.instant for step in steps]
    assert instants == sorted(instants)
    assert steps[0].path == "/2012/01/01/00/*"
    assert steps[-1].path == "/2012/01/02/05/*"


def test_expand_is_lazy_but_template_is_checked_eagerly() -> None:
    date_range = DateRange(datetime(2012, 1, 1, tzinfo=UTC), datetime(2012, 1, 2, tzinfo=UTC))

    with pytest.raises(TemplateError):
        expand("/no/tokens/*", date_range, UTC)

    iterator = expand(TEMPLATE, date_range, UTC)
    assert next(iterator).path == "/2012/01/01/*"


def test_each_call_rederives_the_sequence() -> None:
    date_range = DateRange(datetime(2012, 1, 1, tzinfo=UTC), datetime(2012, 1, 3, tzinfo=UTC))

    first = [step.path for step in expand(TEMPLATE, date_range, UTC)]
    second = [step.path for step in expand(TEMPLATE, date_range, UTC)]

    assert first == second
