"""
Semantic test: duration unit selection.

Invariant:
Exactly one unit is selected per template: the finest token present,
checked in the order hour, day, month, year. A template without any
recognized token is a TemplateError.
"""

from __future__ import annotations

import pytest

from partition_resolver.core.domain.durations import DurationUnit, duration_for_template
from partition_resolver.core.domain.errors import TemplateError


def test_day_template_selects_day() -> None:
    assert duration_for_template("/logs/%Y/%m/%d/*").unit is DurationUnit.DAY


def test_hour_wins_over_day_month_and_year() -> None:
    assert duration_for_template("/logs/%Y/%m/%d/%H/*").unit is DurationUnit.HOUR


def test_month_and_year_templates() -> None:
    assert duration_for_template("/logs/%Y/%m/*").unit is DurationUnit.MONTH
    assert duration_for_template("/logs/%Y/*").unit is DurationUnit.YEAR


def test_template_without_token_is_rejected() -> None:
    with pytest.raises(TemplateError):
        duration_for_template("/logs/static/*")


def test_unrecognized_tokens_do_not_count() -> None:
    # Minutes and seconds are not partition units.
    with pytest.raises(TemplateError):
        duration_for_template("/logs/%M/%S/*")
