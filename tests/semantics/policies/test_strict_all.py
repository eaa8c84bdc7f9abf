"""
Semantic test: STRICT_ALL policy.

Invariant:
A strict source is usable only when every expanded path is good. The
failure names every missing path and selects nothing.
"""

from __future__ import annotations

import pytest

from partition_resolver.core.domain.errors import IncompletePartitions, NoUsablePartitions
from partition_resolver.core.domain.types import PathStep, SourcePolicy
from partition_resolver.core.validation.policies import apply_policy, strict_all

STEPS = [PathStep("/2012/01/30/*"), PathStep("/2012/01/31/*"), PathStep("/2012/02/01/*")]


def test_all_good_selects_every_path_in_order() -> None:
    outcome = strict_all(STEPS, lambda path: True)

    assert outcome.is_usable
    assert outcome.policy is SourcePolicy.STRICT_ALL
    assert outcome.selected_paths == [step.path for step in STEPS]


def test_one_bad_path_fails_and_names_it() -> None:
    outcome = strict_all(STEPS, lambda path: path != "/2012/01/31/*", description="logs")

    assert not outcome.is_usable
    assert outcome.selected == ()
    assert isinstance(outcome.failure, IncompletePartitions)
    assert outcome.failure.bad_paths == ["/2012/01/31/*"]
    assert str(outcome.failure).startswith("[logs] Data is missing from one or more paths in:")


def test_failure_is_carried_not_raised_until_asked() -> None:
    outcome = strict_all(STEPS, lambda path: False)

    with pytest.raises(IncompletePartitions) as excinfo:
        outcome.raise_for_failure()

    assert excinfo.value.paths == [step.path for step in STEPS]
    assert len(excinfo.value.bad_paths) == 3


def test_no_steps_is_not_usable() -> None:
    outcome = strict_all([], lambda path: True)

    assert isinstance(outcome.failure, NoUsablePartitions)


def test_apply_policy_dispatches_on_value() -> None:
    outcome = apply_policy("strict_all", STEPS, lambda path: True)

    assert outcome.policy is SourcePolicy.STRICT_ALL
    assert outcome.is_usable
