"""
Semantic test: concurrent path validation.

Invariant:
Validating paths concurrently never changes an outcome: candidates keep
the order of the expanded paths regardless of which check finishes first,
and MOST_RECENT_GOOD still picks the newest good path.
"""

from __future__ import annotations

import time

from partition_resolver.core.domain.types import PathStep
from partition_resolver.core.validation.policies import lenient_any, most_recent_good

STEPS = [PathStep(f"/p/{index}/*") for index in range(6)]


def _slow_for_early_paths(path: str) -> bool:
    index = int(path.split("/")[2])
    # Earlier paths finish last.
    time.sleep(0.01 * (len(STEPS) - index))
    return index % 2 == 0


def test_candidate_order_is_preserved_with_workers() -> None:
    serial = lenient_any(STEPS, _slow_for_early_paths)
    parallel = lenient_any(STEPS, _slow_for_early_paths, max_workers=4)

    assert parallel.candidates == serial.candidates
    assert parallel.selected_paths == ["/p/0/*", "/p/2/*", "/p/4/*"]


def test_most_recent_good_is_unchanged_with_workers() -> None:
    serial = most_recent_good(STEPS, _slow_for_early_paths)
    parallel = most_recent_good(STEPS, _slow_for_early_paths, max_workers=3)

    assert serial.selected_paths == ["/p/4/*"]
    assert parallel.selected_paths == ["/p/4/*"]
