"""
Goodness policies.

Each policy is a plain function from the expanded path steps and a
``is_good`` predicate to a ``PolicyOutcome``. Policies never raise on an
unusable source: the failure is carried in the outcome so that tap
construction can defer it to the explicit validation pass.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from partition_resolver.core.domain.errors import (
    IncompletePartitions,
    InvalidSourceError,
    NoUsablePartitions,
)
from partition_resolver.core.domain.types import PathCandidate, PathStep, SourcePolicy

IsGood = Callable[[str], bool]


@dataclass(frozen=True, slots=True)
class PolicyOutcome:
    """
    Result of applying a policy.

    ``candidates`` holds every validated path in chronological order (for
    MOST_RECENT_GOOD only the validated tail of the range). ``selected``
    holds the candidates to read; it is empty whenever ``failure`` is set.
    """

    policy: SourcePolicy
    candidates: tuple[PathCandidate, ...]
    selected: tuple[PathCandidate, ...]
    failure: InvalidSourceError | None = None

    @property
    def is_usable(self) -> bool:
        return self.failure is None

    @property
    def selected_paths(self) -> list[str]:
        return [candidate.path for candidate in self.selected]

    def raise_for_failure(self) -> None:
        if self.failure is not None:
            raise self.failure


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _check(steps: Sequence[PathStep], is_good: IsGood, max_workers: int) -> list[PathCandidate]:
    """Validate ``steps``, preserving their order even when run concurrently."""
    paths = [step.path for step in steps]

    if max_workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            verdicts = list(pool.map(is_good, paths))
    else:
        verdicts = [is_good(path) for path in paths]

    return [
        PathCandidate(path=step.path, instant=step.instant, is_good=bool(verdict))
        for step, verdict in zip(steps, verdicts, strict=True)
    ]


def _label(description: str) -> str:
    return f"[{description}] " if description else ""


def _no_usable(
    policy: SourcePolicy,
    candidates: Sequence[PathCandidate],
    all_paths: Iterable[str],
    description: str,
) -> PolicyOutcome:
    failure = NoUsablePartitions(
        f"{_label(description)}No good paths in: {list(all_paths)}",
        candidates=candidates,
    )
    return PolicyOutcome(policy, tuple(candidates), (), failure)


# ---------------------------------------------------------------------------
# Policies
# ---------------------------------------------------------------------------


def strict_all(
    steps: Iterable[PathStep],
    is_good: IsGood,
    *,
    description: str = "",
    max_workers: int = 1,
) -> PolicyOutcome:
    """Every path must be good."""
    steps = list(steps)
    candidates = _check(steps, is_good, max_workers)

    if not candidates:
        return _no_usable(SourcePolicy.STRICT_ALL, candidates, [], description)

    bad = [candidate.path for candidate in candidates if not candidate.is_good]
    if bad:
        failure = IncompletePartitions(
            f"{_label(description)}Data is missing from one or more paths in: "
            f"{[step.path for step in steps]} (missing: {bad})",
            candidates=candidates,
        )
        return PolicyOutcome(SourcePolicy.STRICT_ALL, tuple(candidates), (), failure)

    return PolicyOutcome(SourcePolicy.STRICT_ALL, tuple(candidates), tuple(candidates))


def lenient_any(
    steps: Iterable[PathStep],
    is_good: IsGood,
    *,
    description: str = "",
    max_workers: int = 1,
) -> PolicyOutcome:
    """At least one path must be good; bad paths are dropped."""
    steps = list(steps)
    candidates = _check(steps, is_good, max_workers)

    good = tuple(candidate for candidate in candidates if candidate.is_good)
    if not good:
        return _no_usable(
            SourcePolicy.LENIENT_ANY,
            candidates,
            [step.path for step in steps],
            description,
        )

    return PolicyOutcome(SourcePolicy.LENIENT_ANY, tuple(candidates), good)


def most_recent_good(
    steps: Iterable[PathStep],
    is_good: IsGood,
    *,
    description: str = "",
    max_workers: int = 1,
) -> PolicyOutcome:
    """
    Only the chronologically last good path is used.

    Paths are checked newest first and checking stops at the first good
    one. With ``max_workers > 1`` paths are checked in newest-first batches
    of that size; the newest good path of the first batch holding one wins,
    regardless of which check finished first.
    """
    steps = list(steps)
    newest_first = steps[::-1]
    batch_size = max(1, max_workers)

    checked: list[PathCandidate] = []
    for offset in range(0, len(newest_first), batch_size):
        batch = _check(newest_first[offset : offset + batch_size], is_good, max_workers)
        checked.extend(batch)

        for candidate in batch:
            if candidate.is_good:
                return PolicyOutcome(
                    SourcePolicy.MOST_RECENT_GOOD,
                    tuple(reversed(checked)),
                    (candidate,),
                )

    return _no_usable(
        SourcePolicy.MOST_RECENT_GOOD,
        list(reversed(checked)),
        [step.path for step in steps],
        description,
    )


_POLICIES = {
    SourcePolicy.STRICT_ALL: strict_all,
    SourcePolicy.LENIENT_ANY: lenient_any,
    SourcePolicy.MOST_RECENT_GOOD: most_recent_good,
}


def apply_policy(
    policy: SourcePolicy,
    steps: Iterable[PathStep],
    is_good: IsGood,
    *,
    description: str = "",
    max_workers: int = 1,
) -> PolicyOutcome:
    """Dispatch to the policy function registered for ``policy``."""
    return _POLICIES[SourcePolicy(policy)](
        steps,
        is_good,
        description=description,
        max_workers=max_workers,
    )
