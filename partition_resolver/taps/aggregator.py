"""
Tap aggregation.

Turns the 0, 1 or N good physical taps of a source into the single tap
the execution engine addresses.
"""

from __future__ import annotations

import hashlib
import uuid
from typing import TYPE_CHECKING, Iterable

from partition_resolver.core.domain.types import IdentityStrategy
from partition_resolver.taps.file_tap import MultiSourceTap

if TYPE_CHECKING:
    from partition_resolver.core.ports.tap import Tap


def composite_identifier(paths: Iterable[str], strategy: IdentityStrategy) -> str:
    """
    Return the identifier for a composite over ``paths``.

    RANDOM yields a fresh UUID per call, so two runs never share one.
    CONTENT_HASH is derived from the sorted path set and is stable across
    runs and processes.
    """
    if IdentityStrategy(strategy) is IdentityStrategy.CONTENT_HASH:
        payload = "\n".join(sorted(paths)).encode("utf-8")
        return "multi-" + hashlib.blake2b(payload, digest_size=16).hexdigest()
    return str(uuid.uuid4())


def aggregate_taps(
    taps: Iterable[Tap],
    *,
    placeholder: Tap,
    identity: IdentityStrategy = IdentityStrategy.RANDOM,
) -> Tap:
    """
    Collapse ``taps`` into one tap.

    - no taps: ``placeholder`` is returned; it points at a requested but
      unusable path and the failure surfaces in the validation pass,
    - one tap: returned as is,
    - several taps: a ``MultiSourceTap`` in the given order.
    """
    taps = list(taps)

    if not taps:
        return placeholder

    if len(taps) == 1:
        return taps[0]

    paths = [path for tap in taps for path in tap.paths]
    return MultiSourceTap(taps, identifier=composite_identifier(paths, identity))
