"""
File-based sources.

A source knows which physical paths it covers, how its records are
encoded and which policy decides whether it may be read. Sources build
read and write taps for an execution mode and validate themselves before
a job commits resources.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterator

from partition_resolver.core.domain.errors import IncompletePartitions
from partition_resolver.core.domain.types import (
    AccessMode,
    PathStep,
    ResolvedHandle,
    SinkMode,
    SourcePolicy,
)
from partition_resolver.core.events.events import PathValidated, SourceRejected, SourceResolved
from partition_resolver.core.validation.path_validator import PathValidator, make_validator
from partition_resolver.core.validation.policies import PolicyOutcome, apply_policy
from partition_resolver.taps.aggregator import aggregate_taps
from partition_resolver.taps.file_tap import FileTap

if TYPE_CHECKING:
    from partition_resolver.core.ports.tap import Scheme, Tap
    from partition_resolver.sources.mode import ExecutionMode

LOGGER = logging.getLogger(__name__)


class FileSource(ABC):
    """Base class for sources backed by files on a FileSystem."""

    def __init__(
        self,
        *,
        scheme: Scheme,
        sink_mode: SinkMode = SinkMode.REPLACE,
        completion_marker: str | None = None,
    ) -> None:
        self.scheme = scheme
        self.sink_mode = SinkMode(sink_mode)
        self.completion_marker = completion_marker

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    @abstractmethod
    def read_steps(self) -> list[PathStep]:
        """Return every requested physical path, in chronological order."""

    def read_paths(self) -> list[str]:
        return [step.path for step in self.read_steps()]

    def write_path(self) -> str:
        """By default sources write to their last read path."""
        return self.read_steps()[-1].path

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def policy_for(self, mode: ExecutionMode) -> SourcePolicy:
        return SourcePolicy.STRICT_ALL if mode.strict else SourcePolicy.LENIENT_ANY

    def validator_for(self, mode: ExecutionMode) -> PathValidator:
        return make_validator(mode.filesystem, self.completion_marker)

    def evaluate(self, mode: ExecutionMode) -> PolicyOutcome:
        """Validate the requested paths under this source's policy (never raises)."""
        outcome = apply_policy(
            self.policy_for(mode),
            self.read_steps(),
            self.validator_for(mode).is_good,
            description=str(self),
            max_workers=mode.max_workers,
        )
        self._report(outcome, mode)
        return outcome

    def validate_taps(self, mode: ExecutionMode) -> None:
        """
        Pre-flight check.

        Raises the policy's failure (``IncompletePartitions`` or
        ``NoUsablePartitions``) when the source cannot be read.
        """
        self.evaluate(mode).raise_for_failure()

    def _report(self, outcome: PolicyOutcome, mode: ExecutionMode) -> None:
        source = str(self)

        for candidate in outcome.candidates:
            mode.event_bus.emit(
                PathValidated(
                    source=source,
                    path=candidate.path,
                    instant=candidate.instant,
                    is_good=candidate.is_good,
                )
            )

        failure = outcome.failure
        if failure is None:
            mode.event_bus.emit(
                SourceResolved(
                    source=source,
                    policy=outcome.policy.value,
                    candidate_count=len(outcome.candidates),
                    selected_paths=tuple(outcome.selected_paths),
                )
            )
            return

        if isinstance(failure, IncompletePartitions):
            for path in failure.bad_paths:
                LOGGER.error("Path: %s is missing in: %s", path, source)

        mode.event_bus.emit(
            SourceRejected(
                source=source,
                policy=outcome.policy.value,
                reason=type(failure).__name__,
                message=str(failure),
                bad_paths=tuple(getattr(failure, "bad_paths", ())),
            )
        )

    # ------------------------------------------------------------------
    # Taps
    # ------------------------------------------------------------------

    def create_tap(self, access_mode: AccessMode, mode: ExecutionMode) -> Tap:
        """
        Build the tap for reading or writing this source.

        Read taps never raise for missing data: when nothing is usable a
        placeholder over the first requested path is returned and the
        failure is left to ``validate_taps``.
        """
        if AccessMode(access_mode) is AccessMode.WRITE:
            return FileTap(self.scheme, self.write_path(), self.sink_mode)

        return self._read_tap(self.evaluate(mode), mode)

    def read_handle(self, mode: ExecutionMode) -> ResolvedHandle:
        """Resolve for reading, raising eagerly when the source is unusable."""
        outcome = self.evaluate(mode)
        outcome.raise_for_failure()
        return ResolvedHandle(
            tap=self._read_tap(outcome, mode),
            policy=outcome.policy,
            candidates=outcome.candidates,
        )

    def read_records(self, mode: ExecutionMode) -> Iterator[Any]:
        return self.read_handle(mode).tap.iter_records(mode.filesystem)

    def _read_tap(self, outcome: PolicyOutcome, mode: ExecutionMode) -> Tap:
        # A repeated DST hour renders the same path twice; read it once.
        paths = dict.fromkeys(outcome.selected_paths)
        taps = [FileTap(self.scheme, path, SinkMode.KEEP) for path in paths]
        placeholder = FileTap(self.scheme, self.read_steps()[0].path, SinkMode.KEEP)
        return aggregate_taps(taps, placeholder=placeholder, identity=mode.identity)
