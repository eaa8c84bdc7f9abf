"""
Time-partitioned sources.

A time-pathed source is a path template (e.g. ``/logs/%Y/%m/%d/*``), an
inclusive date range and an explicit time zone. Reads cover one partition
per step of the template's finest time unit; writes go to the partition
owned by the range's end time.
"""

from __future__ import annotations

from datetime import tzinfo
from typing import TYPE_CHECKING

from partition_resolver.core.domain.durations import duration_for_template
from partition_resolver.core.domain.types import PathStep, SinkMode, SourcePolicy, resolve_timezone
from partition_resolver.core.paths import templater
from partition_resolver.core.paths.expander import expand
from partition_resolver.core.paths.globifier import globify
from partition_resolver.sources.file_source import FileSource
from partition_resolver.taps.schemes import TextLineScheme

if TYPE_CHECKING:
    from partition_resolver.core.domain.types import DateRange
    from partition_resolver.core.ports.tap import Scheme
    from partition_resolver.sources.mode import ExecutionMode


class TimePathedSource(FileSource):
    """
    Source over the partitions of a date range.

    ``policy`` fixes the goodness policy; when left unset it follows the
    execution mode's strictness. ``completion_marker`` gates partitions on
    an explicit marker file instead of mere existence.
    """

    def __init__(
        self,
        template: str,
        date_range: DateRange,
        tz: str | tzinfo,
        *,
        scheme: Scheme | None = None,
        policy: SourcePolicy | None = None,
        completion_marker: str | None = None,
        sink_mode: SinkMode = SinkMode.REPLACE,
    ) -> None:
        super().__init__(
            scheme=scheme if scheme is not None else TextLineScheme(),
            sink_mode=sink_mode,
            completion_marker=completion_marker,
        )
        # Fail at construction, not at first use.
        duration_for_template(template)

        self.template = template
        self.date_range = date_range
        self.tz = resolve_timezone(tz)
        self.policy = SourcePolicy(policy) if policy is not None else None

    def read_steps(self) -> list[PathStep]:
        return list(expand(self.template, self.date_range, self.tz))

    def write_path(self) -> str:
        return templater.write_path(self.template, self.date_range, self.tz)

    def glob_patterns(self) -> list[str]:
        """Minimal glob set covering the range (for listings and summaries)."""
        return globify(self.template, self.date_range, self.tz)

    def policy_for(self, mode: ExecutionMode) -> SourcePolicy:
        if self.policy is not None:
            return self.policy
        return super().policy_for(mode)

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.template}, {self.date_range}, {self.tz})"

    def __eq__(self, other: object) -> bool:
        return (
            type(other) is type(self)
            and self.template == other.template
            and self.date_range == other.date_range
            and str(self.tz) == str(other.tz)
        )

    def __hash__(self) -> int:
        return hash((self.template, self.date_range, str(self.tz)))


class MostRecentGoodSource(TimePathedSource):
    """Reads only the most recent good partition in the range."""

    def __init__(
        self,
        template: str,
        date_range: DateRange,
        tz: str | tzinfo,
        *,
        scheme: Scheme | None = None,
        completion_marker: str | None = None,
        sink_mode: SinkMode = SinkMode.REPLACE,
    ) -> None:
        super().__init__(
            template,
            date_range,
            tz,
            scheme=scheme,
            policy=SourcePolicy.MOST_RECENT_GOOD,
            completion_marker=completion_marker,
            sink_mode=sink_mode,
        )
