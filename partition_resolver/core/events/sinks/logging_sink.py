"""
Logging event sink.
"""
from __future__ import annotations

import logging

from partition_resolver.core.events.events import (
    PathValidated,
    ResolutionEvent,
    SourceRejected,
    SourceResolved,
)


class LoggingEventSink:
    """Writes resolution events to a standard library logger."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def on_event(self, event: ResolutionEvent) -> None:
        if isinstance(event, PathValidated):
            self._logger.debug(
                "path %s is %s in %s",
                event.path,
                "good" if event.is_good else "not good",
                event.source,
                extra={"event": event},
            )
        elif isinstance(event, SourceResolved):
            self._logger.info(
                "resolved %s (%s): %d of %d paths selected",
                event.source,
                event.policy,
                len(event.selected_paths),
                event.candidate_count,
                extra={"event": event},
            )
        elif isinstance(event, SourceRejected):
            self._logger.warning(
                "rejected %s (%s): %s",
                event.source,
                event.policy,
                event.reason,
                extra={"event": event},
            )
