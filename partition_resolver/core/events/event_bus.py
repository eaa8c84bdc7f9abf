"""
Synchronous resolution event bus.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from partition_resolver.core.events.event_sink import EventSink
    from partition_resolver.core.events.events import ResolutionEvent


class EventBus:
    """Fans resolution events out to its sinks, in registration order."""

    def __init__(self, sinks: Iterable[EventSink] | None = None) -> None:
        self._sinks: list[EventSink] = list(sinks) if sinks is not None else []
        self._closed = False

    def register(self, sink: EventSink) -> None:
        if self._closed:
            raise RuntimeError("cannot register a sink on a closed EventBus")
        self._sinks.append(sink)

    def emit(self, event: ResolutionEvent) -> None:
        for sink in self._sinks:
            sink.on_event(event)

    def emit_all(self, events: Iterable[ResolutionEvent]) -> None:
        for event in events:
            self.emit(event)

    def close(self) -> None:
        """Close every sink exposing a close() method; idempotent."""
        if self._closed:
            return

        for sink in self._sinks:
            close_fn = getattr(sink, "close", None)
            if callable(close_fn):
                close_fn()

        self._closed = True

    def __enter__(self) -> EventBus:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
