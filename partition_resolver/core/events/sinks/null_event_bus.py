from __future__ import annotations

from partition_resolver.core.events.event_bus import EventBus
from partition_resolver.core.events.events import ResolutionEvent


class _NullSink:
    def on_event(self, event: ResolutionEvent) -> None:
        return


class NullEventBus(EventBus):
    """EventBus that drops every event (default when none is injected)."""

    def __init__(self) -> None:
        super().__init__(sinks=[_NullSink()])
