"""
Event sink interface.

Sinks consume resolution events emitted by sources.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from partition_resolver.core.events.events import ResolutionEvent


class EventSink(Protocol):
    def on_event(self, event: ResolutionEvent) -> None:
        """Consume a resolution event."""
