"""
Append-only JSON lines recorder sink.
"""
from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

from partition_resolver.core.events.events import ResolutionEvent


class JsonlRecorderSink:
    """Writes each resolution event as one JSON object per line."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self._path.open("a", encoding="utf-8")
        self._closed = False

    @property
    def path(self) -> Path:
        return self._path

    def on_event(self, event: ResolutionEvent) -> None:
        record = {"event_type": type(event).__name__, **asdict(event)}
        self._fh.write(json.dumps(record, default=str) + "\n")
        self._fh.flush()

    def close(self) -> None:
        if self._closed:
            return
        self._fh.close()
        self._closed = True
