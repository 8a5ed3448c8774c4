"""Telemetry sinks for generation events.

Generators emit three events:

- ``id.rejected``: ``{"reason": "length" | "duplicate" | "validator", "candidate", "attempt"}``
- ``id.generated``: ``{"value", "attempts"}``
- ``id.exhausted``: ``{"attempts", "validated"}``
"""

from __future__ import annotations

import json
import sys
import threading
from typing import Any, Dict, Iterable, Optional, Protocol, TextIO

Payload = Dict[str, Any]


class TelemetrySink(Protocol):
    """Anything that accepts ``id.*`` events from an `IdGenerator`."""

    def emit(self, event: str, payload: Payload | None = None) -> None:  # pragma: no cover - Protocol
        ...


class NullTelemetrySink:
    """Default sink of a generator built without telemetry; drops every event."""

    def emit(self, event: str, payload: Payload | None = None) -> None:
        return None


class JsonLinesTelemetrySink:
    """Writes each event as one JSON object, ``{"event": ..., **payload}``, per line.

    Defaults to stderr so the ids printed on stdout stay machine-readable.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    def emit(self, event: str, payload: Payload | None = None) -> None:
        record: Payload = {"event": event}
        record.update(payload or {})
        line = json.dumps(record, ensure_ascii=False)
        stream = self._stream or sys.stderr
        with self._lock:
            stream.write(line + "\n")
            stream.flush()


class FanoutTelemetrySink:
    """Forwards every event to each sink in order, e.g. the recorder plus the console."""

    def __init__(self, sinks: Iterable[TelemetrySink]) -> None:
        self.sinks = list(sinks)

    def emit(self, event: str, payload: Payload | None = None) -> None:
        for sink in self.sinks:
            sink.emit(event, payload)


__all__ = ["FanoutTelemetrySink", "JsonLinesTelemetrySink", "NullTelemetrySink", "Payload", "TelemetrySink"]
