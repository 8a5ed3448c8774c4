from __future__ import annotations

import threading
from collections import Counter
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List

from .base import TelemetrySink


@dataclass
class TelemetryEvent:
    seq: int
    event: str
    ts: str
    payload: Dict[str, Any]

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


class StructuredTelemetrySink(TelemetrySink):
    """Collects generator events in memory for assertions or a JSON export."""

    SCHEMA_VERSION = 1

    def __init__(self) -> None:
        self._events: List[TelemetryEvent] = []
        self._lock = threading.Lock()

    def emit(self, event: str, payload: dict | None = None) -> None:
        data = dict(payload or {})
        ts = datetime.now(timezone.utc).isoformat()
        with self._lock:
            seq = len(self._events)
            self._events.append(TelemetryEvent(seq=seq, event=event, ts=ts, payload=data))

    @property
    def events(self) -> Iterable[TelemetryEvent]:
        with self._lock:
            return tuple(self._events)

    def named(self, event: str) -> List[TelemetryEvent]:
        return [item for item in self.events if item.event == event]

    def rejection_counts(self) -> Dict[str, int]:
        counts = Counter(item.payload.get("reason", "?") for item in self.named("id.rejected"))
        return dict(counts)

    def build_bundle(
        self,
        *,
        config: Dict[str, Any],
        ids: List[str],
        extra: Dict[str, Any] | None = None,
    ) -> Dict[str, Any]:
        events = [event.as_dict() for event in self.events]
        return {
            "bundle_type": "memorable-ids#events",
            "schema_version": self.SCHEMA_VERSION,
            "exported_at": datetime.now(timezone.utc).isoformat(),
            "config": config,
            "ids": list(ids),
            "rejections": self.rejection_counts(),
            "events": events,
            "extra": extra or {},
        }


__all__ = ["StructuredTelemetrySink", "TelemetryEvent"]
