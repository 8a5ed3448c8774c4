from __future__ import annotations

import threading
from typing import Set


class DuplicateTracker:
    """Remembers every accepted id so an instance never hands one out twice."""

    def __init__(self, enabled: bool = True) -> None:
        self._enabled = enabled
        self._seen: Set[str] = set()
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def disable(self) -> None:
        # Once disabled the history stops growing; nothing re-enables it.
        self._enabled = False

    def check_and_record(self, candidate: str) -> bool:
        """Return True if `candidate` was seen before, otherwise record it and return False."""

        if not self._enabled:
            return False
        with self._lock:
            if candidate in self._seen:
                return True
            self._seen.add(candidate)
            return False

    def __contains__(self, candidate: object) -> bool:
        with self._lock:
            return candidate in self._seen

    def __len__(self) -> int:
        with self._lock:
            return len(self._seen)


__all__ = ["DuplicateTracker"]
