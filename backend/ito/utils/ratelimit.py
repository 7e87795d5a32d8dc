from __future__ import annotations

import time
from collections.abc import Callable
from threading import Lock


class RateLimiter:
    """At most one accepted action per ``interval`` seconds per key."""

    def __init__(self, interval: float = 1.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.interval = interval
        self._clock = clock
        self._last: dict[str, float] = {}
        self._lock = Lock()

    def allow(self, key: str, now: float | None = None) -> bool:
        if now is None:
            now = self._clock()
        with self._lock:
            last = self._last.get(key)
            if last is not None and now - last < self.interval:
                return False
            self._last[key] = now
            return True

    def forget(self, key: str) -> None:
        with self._lock:
            self._last.pop(key, None)
