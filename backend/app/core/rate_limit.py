# app/core/rate_limit.py
"""
Fixed-window request counter.

State lives in process memory: it is lost on restart and is not shared
between server instances.
"""
import time
from dataclasses import dataclass
from typing import Callable, Dict


@dataclass
class _Window:
    count: int
    started_at: float


class FixedWindowRateLimiter:
    """
    Allow at most `limit` hits per key within each `window` seconds.

    A key's window starts at its first hit and is replaced by a fresh one at the
    first hit after it expires.
    """

    def __init__(self, limit: int, window: float, clock: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.window = window
        self._clock = clock
        self._windows: Dict[str, _Window] = {}

    def hit(self, key: str) -> bool:
        """Record one request for key. Returns False (without counting it) if the limit is reached."""
        now = self._clock()
        w = self._windows.get(key)
        if w is None or now - w.started_at > self.window:
            w = self._windows[key] = _Window(count=0, started_at=now)
        if w.count >= self.limit:
            return False
        w.count += 1
        return True

    def remaining(self, key: str) -> int:
        w = self._windows.get(key)
        if w is None or self._clock() - w.started_at > self.window:
            return self.limit
        return max(self.limit - w.count, 0)

    def reset(self, key: str | None = None) -> None:
        if key is None:
            self._windows.clear()
        else:
            self._windows.pop(key, None)
