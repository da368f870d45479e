from __future__ import annotations

from typing import Optional


class ThrottleGate:
    """Rate limit for the movement channel; clicks always pass."""

    def __init__(self, interval_ms: int = 50) -> None:
        if isinstance(interval_ms, bool) or not isinstance(interval_ms, int) or interval_ms < 0:
            raise ValueError("interval_ms must be a non-negative integer")
        self.interval_ms = interval_ms
        self._last_move_ts: Optional[float] = None

    @property
    def last_admitted(self) -> Optional[float]:
        return self._last_move_ts

    def admit_move(self, now: float) -> bool:
        if self._last_move_ts is not None and now - self._last_move_ts < self.interval_ms:
            return False
        self._last_move_ts = now
        return True

    def admit_click(self, now: float) -> bool:
        return True

    def reset(self) -> None:
        self._last_move_ts = None
