from __future__ import annotations

from typing import Optional

from ..errors import MalformedEventError
from ..reporting import Reporter
from ..models import CapturedEvent


class CircularEventStore:
    """Fixed-capacity ring of event slots.

    ``insert`` writes at the cursor and advances it modulo capacity, so once
    the ring is full every insert silently replaces the oldest event. The
    slot list is allocated once; ``None`` marks an empty slot.
    """

    def __init__(self, capacity: int = 1000, reporter: Optional[Reporter] = None) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ValueError("capacity must be a positive integer")
        self._capacity = capacity
        self._slots: list[Optional[CapturedEvent]] = [None] * capacity
        self._cursor = 0
        self.reporter = reporter or Reporter()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return sum(1 for slot in self._slots if slot is not None)

    def insert(self, event: CapturedEvent) -> None:
        if not isinstance(event, CapturedEvent):
            err = MalformedEventError(f"refusing to store malformed event: {event!r}")
            self.reporter.error("Error adding event", {"cursor": self._cursor}, exc_info=err)
            raise err
        self._slots[self._cursor] = event
        self._cursor = (self._cursor + 1) % self._capacity

    def snapshot(self) -> list[CapturedEvent]:
        # Walk from the cursor (oldest slot once wrapped) so the stable sort
        # keeps insertion order among equal timestamps.
        ordered = self._slots[self._cursor:] + self._slots[:self._cursor]
        return sorted((e for e in ordered if e is not None), key=lambda e: e.timestamp)

    def clear(self) -> None:
        self._slots = [None] * self._capacity
        self._cursor = 0
