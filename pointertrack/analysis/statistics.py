from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from ..models import CapturedEvent, EventKind


@dataclass(frozen=True, slots=True)
class Statistics:
    total_events: int = 0
    counts: dict = field(default_factory=dict)
    move_events: int = 0
    click_events: int = 0
    event_rate: float = 0.0              # events per second since the oldest stored event
    average_movement_speed: float = 0.0  # px/s across consecutive moves

    def as_dict(self) -> dict:
        return {
            "total_events": self.total_events,
            "counts": dict(self.counts),
            "move_events": self.move_events,
            "click_events": self.click_events,
            "event_rate": self.event_rate,
            "average_movement_speed": self.average_movement_speed,
        }


def event_rate(events: Sequence[CapturedEvent], now: float) -> float:
    if not events:
        return 0.0
    elapsed_sec = (now - events[0].timestamp) / 1000.0
    if elapsed_sec <= 0:
        return 0.0
    return len(events) / elapsed_sec


def average_movement_speed(moves: Sequence[CapturedEvent]) -> float:
    if len(moves) < 2:
        return 0.0
    total_distance = 0.0
    total_time = 0.0
    for prev, cur in zip(moves, moves[1:]):
        total_distance += math.hypot(cur.x - prev.x, cur.y - prev.y)
        total_time += (cur.timestamp - prev.timestamp) / 1000.0
    return total_distance / total_time if total_time > 0 else 0.0


def compute_statistics(events: Sequence[CapturedEvent], now: float) -> Statistics:
    """Aggregate a chronologically sorted snapshot.

    ``now`` is the query-time clock reading (ms, same clock as the event
    timestamps) used for the event rate.
    """
    counts = {kind.value: 0 for kind in EventKind}
    for e in events:
        counts[e.kind.value] += 1
    moves = [e for e in events if e.kind is EventKind.MOVE]
    return Statistics(
        total_events=len(events),
        counts=counts,
        move_events=counts[EventKind.MOVE.value],
        click_events=counts[EventKind.CLICK.value],
        event_rate=event_rate(events, now),
        average_movement_speed=average_movement_speed(moves),
    )
