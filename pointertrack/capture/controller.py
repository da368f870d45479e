from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..analysis.statistics import Statistics, compute_statistics
from ..config import TrackerConfig
from ..errors import RegistrationError
from ..reporting import Reporter
from ..models import (
    KIND_NOTIFICATIONS,
    CapturedEvent,
    EventKind,
    Notification,
    RawInputNotification,
    TrackingState,
)
from .listeners import Callback, ListenerRegistry
from .normalizer import normalize
from .source import InputSource, ManualInputSource
from .store import CircularEventStore
from .throttle import ThrottleGate


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass(slots=True)
class TrackerData:
    total_events: int
    is_tracking: bool
    events: list[CapturedEvent] = field(default_factory=list)
    statistics: Statistics = field(default_factory=Statistics)

    def as_dict(self) -> dict:
        return {
            "total_events": self.total_events,
            "is_tracking": self.is_tracking,
            "events": [e.as_dict() for e in self.events],
            "statistics": self.statistics.as_dict(),
        }


class TrackingController:
    def __init__(
        self,
        config: Optional[TrackerConfig] = None,
        source: Optional[InputSource] = None,
        *,
        reporter: Optional[Reporter] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.cfg = config if config is not None else TrackerConfig()
        self.cfg.validate()
        self.reporter = reporter or Reporter(debug=self.cfg.debug)
        self.source = source if source is not None else ManualInputSource()
        self.clock = clock or monotonic_ms

        self.store = CircularEventStore(self.cfg.max_events, reporter=self.reporter)
        self.throttle = ThrottleGate(self.cfg.throttle_interval)
        self.listeners = ListenerRegistry(reporter=self.reporter)
        self._state = TrackingState.IDLE

    @property
    def config(self) -> TrackerConfig:
        return self.cfg

    @property
    def state(self) -> TrackingState:
        return self._state

    @property
    def is_tracking(self) -> bool:
        return self._state is TrackingState.ACTIVE

    # --- subscriptions ---
    def subscribe(self, name: str, callback: Callback) -> None:
        self.listeners.subscribe(name, callback)

    def unsubscribe(self, name: str, callback: Callback) -> None:
        self.listeners.unsubscribe(name, callback)

    # --- lifecycle ---
    def start(self) -> bool:
        if self.is_tracking:
            self.reporter.warning("Pointer tracking is already active")
            return False

        registered: list[str] = []
        try:
            self.source.add_listener(EventKind.MOVE.value, self._on_move)
            registered.append(EventKind.MOVE.value)
            self.source.add_listener(EventKind.CLICK.value, self._on_click)
            registered.append(EventKind.CLICK.value)
        except Exception as exc:
            self.reporter.error("Error starting pointer tracking", {"registered": registered}, exc_info=exc)
            self._rollback(registered)
            raise RegistrationError(f"could not register input handlers: {exc}") from exc

        self._state = TrackingState.ACTIVE
        self.listeners.publish(Notification.TRACKING_STARTED, None)
        self.reporter.debug("Pointer tracking started")
        return True

    def stop(self) -> bool:
        if not self.is_tracking:
            self.reporter.warning("Pointer tracking is not active")
            return False

        removed: list[str] = []
        try:
            self.source.remove_listener(EventKind.MOVE.value, self._on_move)
            removed.append(EventKind.MOVE.value)
            self.source.remove_listener(EventKind.CLICK.value, self._on_click)
            removed.append(EventKind.CLICK.value)
        except Exception as exc:
            self.reporter.error("Error stopping pointer tracking", {"removed": removed}, exc_info=exc)
            # still ACTIVE, so every handler must stay attached
            self._reattach(removed)
            raise RegistrationError(f"could not deregister input handlers: {exc}") from exc

        self._state = TrackingState.IDLE
        self.listeners.publish(Notification.TRACKING_STOPPED, None)
        self.reporter.debug("Pointer tracking stopped")
        return True

    def _handlers(self) -> dict:
        return {EventKind.MOVE.value: self._on_move, EventKind.CLICK.value: self._on_click}

    def _rollback(self, registered: list[str]) -> None:
        handlers = self._handlers()
        for kind in registered:
            try:
                self.source.remove_listener(kind, handlers[kind])
            except Exception as exc:
                self.reporter.error("Error rolling back input handler", {"kind": kind}, exc_info=exc)

    def _reattach(self, removed: list[str]) -> None:
        handlers = self._handlers()
        for kind in removed:
            try:
                self.source.add_listener(kind, handlers[kind])
            except Exception as exc:
                self.reporter.error("Error reattaching input handler", {"kind": kind}, exc_info=exc)

    # --- queries ---
    def get_data(self) -> TrackerData:
        events = self.store.snapshot()
        return TrackerData(
            total_events=len(events),
            is_tracking=self.is_tracking,
            events=events,
            statistics=compute_statistics(events, self.clock()),
        )

    def clear(self) -> bool:
        self.store.clear()
        self.listeners.publish(Notification.DATA_CLEARED, None)
        self.reporter.debug("Event data cleared")
        return True

    # --- input handlers ---
    def _on_move(self, raw: RawInputNotification) -> None:
        self._handle(raw, EventKind.MOVE)

    def _on_click(self, raw: RawInputNotification) -> None:
        self._handle(raw, EventKind.CLICK)

    def _handle(self, raw: Any, kind: EventKind) -> None:
        # One bad notification must not end the tracking session.
        try:
            self.ingest(raw)
        except Exception as exc:
            self.reporter.error(f"Error handling pointer {kind.value}", {"kind": kind.value}, exc_info=exc)

    def ingest(self, raw: RawInputNotification) -> Optional[CapturedEvent]:
        """Normalize, throttle, store and broadcast one notification.

        Returns the stored event, or None if it was throttled or tracking is
        idle. Normalization and storage errors propagate.
        """
        if not self.is_tracking:
            return None
        event = normalize(raw, self.clock())
        if event.kind is EventKind.MOVE:
            if not self.throttle.admit_move(event.timestamp):
                return None
        elif not self.throttle.admit_click(event.timestamp):
            return None

        self.store.insert(event)
        self.listeners.publish(Notification.EVENT_ADDED, event)
        self.listeners.publish(KIND_NOTIFICATIONS[event.kind], event)
        return event
