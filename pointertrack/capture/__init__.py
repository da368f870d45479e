from .controller import TrackerData, TrackingController, monotonic_ms
from .listeners import ListenerRegistry
from ..models import (
    CapturedEvent,
    Element,
    EventKind,
    Modifiers,
    Notification,
    PathEntry,
    RawInputNotification,
    TrackingState,
)
from .normalizer import normalize
from .source import InputSource, ManualInputSource
from .store import CircularEventStore
from .throttle import ThrottleGate

__all__ = [
    "CapturedEvent",
    "CircularEventStore",
    "Element",
    "EventKind",
    "InputSource",
    "ListenerRegistry",
    "ManualInputSource",
    "Modifiers",
    "Notification",
    "PathEntry",
    "RawInputNotification",
    "ThrottleGate",
    "TrackerData",
    "TrackingController",
    "TrackingState",
    "monotonic_ms",
    "normalize",
]
