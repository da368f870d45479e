"""pointertrack: bounded capture of pointer moves and clicks with live statistics."""

from .capture import (
    CapturedEvent,
    EventKind,
    ManualInputSource,
    Notification,
    RawInputNotification,
    TrackerData,
    TrackingController,
)
from .config import Settings, TrackerConfig
from .errors import (
    ConfigurationError,
    ListenerError,
    MalformedEventError,
    RegistrationError,
    TrackerError,
)

__version__ = "0.1.0"

__all__ = [
    "CapturedEvent",
    "ConfigurationError",
    "EventKind",
    "ListenerError",
    "MalformedEventError",
    "ManualInputSource",
    "Notification",
    "RawInputNotification",
    "RegistrationError",
    "Settings",
    "TrackerConfig",
    "TrackerData",
    "TrackerError",
    "TrackingController",
]
