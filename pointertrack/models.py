from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

Button = Union[int, str]


class EventKind(str, Enum):
    MOVE = "move"
    CLICK = "click"


class Notification(str, Enum):
    MOUSE_MOVE = "mousemove"
    MOUSE_CLICK = "mouseclick"
    EVENT_ADDED = "eventAdded"
    TRACKING_STARTED = "trackingStarted"
    TRACKING_STOPPED = "trackingStopped"
    DATA_CLEARED = "dataCleared"


# kind-specific notification published after each stored event
KIND_NOTIFICATIONS = {
    EventKind.MOVE: Notification.MOUSE_MOVE,
    EventKind.CLICK: Notification.MOUSE_CLICK,
}


class TrackingState(Enum):
    IDLE = "idle"
    ACTIVE = "active"


@dataclass(slots=True)
class Element:
    # Host UI node under the pointer; parent links make up the ancestor chain.
    tag: str
    id: Optional[str] = None
    class_name: Optional[str] = None
    parent: Optional["Element"] = None


@dataclass(slots=True)
class RawInputNotification:
    kind: str  # 'move' or 'click'
    client_x: float
    client_y: float
    screen_x: float
    screen_y: float
    target: Optional[Element]
    ctrl: bool = False
    alt: bool = False
    shift: bool = False
    meta: bool = False
    button: Optional[Button] = None


@dataclass(frozen=True, slots=True)
class PathEntry:
    tag: str
    id: Optional[str] = None
    classes: Optional[tuple[str, ...]] = None

    def as_dict(self) -> dict:
        out: dict[str, Any] = {"tag": self.tag}
        if self.id is not None:
            out["id"] = self.id
        if self.classes is not None:
            out["classes"] = list(self.classes)
        return out


@dataclass(frozen=True, slots=True)
class Modifiers:
    ctrl: bool = False
    alt: bool = False
    shift: bool = False
    meta: bool = False

    @property
    def active(self) -> tuple[str, ...]:
        return tuple(n for n in ("ctrl", "alt", "shift", "meta") if getattr(self, n))


@dataclass(frozen=True, slots=True)
class CapturedEvent:
    kind: EventKind
    x: float
    y: float
    screen_x: float
    screen_y: float
    timestamp: float  # ms, from the controller's clock
    target: str
    path: tuple[PathEntry, ...] = ()
    modifiers: Modifiers = field(default_factory=Modifiers)
    button: Optional[Button] = None

    def as_dict(self) -> dict:
        out: dict[str, Any] = {
            "type": self.kind.value,
            "x": self.x,
            "y": self.y,
            "screen_x": self.screen_x,
            "screen_y": self.screen_y,
            "timestamp": self.timestamp,
            "target": self.target,
            "path": [p.as_dict() for p in self.path],
            "modifiers": {
                "ctrl": self.modifiers.ctrl,
                "alt": self.modifiers.alt,
                "shift": self.modifiers.shift,
                "meta": self.modifiers.meta,
            },
        }
        if self.kind is EventKind.CLICK:
            out["button"] = self.button
        return out
