from __future__ import annotations

from typing import Callable, Dict, List

from ..models import EventKind, RawInputNotification

Handler = Callable[[RawInputNotification], None]


class InputSource:
    """Host UI input the controller attaches to while tracking.

    Implementations call every handler registered for a kind with one
    ``RawInputNotification`` per interaction.
    """

    def add_listener(self, kind: str, handler: Handler) -> None:
        raise NotImplementedError

    def remove_listener(self, kind: str, handler: Handler) -> None:
        raise NotImplementedError


class ManualInputSource(InputSource):
    """In-process source: the host pushes notifications with ``dispatch``."""

    def __init__(self) -> None:
        self._handlers: Dict[str, List[Handler]] = {k.value: [] for k in EventKind}

    def add_listener(self, kind: str, handler: Handler) -> None:
        handlers = self._handlers[EventKind(kind).value]
        if handler not in handlers:
            handlers.append(handler)

    def remove_listener(self, kind: str, handler: Handler) -> None:
        handlers = self._handlers[EventKind(kind).value]
        if handler in handlers:
            handlers.remove(handler)

    def listener_count(self, kind: str) -> int:
        return len(self._handlers[EventKind(kind).value])

    def dispatch(self, raw: RawInputNotification) -> None:
        for handler in list(self._handlers.get(raw.kind, ())):
            handler(raw)
