from __future__ import annotations

import logging
import threading
from typing import Optional

from ..models import Element, EventKind, RawInputNotification
from .source import Handler, InputSource


# Desktop pointers have no element tree; every event targets the screen.
SCREEN = Element(tag="screen")

_MODIFIER_PREFIXES = (
    ("ctrl", "ctrl"),
    ("alt", "alt"),
    ("shift", "shift"),
    ("cmd", "meta"),
)


def _modifier_name(key) -> Optional[str]:
    name = getattr(key, "name", None)
    if not name:
        return None
    for prefix, flag in _MODIFIER_PREFIXES:
        if name.startswith(prefix):
            return flag
    return None


class ModifierState:
    """Which modifier keys are currently held, fed by keyboard callbacks."""

    def __init__(self) -> None:
        self._held: dict[str, set[str]] = {"ctrl": set(), "alt": set(), "shift": set(), "meta": set()}

    def press(self, key) -> None:
        flag = _modifier_name(key)
        if flag:
            self._held[flag].add(key.name)

    def release(self, key) -> None:
        flag = _modifier_name(key)
        if flag:
            self._held[flag].discard(key.name)

    def is_held(self, flag: str) -> bool:
        return bool(self._held[flag])


class PynputInputSource(InputSource):
    """Desktop pointer input via pynput listeners.

    Listeners run while at least one handler is registered. pynput calls
    back on its own listener thread, one event at a time.
    """

    def __init__(self) -> None:
        self.log = logging.getLogger("pointertrack")
        self.modifiers = ModifierState()
        self._handlers: dict[str, list[Handler]] = {k.value: [] for k in EventKind}
        self._mouse_listener = None
        self._kb_listener = None
        self._lock = threading.Lock()

    # --- InputSource ---
    def add_listener(self, kind: str, handler: Handler) -> None:
        with self._lock:
            handlers = self._handlers[EventKind(kind).value]
            if self._mouse_listener is None:
                self._start_listeners()
            if handler not in handlers:
                handlers.append(handler)

    def remove_listener(self, kind: str, handler: Handler) -> None:
        with self._lock:
            handlers = self._handlers[EventKind(kind).value]
            if handler in handlers:
                handlers.remove(handler)
            if not any(self._handlers.values()):
                self._stop_listeners()

    # --- listener lifecycle ---
    def _start_listeners(self) -> None:
        # pynput picks a platform backend at import time, which fails on
        # headless hosts; only pay that cost once capture is requested.
        from pynput import keyboard, mouse  # type: ignore

        started = []
        try:
            mouse_listener = mouse.Listener(on_move=self._on_move, on_click=self._on_click)
            kb_listener = keyboard.Listener(on_press=self.modifiers.press, on_release=self.modifiers.release)
            for listener in (mouse_listener, kb_listener):
                listener.start()
                started.append(listener)
        except Exception:
            for listener in started:
                listener.stop()
            raise
        # only a fully started pair counts as running
        self._mouse_listener = mouse_listener
        self._kb_listener = kb_listener
        self.log.debug("pynput listeners started")

    def _stop_listeners(self) -> None:
        for listener in (self._mouse_listener, self._kb_listener):
            if listener is not None:
                listener.stop()
        self._mouse_listener = None
        self._kb_listener = None
        self.log.debug("pynput listeners stopped")

    # --- pynput callbacks ---
    def _notification(self, kind: EventKind, x: float, y: float, button=None) -> RawInputNotification:
        return RawInputNotification(
            kind=kind.value,
            client_x=x,
            client_y=y,
            screen_x=x,
            screen_y=y,
            target=SCREEN,
            ctrl=self.modifiers.is_held("ctrl"),
            alt=self.modifiers.is_held("alt"),
            shift=self.modifiers.is_held("shift"),
            meta=self.modifiers.is_held("meta"),
            button=button,
        )

    def _emit(self, raw: RawInputNotification) -> None:
        for handler in list(self._handlers[raw.kind]):
            handler(raw)

    def _on_move(self, x: float, y: float) -> None:
        self._emit(self._notification(EventKind.MOVE, x, y))

    def _on_click(self, x: float, y: float, button, pressed: bool) -> None:
        # a DOM-style click completes on release
        if pressed:
            return
        name = getattr(button, "name", None) or str(button)
        self._emit(self._notification(EventKind.CLICK, x, y, button=name))
