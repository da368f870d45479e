from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Optional, Set

from ..errors import ListenerError
from ..reporting import Reporter

Callback = Callable[[Any], None]


def _key(name) -> str:
    return name.value if isinstance(name, Enum) else str(name)


class ListenerRegistry:
    """Name -> set of callbacks, published synchronously.

    A callback that raises is reported and skipped; the remaining
    subscribers still run and the publisher never sees the exception.
    """

    def __init__(self, reporter: Optional[Reporter] = None) -> None:
        self._listeners: Dict[str, Set[Callback]] = {}
        self.reporter = reporter or Reporter()

    def subscribe(self, name: str, callback: Callback) -> None:
        self._listeners.setdefault(_key(name), set()).add(callback)

    def unsubscribe(self, name: str, callback: Callback) -> None:
        callbacks = self._listeners.get(_key(name))
        if callbacks is not None:
            callbacks.discard(callback)

    def subscribers(self, name: str) -> Set[Callback]:
        return set(self._listeners.get(_key(name), ()))

    def publish(self, name: str, payload: Any = None) -> None:
        name = _key(name)
        # copy: callbacks may unsubscribe themselves
        for callback in list(self._listeners.get(name, ())):
            try:
                callback(payload)
            except Exception as exc:
                err = ListenerError(name, callback, exc)
                err.__cause__ = exc  # keep the subscriber's traceback in the log
                self.reporter.error("Error in event listener", {"notification": name}, exc_info=err)
