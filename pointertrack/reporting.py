from __future__ import annotations

import logging
from typing import Any, Mapping, Optional


class Reporter:
    """Logging collaborator for the tracker.

    Receives ``(level, message, context)`` reports and forwards them to the
    ``pointertrack`` logger. Debug reports are dropped unless ``debug`` is set.
    """

    def __init__(self, debug: bool = False, logger: Optional[logging.Logger] = None) -> None:
        self.debug_enabled = debug
        self.log = logger or logging.getLogger("pointertrack")

    def report(
        self,
        level: int,
        message: str,
        context: Optional[Mapping[str, Any]] = None,
        exc_info: Optional[BaseException] = None,
    ) -> None:
        if level <= logging.DEBUG and not self.debug_enabled:
            return
        ctx = dict(context or {})
        if ctx:
            rendered = " ".join(f"{k}={v}" for k, v in ctx.items())
            self.log.log(level, "%s [%s]", message, rendered, exc_info=exc_info, extra={"context": ctx})
        else:
            self.log.log(level, "%s", message, exc_info=exc_info, extra={"context": ctx})

    def debug(self, message: str, context: Optional[Mapping[str, Any]] = None) -> None:
        self.report(logging.DEBUG, message, context)

    def warning(self, message: str, context: Optional[Mapping[str, Any]] = None) -> None:
        self.report(logging.WARNING, message, context)

    def error(
        self,
        message: str,
        context: Optional[Mapping[str, Any]] = None,
        exc_info: Optional[BaseException] = None,
    ) -> None:
        self.report(logging.ERROR, message, context, exc_info)
