from __future__ import annotations


class TrackerError(Exception):
    """Base class for every error raised by pointertrack."""


class ConfigurationError(TrackerError, ValueError):
    # invalid constructor options; construction aborts
    pass


class RegistrationError(TrackerError):
    # the input source refused to add or remove our handlers
    pass


class MalformedEventError(TrackerError):
    # a notification or record that cannot be normalized or stored
    pass


class ListenerError(TrackerError):
    """A subscriber callback raised while a notification was being published.

    Never propagated to the publisher; only reported.
    """

    def __init__(self, name: str, callback, original: BaseException) -> None:
        self.name = name
        self.callback = callback
        self.original = original
        cb_name = getattr(callback, "__qualname__", None) or repr(callback)
        super().__init__(f"listener {cb_name} failed on '{name}': {original}")
