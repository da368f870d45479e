from __future__ import annotations

from dataclasses import dataclass

from ..errors import ConfigurationError


def _is_int(value) -> bool:
    # bool is an int subclass; True is not a buffer size
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(slots=True)
class TrackerConfig:
    max_events: int = 1000        # ring buffer capacity
    throttle_interval: int = 50   # min ms between admitted moves; 0 disables
    debug: bool = False           # forward debug reports to the logger

    def validate(self) -> None:
        if not _is_int(self.max_events) or self.max_events <= 0:
            raise ConfigurationError("max_events must be a positive integer")
        if not _is_int(self.throttle_interval) or self.throttle_interval < 0:
            raise ConfigurationError("throttle_interval must be a non-negative integer")
