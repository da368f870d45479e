from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from ..errors import ConfigurationError
from .tracker import TrackerConfig


# Load .env from current working directory or parents
load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    max_events: int = 1000
    throttle_ms: int = 50
    debug: bool = False
    log_level: str = "INFO"

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            max_events=_env_int("POINTERTRACK_MAX_EVENTS", 1000),
            throttle_ms=_env_int("POINTERTRACK_THROTTLE_MS", 50),
            debug=_env_bool("POINTERTRACK_DEBUG"),
            log_level=os.getenv("POINTERTRACK_LOG_LEVEL", "INFO"),
        )

    def to_tracker_config(
        self,
        max_events: Optional[int] = None,
        throttle_ms: Optional[int] = None,
        debug: Optional[bool] = None,
    ) -> TrackerConfig:
        cfg = TrackerConfig(
            max_events=self.max_events if max_events is None else max_events,
            throttle_interval=self.throttle_ms if throttle_ms is None else throttle_ms,
            debug=self.debug if debug is None else debug,
        )
        cfg.validate()
        return cfg
