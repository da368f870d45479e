from .tracker import TrackerConfig
from .settings import Settings

__all__ = ["TrackerConfig", "Settings"]
