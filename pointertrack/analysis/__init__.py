from .statistics import Statistics, average_movement_speed, compute_statistics, event_rate

__all__ = ["Statistics", "average_movement_speed", "compute_statistics", "event_rate"]
