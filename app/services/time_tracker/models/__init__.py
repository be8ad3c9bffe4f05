"""Time tracker state models"""
from .tracker_state import PersistedTrackerState, Running, Stopped, TimerPhase, TrackerSnapshot, TrackerState

__all__ = [
    "PersistedTrackerState",
    "Running",
    "Stopped",
    "TimerPhase",
    "TrackerSnapshot",
    "TrackerState",
]
