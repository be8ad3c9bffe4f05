"""Time tracker service module"""
from .controller import MIN_COMMIT_MS, TimeTrackerController
from .commit_sink import CommitSink, SupabaseCommitSink
from .errors import (
    CommitFailedError,
    CommitInProgressError,
    DescriptionRequiredError,
    DiscardNotConfirmedError,
    DurationTooShortError,
    TimeTrackerError,
    TrackerValidationError,
)
from .models import PersistedTrackerState, Running, Stopped, TrackerSnapshot, TrackerState
from .persistence import (
    TRACKER_STATE_KEY,
    JsonFileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
    TrackerStateStore,
)

__all__ = [
    "MIN_COMMIT_MS",
    "TimeTrackerController",
    "CommitSink",
    "SupabaseCommitSink",
    "CommitFailedError",
    "CommitInProgressError",
    "DescriptionRequiredError",
    "DiscardNotConfirmedError",
    "DurationTooShortError",
    "TimeTrackerError",
    "TrackerValidationError",
    "PersistedTrackerState",
    "Running",
    "Stopped",
    "TrackerSnapshot",
    "TrackerState",
    "TRACKER_STATE_KEY",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "TrackerStateStore",
]
