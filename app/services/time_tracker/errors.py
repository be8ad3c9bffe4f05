"""Time tracker errors"""


class TimeTrackerError(Exception):
    """Base class for time tracker failures"""


class TrackerValidationError(TimeTrackerError, ValueError):
    """A commit was rejected locally; the timer state is unchanged"""


class DescriptionRequiredError(TrackerValidationError):
    def __init__(self):
        super().__init__("description required")


class DurationTooShortError(TrackerValidationError):
    def __init__(self, elapsed_ms: int, minimum_ms: int):
        self.elapsed_ms = elapsed_ms
        self.minimum_ms = minimum_ms
        super().__init__(
            f"at least {minimum_ms // 1000} seconds must be tracked before logging time "
            f"(tracked {elapsed_ms // 1000})"
        )


class DiscardNotConfirmedError(TimeTrackerError):
    def __init__(self):
        super().__init__("discard must be confirmed")


class CommitInProgressError(TimeTrackerError):
    def __init__(self):
        super().__init__("a commit is already in progress")


class CommitFailedError(TimeTrackerError):
    """The time entry could not be stored; the timer keeps its elapsed time"""
