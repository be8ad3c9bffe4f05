"""Time Tracker Controller - owns the work timer and its transitions"""
import logging
from datetime import date
from typing import Callable

from app.models.time_entry import TimeEntryCreate
from app.utils.datetime_helper import epoch_ms, format_elapsed, ms_to_hours
from app.utils.datetime_helper import today as current_date

from .commit_sink import CommitSink
from .errors import (
    CommitFailedError,
    CommitInProgressError,
    DescriptionRequiredError,
    DiscardNotConfirmedError,
    DurationTooShortError,
)
from .models.tracker_state import Running, Stopped, TrackerSnapshot, TrackerState
from .persistence import TrackerStateStore
from .sampler import ClockSampler

logger = logging.getLogger(__name__)

MIN_COMMIT_MS = 60_000


class TimeTrackerController:
    """
    Single-writer owner of one TrackerState.

    All methods are meant to be called from the event loop that runs the
    sampler. Every transition is persisted right away; persistence failures
    only cost durability across restarts.
    """

    def __init__(
        self,
        store: TrackerStateStore,
        sink: CommitSink,
        clock: Callable[[], int] = epoch_ms,
        sample_interval_seconds: float = 1.0,
        today: Callable[[], date] = current_date,
    ):
        self._store = store
        self._sink = sink
        self._clock = clock
        self._today = today
        self._state = TrackerState()
        self._sampler = ClockSampler(self._on_tick, sample_interval_seconds)
        self._committing = False

    @property
    def state(self) -> TrackerState:
        return self._state

    @property
    def is_sampling(self) -> bool:
        return self._sampler.is_active

    def restore(self) -> TrackerSnapshot:
        """Load persisted state; a timer left running keeps accruing from its start time"""
        restored = self._store.load()
        self._state = restored if restored is not None else TrackerState()

        if self._state.is_running:
            self._on_tick()
            self._sampler.start()
            logger.info(f"Restored running timer at {format_elapsed(self.elapsed_ms())}")
        else:
            self._persist()

        return self.snapshot()

    def elapsed_ms(self) -> int:
        return self._state.elapsed_at(self._clock())

    def snapshot(self) -> TrackerSnapshot:
        elapsed = self.elapsed_ms()
        description = self._state.description
        return TrackerSnapshot(
            is_running=self._state.is_running,
            elapsed_ms=elapsed,
            display=format_elapsed(elapsed),
            description=description,
            has_accrued_time=elapsed > 0,
            can_commit=(
                not self._committing
                and elapsed >= MIN_COMMIT_MS
                and bool(description.strip())
            ),
        )

    def start(self) -> TrackerSnapshot:
        """Start or resume; prior accrual is kept by backdating the start time"""
        self._ensure_not_committing()
        if self._state.is_running:
            return self.snapshot()

        now = self._clock()
        elapsed = self._state.elapsed_at(now)
        self._set_phase(Running(started_at_ms=now - elapsed, prior_elapsed_ms=elapsed))
        self._sampler.start()
        logger.info(f"Timer started at {format_elapsed(elapsed)}")
        return self.snapshot()

    def pause(self) -> TrackerSnapshot:
        if not self._state.is_running:
            return self.snapshot()

        self._sampler.stop()
        elapsed = self._state.elapsed_at(self._clock())
        self._set_phase(Stopped(elapsed_ms=elapsed))
        logger.info(f"Timer paused at {format_elapsed(elapsed)}")
        return self.snapshot()

    def set_description(self, description: str) -> TrackerSnapshot:
        self._ensure_not_committing()
        self._state = self._state.model_copy(update={"description": description})
        self._persist()
        return self.snapshot()

    def discard(self, confirm: bool = False) -> TrackerSnapshot:
        """Drop the timer and its persisted copy; confirm must be True"""
        if not confirm:
            raise DiscardNotConfirmedError()
        self._ensure_not_committing()

        self._reset()
        logger.info("Timer discarded")
        return self.snapshot()

    async def commit(self) -> TimeEntryCreate:
        """
        Turn the tracked time into a time entry.

        Raises:
            DescriptionRequiredError: description is blank (timer untouched)
            DurationTooShortError: less than a minute tracked (timer untouched)
            CommitFailedError: the entry was not stored (timer is paused, time kept)
        """
        self._ensure_not_committing()
        description = self._state.description.strip()
        if not description:
            raise DescriptionRequiredError()

        tracked = self.elapsed_ms()
        if tracked < MIN_COMMIT_MS:
            raise DurationTooShortError(tracked, MIN_COMMIT_MS)

        self.pause()
        elapsed = self._state.elapsed_at(self._clock())

        entry = TimeEntryCreate(
            description=description,
            hours=ms_to_hours(elapsed),
            date=self._today(),
            billable=True,
        )

        self._committing = True
        try:
            await self._sink.commit(entry)
        except CommitFailedError:
            logger.error(f"Timer kept at {format_elapsed(elapsed)} after failed commit")
            raise
        except Exception as e:
            logger.error(f"Timer kept at {format_elapsed(elapsed)} after failed commit: {e}")
            raise CommitFailedError(str(e)) from e
        finally:
            self._committing = False

        self._reset()
        logger.info(f"Logged {entry.hours}h for '{description}'")
        return entry

    def close(self) -> None:
        """Stop sampling and flush the current state"""
        self._sampler.stop()
        self._persist()

    def _on_tick(self) -> None:
        phase = self._state.phase
        if not isinstance(phase, Running):
            return
        elapsed = self._state.elapsed_at(self._clock())
        self._set_phase(Running(started_at_ms=phase.started_at_ms, prior_elapsed_ms=elapsed))

    def _set_phase(self, phase) -> None:
        self._state = self._state.model_copy(update={"phase": phase})
        self._persist()

    def _persist(self) -> None:
        self._store.save(self._state, self._clock())

    def _reset(self) -> None:
        self._sampler.stop()
        self._state = TrackerState()
        self._store.clear()

    def _ensure_not_committing(self) -> None:
        if self._committing:
            raise CommitInProgressError()
