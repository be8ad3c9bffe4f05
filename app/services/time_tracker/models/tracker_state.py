"""Time tracker state models"""
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Stopped(BaseModel):
    """Timer is not accruing time; elapsed_ms is authoritative"""
    kind: Literal["stopped"] = "stopped"
    elapsed_ms: int = Field(0, ge=0)


class Running(BaseModel):
    """Timer is accruing time since started_at_ms"""
    kind: Literal["running"] = "running"
    started_at_ms: int
    prior_elapsed_ms: int = Field(0, ge=0)  # accrual already recorded; elapsed never drops below it


TimerPhase = Union[Stopped, Running]


class TrackerState(BaseModel):
    """In-memory timer state owned by one controller"""
    phase: TimerPhase = Field(default_factory=Stopped, discriminator="kind")
    description: str = ""

    @property
    def is_running(self) -> bool:
        return isinstance(self.phase, Running)

    def elapsed_at(self, now_ms: int) -> int:
        """Elapsed milliseconds as of now_ms"""
        if isinstance(self.phase, Running):
            return max(now_ms - self.phase.started_at_ms, self.phase.prior_elapsed_ms)
        return self.phase.elapsed_ms


class PersistedTrackerState(BaseModel):
    """Stored shape of the bt_tracker_state key"""
    model_config = ConfigDict(populate_by_name=True)

    is_running: bool = Field(False, alias="isRunning")
    start_time: Optional[int] = Field(None, alias="startTime")
    elapsed: int = 0
    description: Optional[str] = ""

    @classmethod
    def from_state(cls, state: TrackerState, now_ms: int) -> "PersistedTrackerState":
        phase = state.phase
        if isinstance(phase, Running):
            return cls(
                is_running=True,
                start_time=phase.started_at_ms,
                elapsed=state.elapsed_at(now_ms),
                description=state.description,
            )
        return cls(is_running=False, start_time=None, elapsed=phase.elapsed_ms, description=state.description)

    def to_state(self) -> TrackerState:
        """Rebuild the in-memory state; a running record without startTime resumes as stopped"""
        elapsed = max(self.elapsed, 0)
        if self.is_running and self.start_time is not None:
            phase: TimerPhase = Running(started_at_ms=self.start_time, prior_elapsed_ms=elapsed)
        else:
            phase = Stopped(elapsed_ms=elapsed)
        return TrackerState(phase=phase, description=self.description or "")


class TrackerSnapshot(BaseModel):
    """Read-only view of the timer returned to clients"""
    is_running: bool
    elapsed_ms: int
    display: str  # HH:MM:SS
    description: str
    has_accrued_time: bool
    can_commit: bool
