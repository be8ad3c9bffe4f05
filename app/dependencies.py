"""FastAPI dependencies and service wiring"""
from fastapi import HTTPException, Request

from app.config import Settings, get_settings
from app.infra.supabase import get_supabase_client
from app.infra.supabase.repositories import RepositoryFactory
from app.services.time_entries import TimeEntryService
from app.services.time_tracker import (
    JsonFileKeyValueStore,
    SupabaseCommitSink,
    TimeTrackerController,
    TrackerStateStore,
)


def get_repositories() -> RepositoryFactory:
    return RepositoryFactory(get_supabase_client(), get_settings().time_entries_table)


def build_tracker_controller(settings: Settings) -> TimeTrackerController:
    """Create the process-wide timer backed by a local JSON file and Supabase"""
    store = TrackerStateStore(JsonFileKeyValueStore(settings.tracker_state_path))
    sink = SupabaseCommitSink(
        get_repositories().time_entries,
        timeout_seconds=settings.tracker_commit_timeout_seconds,
        max_attempts=settings.tracker_commit_max_attempts,
    )
    return TimeTrackerController(
        store,
        sink,
        sample_interval_seconds=settings.tracker_sample_interval_seconds,
    )


def get_tracker_controller(request: Request) -> TimeTrackerController:
    controller = getattr(request.app.state, "tracker", None)
    if controller is None:
        raise HTTPException(status_code=503, detail="Time tracker is not running")
    return controller


def get_time_entry_service() -> TimeEntryService:
    return TimeEntryService(get_repositories().time_entries)
