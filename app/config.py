import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")


@dataclass(frozen=True)
class Settings:
    """Runtime settings read from the environment"""
    supabase_url: Optional[str]
    supabase_service_role_key: Optional[str]
    time_entries_table: str = "time_entries"
    tracker_state_path: str = ".tracker/state.json"
    tracker_sample_interval_seconds: float = 1.0
    tracker_commit_timeout_seconds: float = 10.0
    tracker_commit_max_attempts: int = 3


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get settings singleton (call get_settings.cache_clear() in tests)"""
    return Settings(
        supabase_url=os.getenv("SUPABASE_URL"),
        supabase_service_role_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY"),
        time_entries_table=os.getenv("TIME_ENTRIES_TABLE", "time_entries"),
        tracker_state_path=os.getenv("TRACKER_STATE_PATH", ".tracker/state.json"),
        tracker_sample_interval_seconds=float(os.getenv("TRACKER_SAMPLE_INTERVAL_SECONDS", "1.0")),
        tracker_commit_timeout_seconds=float(os.getenv("TRACKER_COMMIT_TIMEOUT_SECONDS", "10")),
        tracker_commit_max_attempts=int(os.getenv("TRACKER_COMMIT_MAX_ATTEMPTS", "3")),
    )
