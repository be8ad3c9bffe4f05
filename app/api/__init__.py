# API module exports
from app.api import health, time_entries, time_tracker
from app.api.base import api_router

__all__ = ["health", "time_entries", "time_tracker", "api_router"]
