"""Services module"""
from app.services.time_entries import TimeEntryService
from app.services.time_tracker import TimeTrackerController

__all__ = [
    "TimeEntryService",
    "TimeTrackerController",
]
