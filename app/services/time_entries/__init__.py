"""Time entries service module"""
from .time_entry_service import TimeEntryService, TimeEntrySummary, summarize

__all__ = [
    "TimeEntryService",
    "TimeEntrySummary",
    "summarize",
]
