"""Domain models for the application"""
from .time_entry import TimeEntry, TimeEntryCreate, TimeEntryStatus, TimeEntryUpdate

__all__ = [
    'TimeEntry', 'TimeEntryCreate', 'TimeEntryStatus', 'TimeEntryUpdate',
]
