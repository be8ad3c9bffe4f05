"""Repository factory and exports"""
from supabase import Client
from .time_entries import TimeEntryRepository


class RepositoryFactory:
    """Factory for creating repository instances"""

    def __init__(self, client: Client, time_entries_table: str = "time_entries"):
        self._client = client
        self._time_entries_table = time_entries_table
        self._time_entries: TimeEntryRepository = None

    @property
    def time_entries(self) -> TimeEntryRepository:
        """Get time entries repository"""
        if self._time_entries is None:
            self._time_entries = TimeEntryRepository(self._client, self._time_entries_table)
        return self._time_entries


__all__ = [
    'RepositoryFactory',
    'TimeEntryRepository',
]
