"""Time entry repository"""
from typing import Iterable, List, Optional

from supabase import Client  # type: ignore

from app.models.time_entry import TimeEntry, TimeEntryCreate, TimeEntryStatus, TimeEntryUpdate

from .base import BaseRepository


class TimeEntryRepository(BaseRepository[TimeEntry, TimeEntryCreate, TimeEntryUpdate]):
    """Repository for time entry operations"""

    def __init__(self, client: Client, table_name: str = "time_entries"):
        super().__init__(client, table_name, TimeEntry)

    async def create_once(self, entry_id: str, data: TimeEntryCreate) -> TimeEntry:
        """
        Insert a row under a caller-chosen id; repeating the call never adds a second row.

        Unset optional columns are left to their database defaults.
        """
        payload = {"id": entry_id, **data.model_dump(mode='json', exclude_none=True)}
        response = (
            self._client.table(self._table_name)
            .upsert(payload, on_conflict="id", ignore_duplicates=True)
            .execute()
        )

        if response.data:
            return self._to_model(response.data[0])

        # row already written by an earlier attempt
        existing = await self.find_by_id(entry_id)
        if existing is None:
            raise ValueError("Failed to create record")
        return existing

    async def find_recent(self, limit: Optional[int] = None) -> List[TimeEntry]:
        """Find time entries, newest date first"""
        query = self._client.table(self._table_name).select("*").order("date", desc=True)

        if limit:
            query = query.limit(limit)

        response = query.execute()
        return self._to_models(response.data)

    async def find_unbilled_for_company(self, company_id: str) -> List[TimeEntry]:
        """Find billable entries for a company that have not been invoiced yet"""
        response = (
            self._client.table(self._table_name)
            .select("*")
            .eq("company_id", company_id)
            .eq("billable", True)
            .eq("status", TimeEntryStatus.UNBILLED.value)
            .order("date", desc=True)
            .execute()
        )
        return self._to_models(response.data)

    async def mark_invoiced(self, entry_ids: Iterable[str], invoice_id: str) -> List[TimeEntry]:
        """Attach entries to an invoice and flag them as invoiced"""
        ids = list(entry_ids)
        if not ids:
            return []

        update_data = TimeEntryUpdate(status=TimeEntryStatus.INVOICED, invoice_id=invoice_id)
        response = (
            self._client.table(self._table_name)
            .update(update_data.model_dump(exclude_unset=True, mode='json'))
            .in_("id", ids)
            .execute()
        )
        return self._to_models(response.data)
