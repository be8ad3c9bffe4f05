"""Business logic for logged time entries"""
import logging
from datetime import date
from typing import Callable, List, Optional

from pydantic import BaseModel

from app.infra.supabase.repositories.time_entries import TimeEntryRepository
from app.models.time_entry import TimeEntry, TimeEntryCreate, TimeEntryStatus, TimeEntryUpdate
from app.utils.datetime_helper import today as current_date

logger = logging.getLogger(__name__)


class TimeEntrySummary(BaseModel):
    """Hour totals over a set of entries"""
    entry_count: int
    total_hours: float
    billable_hours: float
    unbilled_hours: float


def summarize(entries: List[TimeEntry]) -> TimeEntrySummary:
    billable = [e for e in entries if e.billable]
    return TimeEntrySummary(
        entry_count=len(entries),
        total_hours=round(sum(e.hours for e in entries), 2),
        billable_hours=round(sum(e.hours for e in billable), 2),
        unbilled_hours=round(sum(e.hours for e in billable if e.status == TimeEntryStatus.UNBILLED), 2),
    )


class TimeEntryService:
    """Service layer for manually logged and tracked time"""

    def __init__(self, repository: TimeEntryRepository, today: Callable[[], date] = current_date):
        self.repository = repository
        self._today = today

    async def list_entries(self, limit: Optional[int] = None) -> List[TimeEntry]:
        return await self.repository.find_recent(limit=limit)

    async def get_entry(self, entry_id: str) -> Optional[TimeEntry]:
        return await self.repository.find_by_id(entry_id)

    async def log_time(
        self,
        description: str,
        hours: float,
        entry_date: Optional[date] = None,
        billable: bool = True,
        company_id: Optional[str] = None,
        project_id: Optional[str] = None,
        rate: Optional[float] = None,
    ) -> TimeEntry:
        """
        Log hours manually.

        Business rules:
        - description must not be blank
        - date defaults to today
        - an empty company_id means "no client"
        - new entries always start unbilled

        Raises:
            ValueError: If the description is blank
        """
        if not description.strip():
            raise ValueError("description required")

        entry = TimeEntryCreate(
            description=description.strip(),
            hours=hours,
            date=entry_date or self._today(),
            billable=billable,
            company_id=company_id or None,
            project_id=project_id or None,
            rate=rate,
            status=TimeEntryStatus.UNBILLED,
        )
        created = await self.repository.create(entry)
        logger.info(f"Logged {created.hours}h manually as entry {created.id}")
        return created

    async def update_entry(self, entry_id: str, update: TimeEntryUpdate) -> TimeEntry:
        """
        Raises:
            ValueError: If the entry does not exist or the description is blanked
        """
        if update.description is not None and not update.description.strip():
            raise ValueError("description required")
        if "company_id" in update.model_fields_set and not update.company_id:
            update = update.model_copy(update={"company_id": None})

        updated = await self.repository.update(entry_id, update)
        if not updated:
            raise ValueError(f"Time entry {entry_id} not found")
        return updated

    async def delete_entry(self, entry_id: str) -> None:
        """
        Raises:
            ValueError: If the entry does not exist
        """
        if not await self.repository.delete(entry_id):
            raise ValueError(f"Time entry {entry_id} not found")
        logger.info(f"Deleted time entry {entry_id}")

    async def unbilled_for_company(self, company_id: str) -> List[TimeEntry]:
        return await self.repository.find_unbilled_for_company(company_id)

    async def mark_invoiced(self, entry_ids: List[str], invoice_id: str) -> List[TimeEntry]:
        """Attach entries to an invoice; entries already invoiced or paid are rejected"""
        if not entry_ids:
            return []

        for entry_id in entry_ids:
            entry = await self.repository.find_by_id(entry_id)
            if not entry:
                raise ValueError(f"Time entry {entry_id} not found")
            if entry.status != TimeEntryStatus.UNBILLED:
                raise ValueError(f"Time entry {entry_id} is already {entry.status.value}")

        invoiced = await self.repository.mark_invoiced(entry_ids, invoice_id)
        logger.info(f"Invoiced {len(invoiced)} time entries on invoice {invoice_id}")
        return invoiced

    async def summary(self) -> TimeEntrySummary:
        return summarize(await self.repository.find_recent())
