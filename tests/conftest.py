"""
Shared fixtures for the time tracker tests.

Everything that talks to the outside world (wall clock, local storage,
Supabase) is replaced by an in-process fake here.
"""

import sys
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

import pytest
import pytest_asyncio

# Ensure the project root is in the path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from app.models.time_entry import TimeEntry, TimeEntryCreate, TimeEntryStatus, TimeEntryUpdate  # noqa: E402
from app.services.time_tracker import (  # noqa: E402
    CommitFailedError,
    MemoryKeyValueStore,
    TimeTrackerController,
    TrackerStateStore,
)


TODAY = date(2026, 3, 14)
T0 = 1_700_000_000_000


# ============================================================================
# Fakes
# ============================================================================


class FakeClock:
    """Manually advanced epoch-millisecond clock"""

    def __init__(self, now_ms: int = T0):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms

    def set(self, ms: int) -> None:
        self.now_ms = ms


class RecordingSink:
    """Commit sink that records entries and can be told to fail"""

    def __init__(self):
        self.entries: List[TimeEntryCreate] = []
        self.fail_with: Optional[Exception] = None

    async def commit(self, entry: TimeEntryCreate) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.entries.append(entry)


class FailingKeyValueStore(MemoryKeyValueStore):
    """Local store whose writes fail, e.g. quota exceeded"""

    def set_item(self, key: str, value: str) -> None:
        raise OSError("quota exceeded")

    def remove_item(self, key: str) -> None:
        raise OSError("storage disabled")


class FakeTimeEntryRepository:
    """In-memory stand-in for TimeEntryRepository"""

    def __init__(self, entries: Optional[List[TimeEntry]] = None):
        self.rows: Dict[str, TimeEntry] = {e.id: e for e in entries or []}
        self.create_calls = 0
        self.fail_creates = 0
        self.drop_responses = 0
        self.fail_with: Optional[Exception] = None
        self._next_id = 1

    async def create(self, data: TimeEntryCreate) -> TimeEntry:
        self.create_calls += 1
        if self.fail_creates:
            self.fail_creates -= 1
            raise ConnectionError("supabase unavailable")
        entry = TimeEntry(id=f"entry-{self._next_id}", **data.model_dump())
        self._next_id += 1
        self.rows[entry.id] = entry
        return entry

    async def create_once(self, entry_id: str, data: TimeEntryCreate) -> TimeEntry:
        self.create_calls += 1
        if self.fail_with is not None:
            raise self.fail_with
        if self.fail_creates:
            self.fail_creates -= 1
            raise ConnectionError("supabase unavailable")
        entry = self.rows.setdefault(entry_id, TimeEntry(id=entry_id, **data.model_dump()))
        if self.drop_responses:
            # row is stored but the caller never hears back
            self.drop_responses -= 1
            raise TimeoutError("read timed out")
        return entry

    async def find_by_id(self, id: str) -> Optional[TimeEntry]:
        return self.rows.get(id)

    async def find_recent(self, limit: Optional[int] = None) -> List[TimeEntry]:
        entries = sorted(self.rows.values(), key=lambda e: e.date, reverse=True)
        return entries[:limit] if limit else entries

    async def find_unbilled_for_company(self, company_id: str) -> List[TimeEntry]:
        return [
            e for e in await self.find_recent()
            if e.company_id == company_id and e.billable and e.status == TimeEntryStatus.UNBILLED
        ]

    async def update(self, id: str, data: TimeEntryUpdate) -> Optional[TimeEntry]:
        entry = self.rows.get(id)
        if entry is None:
            return None
        updated = entry.model_copy(update=data.model_dump(exclude_unset=True))
        self.rows[id] = updated
        return updated

    async def delete(self, id: str) -> bool:
        return self.rows.pop(id, None) is not None

    async def mark_invoiced(self, entry_ids, invoice_id: str) -> List[TimeEntry]:
        update = TimeEntryUpdate(status=TimeEntryStatus.INVOICED, invoice_id=invoice_id)
        return [await self.update(entry_id, update) for entry_id in entry_ids]


def make_entry(entry_id: str, **overrides) -> TimeEntry:
    fields = {
        "id": entry_id,
        "description": "Set model",
        "hours": 1.5,
        "date": TODAY,
        "billable": True,
        "status": TimeEntryStatus.UNBILLED,
    }
    fields.update(overrides)
    return TimeEntry(**fields)


# ============================================================================
# Shared Fixtures
# ============================================================================


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def kv_store():
    return MemoryKeyValueStore()


@pytest.fixture
def state_store(kv_store):
    return TrackerStateStore(kv_store)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest_asyncio.fixture
async def make_controller(state_store, sink, clock):
    """Build controllers sharing one store, like reloading the same page"""
    created = []

    def _make(store=None, commit_sink=None, interval: float = 1.0):
        controller = TimeTrackerController(
            store or state_store,
            commit_sink or sink,
            clock=clock,
            sample_interval_seconds=interval,
            today=lambda: TODAY,
        )
        created.append(controller)
        return controller

    yield _make

    # cancel any sampler still ticking on this loop
    for controller in created:
        controller.close()


@pytest.fixture
def failing_sink():
    s = RecordingSink()
    s.fail_with = CommitFailedError("network down")
    return s
