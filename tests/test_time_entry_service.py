"""
Tests for TimeEntryService and TimeEntryRepository.

Service tests run against an in-memory repository; repository tests check
the Supabase query chain on a mocked client.
"""

from datetime import date
from unittest.mock import MagicMock

import pytest

from app.infra.supabase.repositories import RepositoryFactory, TimeEntryRepository
from app.models.time_entry import TimeEntryCreate, TimeEntryStatus, TimeEntryUpdate
from app.services.time_entries import TimeEntryService, summarize

from conftest import TODAY, FakeTimeEntryRepository, make_entry


@pytest.fixture
def repo():
    return FakeTimeEntryRepository([
        make_entry("a", hours=2.0, date=date(2026, 3, 1), company_id="acme"),
        make_entry("b", hours=1.25, date=date(2026, 3, 10), company_id="acme", billable=False),
        make_entry("c", hours=3.0, date=date(2026, 3, 5), company_id="acme", status=TimeEntryStatus.INVOICED),
        make_entry("d", hours=0.5, date=date(2026, 3, 12), company_id="globex"),
    ])


@pytest.fixture
def service(repo):
    return TimeEntryService(repo, today=lambda: TODAY)


class TestTimeEntryService:
    @pytest.mark.asyncio
    async def test_list_is_newest_first(self, service):
        entries = await service.list_entries()
        assert [e.id for e in entries] == ["d", "b", "c", "a"]

    @pytest.mark.asyncio
    async def test_log_time_defaults(self, service, repo):
        entry = await service.log_time(description=" Load-in ", hours=4.0, company_id="")

        assert entry.date == TODAY
        assert entry.description == "Load-in"
        assert entry.company_id is None
        assert entry.status == TimeEntryStatus.UNBILLED
        assert entry.billable is True
        assert entry.id in repo.rows

    @pytest.mark.asyncio
    async def test_log_time_requires_description(self, service):
        with pytest.raises(ValueError, match="description required"):
            await service.log_time(description="  ", hours=1.0)

    @pytest.mark.asyncio
    async def test_update_entry(self, service):
        updated = await service.update_entry("a", TimeEntryUpdate(hours=2.5, company_id=""))

        assert updated.hours == 2.5
        assert updated.company_id is None

    @pytest.mark.asyncio
    async def test_update_missing_entry(self, service):
        with pytest.raises(ValueError, match="not found"):
            await service.update_entry("zzz", TimeEntryUpdate(hours=1.0))

    @pytest.mark.asyncio
    async def test_delete_entry(self, service, repo):
        await service.delete_entry("a")
        assert "a" not in repo.rows

        with pytest.raises(ValueError, match="not found"):
            await service.delete_entry("a")

    @pytest.mark.asyncio
    async def test_unbilled_for_company(self, service):
        entries = await service.unbilled_for_company("acme")
        assert [e.id for e in entries] == ["a"]

    @pytest.mark.asyncio
    async def test_mark_invoiced(self, service, repo):
        invoiced = await service.mark_invoiced(["a", "d"], "inv-7")

        assert {e.id for e in invoiced} == {"a", "d"}
        assert repo.rows["a"].status == TimeEntryStatus.INVOICED
        assert repo.rows["a"].invoice_id == "inv-7"

    @pytest.mark.asyncio
    async def test_mark_invoiced_rejects_already_invoiced(self, service, repo):
        with pytest.raises(ValueError, match="already invoiced"):
            await service.mark_invoiced(["a", "c"], "inv-8")

        assert repo.rows["a"].status == TimeEntryStatus.UNBILLED

    @pytest.mark.asyncio
    async def test_summary(self, service):
        summary = await service.summary()

        assert summary.entry_count == 4
        assert summary.total_hours == 6.75
        assert summary.billable_hours == 5.5
        assert summary.unbilled_hours == 2.5

    def test_summarize_empty(self):
        summary = summarize([])
        assert summary.total_hours == 0
        assert summary.entry_count == 0


class TestTimeEntryRepository:
    def _client(self, rows):
        client = MagicMock()
        query = MagicMock()
        # every builder call returns the same query object
        for method in ("select", "eq", "order", "limit", "insert", "upsert", "update", "delete", "in_"):
            getattr(query, method).return_value = query
        query.execute.return_value = MagicMock(data=rows)
        client.table.return_value = query
        return client, query

    def _row(self, **overrides):
        row = {
            "id": "11111111-2222-3333-4444-555555555555",
            "description": "Lighting design",
            "hours": 0.05,
            "date": "2026-03-14",
            "billable": True,
            "status": "unbilled",
            "created_at": "2026-03-14T10:00:00+00:00",
        }
        row.update(overrides)
        return row

    @pytest.mark.asyncio
    async def test_create_inserts_json_payload(self):
        client, query = self._client([self._row()])
        repo = TimeEntryRepository(client)

        entry = await repo.create(TimeEntryCreate(description="Lighting design", hours=0.05, date=TODAY))

        client.table.assert_called_with("time_entries")
        payload = query.insert.call_args.args[0]
        assert payload["date"] == "2026-03-14"
        assert payload["hours"] == 0.05
        assert payload["billable"] is True
        assert payload["status"] == "unbilled"
        assert entry.date == TODAY

    @pytest.mark.asyncio
    async def test_create_without_returned_row_fails(self):
        client, _ = self._client([])

        with pytest.raises(ValueError):
            await TimeEntryRepository(client).create(
                TimeEntryCreate(description="x", hours=1, date=TODAY)
            )

    @pytest.mark.asyncio
    async def test_create_once_upserts_on_id(self):
        client, query = self._client([self._row()])
        row_id = "11111111-2222-3333-4444-555555555555"

        entry = await TimeEntryRepository(client).create_once(
            row_id, TimeEntryCreate(description="Lighting design", hours=0.05, date=TODAY)
        )

        payload = query.upsert.call_args.args[0]
        assert payload == {
            "id": row_id,
            "description": "Lighting design",
            "hours": 0.05,
            "date": "2026-03-14",
            "billable": True,
            "status": "unbilled",
        }
        assert query.upsert.call_args.kwargs == {"on_conflict": "id", "ignore_duplicates": True}
        assert entry.id == row_id

    @pytest.mark.asyncio
    async def test_create_once_returns_existing_row(self):
        client, query = self._client([])
        # duplicate ignored, then the lookup finds the earlier row
        query.execute.side_effect = [MagicMock(data=[]), MagicMock(data=[self._row()])]

        entry = await TimeEntryRepository(client).create_once(
            "11111111-2222-3333-4444-555555555555",
            TimeEntryCreate(description="Lighting design", hours=0.05, date=TODAY),
        )

        assert entry.description == "Lighting design"
        query.eq.assert_called_with("id", "11111111-2222-3333-4444-555555555555")

    @pytest.mark.asyncio
    async def test_find_recent_orders_by_date(self):
        client, query = self._client([self._row()])

        entries = await TimeEntryRepository(client).find_recent(limit=5)

        query.order.assert_called_with("date", desc=True)
        query.limit.assert_called_with(5)
        assert len(entries) == 1

    @pytest.mark.asyncio
    async def test_find_unbilled_filters(self):
        client, query = self._client([])

        await TimeEntryRepository(client).find_unbilled_for_company("acme")

        filters = [c.args for c in query.eq.call_args_list]
        assert ("company_id", "acme") in filters
        assert ("billable", True) in filters
        assert ("status", "unbilled") in filters

    @pytest.mark.asyncio
    async def test_mark_invoiced_updates_ids(self):
        client, query = self._client([self._row(status="invoiced", invoice_id="inv-1")])

        entries = await TimeEntryRepository(client).mark_invoiced(["a"], "inv-1")

        query.update.assert_called_with({"status": "invoiced", "invoice_id": "inv-1"})
        query.in_.assert_called_with("id", ["a"])
        assert entries[0].status == TimeEntryStatus.INVOICED

    @pytest.mark.asyncio
    async def test_mark_invoiced_with_no_ids_skips_query(self):
        client, query = self._client([])

        assert await TimeEntryRepository(client).mark_invoiced([], "inv-1") == []
        query.update.assert_not_called()

    def test_factory_uses_configured_table(self):
        client, _ = self._client([])
        factory = RepositoryFactory(client, time_entries_table="work_log")

        assert factory.time_entries is factory.time_entries
        assert factory.time_entries._table_name == "work_log"
