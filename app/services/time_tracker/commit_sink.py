"""Delivery of finished timer sessions to the time entries table"""
import asyncio
import logging
import uuid
from typing import Protocol

import httpx
import tenacity

from app.infra.supabase.repositories.time_entries import TimeEntryRepository
from app.models.time_entry import TimeEntry, TimeEntryCreate

from .errors import CommitFailedError

logger = logging.getLogger(__name__)

# Failures worth another attempt; anything else is raised straight away
TRANSIENT_ERRORS = (
    httpx.TransportError,
    ConnectionError,
    TimeoutError,
    asyncio.TimeoutError,
)


class CommitSink(Protocol):
    async def commit(self, entry: TimeEntryCreate) -> None: ...


class SupabaseCommitSink:
    """
    Appends one row per committed session.

    Each insert attempt is bounded by timeout_seconds. Transport failures are
    retried with exponential backoff up to max_attempts in total; every
    attempt reuses one row id, so an insert whose response was lost is not
    written twice. The last failure is raised as CommitFailedError.
    """

    def __init__(
        self,
        repository: TimeEntryRepository,
        timeout_seconds: float = 10.0,
        max_attempts: int = 3,
        backoff_initial_seconds: float = 0.5,
        backoff_max_seconds: float = 4.0,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._repository = repository
        self._timeout = timeout_seconds
        self._retrying = tenacity.AsyncRetrying(
            retry=tenacity.retry_if_exception_type(TRANSIENT_ERRORS),
            wait=tenacity.wait_exponential(multiplier=backoff_initial_seconds, max=backoff_max_seconds),
            stop=tenacity.stop_after_attempt(max_attempts),
            before_sleep=tenacity.before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

    async def _insert(self, entry_id: str, entry: TimeEntryCreate) -> TimeEntry:
        return await asyncio.wait_for(
            self._repository.create_once(entry_id, entry),
            timeout=self._timeout,
        )

    async def commit(self, entry: TimeEntryCreate) -> None:
        entry_id = str(uuid.uuid4())
        try:
            created = await self._retrying(self._insert, entry_id, entry)
        except asyncio.TimeoutError as e:
            logger.error(f"Time entry insert timed out after {self._timeout}s")
            raise CommitFailedError("time entry service did not respond in time") from e
        except Exception as e:
            logger.error(f"Failed to save time entry: {e}")
            raise CommitFailedError(f"failed to save time entry: {e}") from e

        logger.info(f"Time entry {created.id} saved: {entry.hours}h on {entry.date}")
