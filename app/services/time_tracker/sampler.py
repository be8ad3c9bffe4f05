"""Periodic clock sampling for a running timer"""
import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ClockSampler:
    """
    Calls on_tick once per interval on the running event loop until stopped.

    Only one sampling task exists at a time. stop() cancels it and detaches
    it immediately, so no tick can run after stop() returns.
    """

    def __init__(self, on_tick: Callable[[], None], interval_seconds: float = 1.0):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._on_tick = on_tick
        self._interval = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def is_active(self) -> bool:
        return self._task is not None

    def start(self) -> None:
        """Begin sampling; a no-op when already sampling"""
        if self._task is not None:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    def stop(self) -> None:
        """Cancel sampling; a no-op when not sampling"""
        task, self._task = self._task, None
        if task is not None:
            task.cancel()

    async def _run(self) -> None:
        current = asyncio.current_task()
        while True:
            await asyncio.sleep(self._interval)
            # stop() may have detached this task while it slept
            if self._task is not current:
                return
            try:
                self._on_tick()
            except Exception as e:
                logger.error(f"Timer sample failed: {e}", exc_info=True)
