"""Periodic scheduled-email dispatch.

One asyncio task runs dispatch passes with a fixed delay between them. A
pass is awaited to completion before the delay starts, so passes never
overlap. Missed passes are not caught up.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from diary.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class EmailScheduler:
    """Runs `dispatch` every `interval_seconds` until stopped.

    Args:
        dispatch: Coroutine function running one pass (e.g.
            EmailService.check_and_send_scheduled_emails).
        interval_seconds: Delay between the end of one pass and the start of the next.
    """

    def __init__(
        self,
        dispatch: Callable[[], Awaitable[bool]],
        interval_seconds: float,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._dispatch = dispatch
        self._interval = interval_seconds
        self._stop = asyncio.Event()
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> bool:
        """Run a single pass; errors are logged and reported as nothing sent."""
        try:
            return await self._dispatch()
        except Exception:
            logger.exception("Scheduled email pass failed")
            return False

    async def run(self) -> None:
        """Loop until stop() is called. Stop wakes the delay immediately."""
        logger.info("Email scheduler started (interval=%ss)", self._interval)
        while not self._stop.is_set():
            sent = await self.run_once()
            if sent:
                logger.info("Scheduled email pass sent at least one email")
            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self._interval)
            except TimeoutError:
                continue
        logger.info("Email scheduler stopped")

    def start(self) -> None:
        """Start the loop as a background task (idempotent)."""
        if self.running:
            return
        self._stop.clear()
        self._task = asyncio.create_task(self.run(), name="email-scheduler")

    async def stop(self) -> None:
        """Request stop and wait for the current pass to finish."""
        self._stop.set()
        task, self._task = self._task, None
        if task is not None:
            await task
