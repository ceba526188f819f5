"""EmailScheduler loop: repeated passes, prompt stop, error containment."""

import asyncio
import logging

import pytest

from diary.infrastructure.background.email_scheduler import EmailScheduler


def test_interval_must_be_positive() -> None:
    async def dispatch() -> bool:
        return False

    with pytest.raises(ValueError):
        EmailScheduler(dispatch, 0)


async def test_runs_passes_until_stopped() -> None:
    calls = 0

    async def dispatch() -> bool:
        nonlocal calls
        calls += 1
        return False

    scheduler = EmailScheduler(dispatch, interval_seconds=0.01)
    scheduler.start()
    assert scheduler.running
    await asyncio.sleep(0.1)
    await scheduler.stop()

    assert not scheduler.running
    assert calls >= 2


async def test_stop_interrupts_long_delay() -> None:
    async def dispatch() -> bool:
        return False

    scheduler = EmailScheduler(dispatch, interval_seconds=3600)
    scheduler.start()
    await asyncio.sleep(0.01)
    await asyncio.wait_for(scheduler.stop(), timeout=1.0)
    assert not scheduler.running


async def test_pass_errors_are_logged_and_loop_continues(caplog: pytest.LogCaptureFixture) -> None:
    calls = 0

    async def dispatch() -> bool:
        nonlocal calls
        calls += 1
        raise RuntimeError("boom")

    scheduler = EmailScheduler(dispatch, interval_seconds=0.01)
    with caplog.at_level(logging.ERROR):
        scheduler.start()
        await asyncio.sleep(0.1)
        await scheduler.stop()

    assert calls >= 2
    assert "Scheduled email pass failed" in caplog.text


async def test_passes_never_overlap() -> None:
    active = 0
    max_active = 0
    calls = 0

    async def dispatch() -> bool:
        nonlocal active, max_active, calls
        active += 1
        calls += 1
        max_active = max(max_active, active)
        await asyncio.sleep(0.03)
        active -= 1
        return True

    scheduler = EmailScheduler(dispatch, interval_seconds=0.001)
    scheduler.start()
    await asyncio.sleep(0.15)
    await scheduler.stop()

    assert calls >= 2
    assert max_active == 1


async def test_stop_waits_for_running_pass() -> None:
    finished = asyncio.Event()

    async def dispatch() -> bool:
        await asyncio.sleep(0.05)
        finished.set()
        return False

    scheduler = EmailScheduler(dispatch, interval_seconds=60)
    scheduler.start()
    await asyncio.sleep(0.01)
    await scheduler.stop()
    assert finished.is_set()


async def test_run_once_reports_dispatch_result() -> None:
    async def dispatch() -> bool:
        return True

    assert await EmailScheduler(dispatch, 1).run_once() is True


async def test_start_is_idempotent() -> None:
    async def dispatch() -> bool:
        return False

    scheduler = EmailScheduler(dispatch, interval_seconds=60)
    scheduler.start()
    task = scheduler._task
    scheduler.start()
    assert scheduler._task is task
    await scheduler.stop()
