import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from src.adapter.services.asyncio_cron_scheduler import AsyncioCronScheduler
from src.app.services.cron import DailyTrigger, IntervalTrigger, Trigger


class EveryTick(Trigger):
    """Fires `seconds` after each call, for fast scheduler tests"""

    def __init__(self, seconds: float = 0.01):
        self.seconds = seconds

    def next_fire_time(self, now: datetime) -> datetime:
        return now + timedelta(seconds=self.seconds)

    def describe(self) -> str:
        return "tick"


class Never(Trigger):
    def next_fire_time(self, now: datetime) -> datetime:
        return now + timedelta(days=365)

    def describe(self) -> str:
        return "never"


def test_interval_trigger_aligns_to_wall_clock():
    trigger = IntervalTrigger.minutes(5)
    now = datetime(2024, 5, 1, 10, 7, 30, tzinfo=UTC)

    assert trigger.next_fire_time(now) == datetime(2024, 5, 1, 10, 10, tzinfo=UTC)


def test_interval_trigger_on_boundary_moves_to_next_slot():
    trigger = IntervalTrigger.hours(2)
    now = datetime(2024, 5, 1, 10, 0, tzinfo=UTC)

    assert trigger.next_fire_time(now) == datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def test_interval_trigger_rejects_non_positive():
    with pytest.raises(ValueError):
        IntervalTrigger(0)


def test_daily_trigger_later_today():
    trigger = DailyTrigger(hour=2, minute=0)
    now = datetime(2024, 5, 1, 1, 59, tzinfo=UTC)

    assert trigger.next_fire_time(now) == datetime(2024, 5, 1, 2, 0, tzinfo=UTC)


def test_daily_trigger_tomorrow_when_time_passed():
    trigger = DailyTrigger(hour=2, minute=0)
    now = datetime(2024, 5, 1, 2, 0, tzinfo=UTC)

    assert trigger.next_fire_time(now) == datetime(2024, 5, 2, 2, 0, tzinfo=UTC)


def test_daily_trigger_in_time_zone():
    trigger = DailyTrigger(hour=2, minute=0, tz="America/Bogota")
    now = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

    # 02:00 in Bogota (UTC-5) is 07:00 UTC
    assert trigger.next_fire_time(now) == datetime(2024, 5, 2, 7, 0, tzinfo=UTC)


@pytest.mark.asyncio
async def test_scheduler_runs_job_repeatedly():
    scheduler = AsyncioCronScheduler()
    calls = []

    async def task():
        calls.append(1)

    scheduler.schedule("job", EveryTick(), task)
    await asyncio.sleep(0.1)
    scheduler.cancel_all()

    assert len(calls) >= 2


@pytest.mark.asyncio
async def test_failing_run_keeps_job_scheduled():
    scheduler = AsyncioCronScheduler()
    calls = []

    async def task():
        calls.append(1)
        raise RuntimeError("boom")

    scheduler.schedule("job", EveryTick(), task)
    await asyncio.sleep(0.1)

    assert len(calls) >= 2
    assert scheduler.status()[0]["running"] is True
    scheduler.cancel_all()


@pytest.mark.asyncio
async def test_reschedule_replaces_previous_job():
    scheduler = AsyncioCronScheduler()
    first, second = [], []

    async def first_task():
        first.append(1)

    async def second_task():
        second.append(1)

    scheduler.schedule("job", EveryTick(), first_task)
    scheduler.schedule("job", EveryTick(), second_task)
    await asyncio.sleep(0.1)
    scheduler.cancel_all()

    assert first == []
    assert len(second) >= 1
    assert len(scheduler.status()) == 0


@pytest.mark.asyncio
async def test_cancel_does_not_interrupt_in_flight_run():
    scheduler = AsyncioCronScheduler()
    finished = asyncio.Event()

    async def slow_task():
        await asyncio.sleep(0.05)
        finished.set()

    scheduler.schedule("slow", EveryTick(0.001), slow_task)
    await asyncio.sleep(0.01)
    assert scheduler.cancel("slow") is True

    await asyncio.wait_for(finished.wait(), timeout=1)
    assert scheduler.cancel("slow") is False


@pytest.mark.asyncio
async def test_run_now_and_status():
    scheduler = AsyncioCronScheduler()
    calls = []

    async def task():
        calls.append(1)

    scheduler.schedule("manual", Never(), task)

    assert await scheduler.run_now("manual") is True
    assert await scheduler.run_now("missing") is False
    assert calls == [1]

    status = scheduler.status()[0]
    assert status["name"] == "manual"
    assert status["trigger"] == "never"
    assert status["last_run"] is not None
    scheduler.cancel_all()
