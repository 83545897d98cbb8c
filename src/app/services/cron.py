"""
Cron abstractions

Triggers compute fire times; a CronScheduler runs named tasks on them.
"""

import math
from abc import ABC, abstractmethod
from datetime import UTC, datetime, timedelta
from typing import Any, Awaitable, Callable, Dict, List
from zoneinfo import ZoneInfo

CronTask = Callable[[], Awaitable[Any]]


class Trigger(ABC):
    @abstractmethod
    def next_fire_time(self, now: datetime) -> datetime:
        """First fire time strictly after `now` (aware datetimes)"""
        pass

    @abstractmethod
    def describe(self) -> str:
        pass


class IntervalTrigger(Trigger):
    """
    Fires every `seconds`, aligned to the wall clock.

    A 5 minute interval fires at :00, :05, :10 ... regardless of when it was
    scheduled.
    """

    def __init__(self, seconds: int):
        if seconds <= 0:
            raise ValueError("Interval must be positive")
        self.seconds = seconds

    @classmethod
    def minutes(cls, value: int) -> "IntervalTrigger":
        return cls(value * 60)

    @classmethod
    def hours(cls, value: int) -> "IntervalTrigger":
        return cls(value * 3600)

    def next_fire_time(self, now: datetime) -> datetime:
        slot = math.floor(now.timestamp() / self.seconds) + 1
        return datetime.fromtimestamp(slot * self.seconds, tz=now.tzinfo or UTC)

    def describe(self) -> str:
        return f"every {self.seconds}s"


class DailyTrigger(Trigger):
    """Fires once a day at hour:minute in the given time zone"""

    def __init__(self, hour: int, minute: int = 0, tz: str = "UTC"):
        if not 0 <= hour < 24 or not 0 <= minute < 60:
            raise ValueError("Invalid time of day")
        self.hour = hour
        self.minute = minute
        self.tz = ZoneInfo(tz)

    def next_fire_time(self, now: datetime) -> datetime:
        local = now.astimezone(self.tz)
        day = local.date()
        candidate = datetime(day.year, day.month, day.day, self.hour, self.minute, tzinfo=self.tz)
        if candidate <= local:
            day = day + timedelta(days=1)
            candidate = datetime(
                day.year, day.month, day.day, self.hour, self.minute, tzinfo=self.tz
            )
        return candidate.astimezone(now.tzinfo or UTC)

    def describe(self) -> str:
        return f"daily at {self.hour:02d}:{self.minute:02d} {self.tz.key}"


class CronScheduler(ABC):
    """
    Runs named async tasks on triggers.

    Business Rules:
    - One registration per name; scheduling an existing name replaces it
    - Successive firings of one job may overlap
    - Cancelling stops future firings, in-flight runs finish
    - A failing run is logged and never unschedules the job
    """

    @abstractmethod
    def schedule(self, name: str, trigger: Trigger, task: CronTask) -> None:
        pass

    @abstractmethod
    def cancel(self, name: str) -> bool:
        """Stop a job. Returns False when no job has that name."""
        pass

    @abstractmethod
    def cancel_all(self) -> None:
        pass

    @abstractmethod
    def status(self) -> List[Dict[str, Any]]:
        """One entry per job: name, trigger, running, next_run, last_run"""
        pass

    @abstractmethod
    async def run_now(self, name: str) -> bool:
        """Run a job immediately, outside its trigger. False for unknown names."""
        pass
