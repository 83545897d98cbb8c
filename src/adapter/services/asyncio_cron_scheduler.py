import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Callable, Dict, List, Optional, Set

from src.app.services.cron import CronScheduler, CronTask, Trigger

logger = logging.getLogger(__name__)


@dataclass
class _Job:
    name: str
    trigger: Trigger
    task: CronTask
    loop: Optional[asyncio.Task] = None
    next_run: Optional[datetime] = None
    last_run: Optional[datetime] = None
    in_flight: int = 0
    runs: Set[asyncio.Task] = field(default_factory=set)


class AsyncioCronScheduler(CronScheduler):
    """
    CronScheduler on the running asyncio event loop.

    Each job owns one loop task that sleeps until the trigger's next fire time
    and spawns the run as a separate task, so a slow run never delays the next
    firing.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._jobs: Dict[str, _Job] = {}
        self._clock = clock or (lambda: datetime.now(UTC))

    def schedule(self, name: str, trigger: Trigger, task: CronTask) -> None:
        if self.cancel(name):
            logger.info(f"Replacing cron job {name}")

        job = _Job(name=name, trigger=trigger, task=task)
        job.loop = asyncio.get_running_loop().create_task(self._loop(job), name=f"cron:{name}")
        self._jobs[name] = job
        logger.info(f"Cron job {name} scheduled ({trigger.describe()})")

    def cancel(self, name: str) -> bool:
        job = self._jobs.pop(name, None)
        if job is None:
            return False
        if job.loop is not None:
            job.loop.cancel()
        logger.info(f"Cron job {name} cancelled")
        return True

    def cancel_all(self) -> None:
        for name in list(self._jobs):
            self.cancel(name)

    def status(self) -> List[Dict[str, Any]]:
        return [
            {
                "name": job.name,
                "trigger": job.trigger.describe(),
                "running": job.loop is not None and not job.loop.done(),
                "in_flight": job.in_flight,
                "next_run": job.next_run.isoformat() if job.next_run else None,
                "last_run": job.last_run.isoformat() if job.last_run else None,
            }
            for job in self._jobs.values()
        ]

    async def run_now(self, name: str) -> bool:
        job = self._jobs.get(name)
        if job is None:
            return False
        await self._run(job)
        return True

    async def _loop(self, job: _Job) -> None:
        while True:
            job.next_run = job.trigger.next_fire_time(self._clock())
            delay = (job.next_run - self._clock()).total_seconds()
            await asyncio.sleep(max(delay, 0))

            run = asyncio.create_task(self._run(job), name=f"cron-run:{job.name}")
            job.runs.add(run)
            run.add_done_callback(job.runs.discard)

    async def _run(self, job: _Job) -> None:
        job.in_flight += 1
        job.last_run = self._clock()
        started = time.monotonic()
        try:
            await job.task()
            logger.info(f"Cron job {job.name} finished in {time.monotonic() - started:.2f}s")
        except Exception:
            logger.exception(
                f"Cron job {job.name} failed after {time.monotonic() - started:.2f}s"
            )
        finally:
            job.in_flight -= 1
