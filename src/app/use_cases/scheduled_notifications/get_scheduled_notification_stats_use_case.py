from datetime import timedelta

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

from .dtos import ScheduledNotificationStats


class GetScheduledNotificationStatsUseCase:
    """
    Scheduler health figures.

    - pending: due but not executed yet
    - failed: still pending more than 24 hours after its scheduled time
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[ScheduledNotificationStats]:
        now = utcnow()
        day_start = now.replace(hour=0, minute=0, second=0, microsecond=0)

        async with self.uow:
            repo = self.uow.scheduled_notifications
            stats = ScheduledNotificationStats(
                scheduled=await repo.count_active(),
                pending=await repo.count_pending(now),
                executed_today=await repo.count_executed_since(day_start),
                failed=await repo.count_pending(now - timedelta(hours=24)),
                by_type=await repo.count_active_by("type"),
                by_priority=await repo.count_active_by("priority"),
            )

        return Return.ok(stats)
