from datetime import timedelta
from typing import List
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import ScheduledNotification

MAX_UPCOMING = 20


class GetUpcomingNotificationsUseCase:
    """Pending notifications of one employee for the next `days` days, soonest first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, employee_id: UUID, days: int = 7) -> Result[List[ScheduledNotification]]:
        if days < 1:
            return Return.err(Error("VALIDATION_ERROR", "days must be 1 or greater"))

        now = utcnow()
        async with self.uow:
            items = await self.uow.scheduled_notifications.get_upcoming_for_employee(
                employee_id, now, now + timedelta(days=days), limit=MAX_UPCOMING
            )

        return Return.ok(items)
