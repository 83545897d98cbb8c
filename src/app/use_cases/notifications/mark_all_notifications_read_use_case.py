from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import NotificationType


class MarkAllNotificationsReadUseCase:
    """Bulk read-state update of one employee's notifications. Returns count updated."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, employee_id: UUID, notification_type: Optional[NotificationType] = None
    ) -> Result[int]:
        async with self.uow:
            updated = await self.uow.notifications.mark_all_read(employee_id, notification_type)
            await self.uow.commit()
        return Return.ok(updated)
