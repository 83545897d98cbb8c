from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import NotificationType


class GetUnreadCountUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, employee_id: UUID, notification_type: Optional[NotificationType] = None
    ) -> Result[int]:
        async with self.uow:
            count = await self.uow.notifications.count_unread(employee_id, notification_type)
        return Return.ok(count)
