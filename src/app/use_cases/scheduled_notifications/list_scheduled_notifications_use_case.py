from typing import Any, Dict, Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.pagination import paginated, validate_page
from src.domain.entities import NotificationType


class ListScheduledNotificationsUseCase:
    """Active scheduled notifications, newest scheduled_for first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        executed: Optional[bool] = None,
        notification_type: Optional[NotificationType] = None,
        employee_id: Optional[UUID] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Result[Dict[str, Any]]:
        error = validate_page(page, limit)
        if error:
            return Return.err(error)

        async with self.uow:
            items, total = await self.uow.scheduled_notifications.list_paginated(
                executed=executed,
                notification_type=notification_type,
                employee_id=employee_id,
                page=page,
                limit=limit,
            )

        return Return.ok(paginated(items, total, page, limit))
