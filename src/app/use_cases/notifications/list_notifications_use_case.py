from typing import Any, Dict, Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.pagination import paginated, validate_page
from src.domain.entities import NotificationPriority, NotificationType


class ListNotificationsUseCase:
    """Notifications addressed to one employee, newest first, with unread count"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        employee_id: UUID,
        is_read: Optional[bool] = None,
        notification_type: Optional[NotificationType] = None,
        priority: Optional[NotificationPriority] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Result[Dict[str, Any]]:
        error = validate_page(page, limit)
        if error:
            return Return.err(error)

        async with self.uow:
            items, total = await self.uow.notifications.list_by_employee(
                employee_id,
                is_read=is_read,
                notification_type=notification_type,
                priority=priority,
                page=page,
                limit=limit,
            )
            unread = await self.uow.notifications.count_unread(employee_id)

        response = paginated(items, total, page, limit)
        response["unread_count"] = unread
        return Return.ok(response)
