"""
Check Overdue Tasks Use Case

Schedules reminders for overdue tasks and tasks due within 24 hours.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import (
    NotificationEntityType,
    NotificationPriority,
    NotificationType,
    Task,
)

from .dtos import ScheduleNotificationCommand

logger = logging.getLogger(__name__)

OVERDUE_FLAG = "is_overdue"
DUE_SOON_FLAG = "is_due_soon"


class CheckOverdueTasksUseCase:
    """
    Producer for task reminders.

    Business Rules:
    - Overdue: due_date < now, not completed, active, assigned -> high priority
    - Due soon: now <= due_date < now + 24h -> medium priority
    - At most one pending reminder per task per UTC day and per kind;
      the kinds are told apart by their metadata flag
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, now: Optional[datetime] = None) -> Result[int]:
        now = now or utcnow()
        day_start = now.replace(hour=0, minute=0, second=0, microsecond=0)

        created = 0
        async with self.uow:
            for task in await self.uow.tasks.get_overdue(now):
                if await self._already_pending(task, OVERDUE_FLAG, day_start):
                    continue
                await self._schedule(
                    task,
                    now,
                    title="Tarea Vencida",
                    message=(
                        f'La tarea "{task.title}" está vencida desde '
                        f"{task.due_date.strftime('%d/%m/%Y')}"
                    ),
                    priority=NotificationPriority.high,
                    flag=OVERDUE_FLAG,
                )
                created += 1

            for task in await self.uow.tasks.get_due_between(now, now + timedelta(days=1)):
                if await self._already_pending(task, DUE_SOON_FLAG, day_start):
                    continue
                await self._schedule(
                    task,
                    now,
                    title="Tarea Próxima a Vencer",
                    message=(
                        f'La tarea "{task.title}" vence pronto '
                        f"({task.due_date.strftime('%d/%m/%Y %H:%M')})"
                    ),
                    priority=NotificationPriority.medium,
                    flag=DUE_SOON_FLAG,
                )
                created += 1

            await self.uow.commit()

        logger.info(f"Created {created} task notifications")
        return Return.ok(created)

    async def _already_pending(self, task: Task, flag: str, day_start: datetime) -> bool:
        pending = await self.uow.scheduled_notifications.get_pending_for_entity(
            NotificationEntityType.task,
            str(task.id),
            NotificationType.task,
            day_start,
            day_start + timedelta(days=1),
        )
        return any((record.notification_metadata or {}).get(flag) for record in pending)

    async def _schedule(
        self,
        task: Task,
        now: datetime,
        title: str,
        message: str,
        priority: NotificationPriority,
        flag: str,
    ) -> None:
        command = ScheduleNotificationCommand(
            title=title,
            message=message,
            type=NotificationType.task,
            priority=priority,
            entity_type=NotificationEntityType.task,
            entity_id=str(task.id),
            employee_id=task.assigned_to,
            scheduled_for=now,
            metadata={
                "task_id": str(task.id),
                "task_title": task.title,
                "due_date": task.due_date.isoformat(),
                flag: True,
            },
        )
        await self.uow.scheduled_notifications.create(command.to_entity())
