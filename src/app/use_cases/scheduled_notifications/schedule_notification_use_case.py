"""
Schedule Notification Use Case

Creates a pending scheduled notification on behalf of a user.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.audit_hooks import SCHEDULED_NOTIFICATION_HOOKS
from src.app.services.audit_recorder import (
    Actor,
    AuditRecorder,
    AuditWriteError,
    audit_write_failed,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import to_naive_utc, utcnow
from src.domain.entities import ScheduledNotification

from .dtos import ScheduleNotificationCommand

logger = logging.getLogger(__name__)


class ScheduleNotificationUseCase:
    """
    Use case for scheduling a custom notification.

    Business Rules:
    - scheduled_for must be in the future
    - Recurring records carry next_execution = scheduled_for
    - Creation is audited for the acting user (fail-open)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, command: ScheduleNotificationCommand, actor: Optional[Actor] = None
    ) -> Result[ScheduledNotification]:
        if to_naive_utc(command.scheduled_for) <= utcnow():
            return Return.err(
                Error(
                    "INVALID_SCHEDULE_DATE",
                    "Scheduled date must be in the future",
                )
            )

        async with self.uow:
            scheduled = await self.uow.scheduled_notifications.create(command.to_entity())
            await self.uow.commit()

            logger.info(f"Scheduled notification {scheduled.title} for {scheduled.scheduled_for}")

            if actor is not None:
                intent = SCHEDULED_NOTIFICATION_HOOKS.creation_intent(scheduled)
                try:
                    await AuditRecorder(self.uow).record_intent(actor, intent, scheduled.id)
                except AuditWriteError as exc:
                    return Return.err(audit_write_failed(exc))

        return Return.ok(scheduled)
