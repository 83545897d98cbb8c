"""
Cancel Scheduled Notification Use Case

Deactivates a scheduled notification so it is never dispatched.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.audit_hooks import SCHEDULED_NOTIFICATION_HOOKS, update_with_audit
from src.app.services.audit_recorder import (
    Actor,
    AuditRecorder,
    AuditWriteError,
    audit_write_failed,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ScheduledNotification


class CancelScheduledNotificationUseCase:
    """
    Business Rules:
    - The record is kept (is_active=False) and purged later by cleanup
    - Already executed records cannot be cancelled
    - Cancellation is audited for the acting user (fail-open)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, scheduled_id: UUID, actor: Actor) -> Result[ScheduledNotification]:
        async with self.uow:
            scheduled = await self.uow.scheduled_notifications.get_by_id(scheduled_id)
            if scheduled is None:
                return Return.err(
                    Error("SCHEDULED_NOTIFICATION_NOT_FOUND", "Scheduled notification not found")
                )
            if scheduled.executed:
                return Return.err(
                    Error("ALREADY_EXECUTED", "Scheduled notification was already executed")
                )

            scheduled, intent = await update_with_audit(
                self.uow.scheduled_notifications,
                scheduled_id,
                {"is_active": False},
                SCHEDULED_NOTIFICATION_HOOKS,
            )
            await self.uow.commit()

            if intent is not None:
                try:
                    await AuditRecorder(self.uow).record_intent(actor, intent, scheduled.id)
                except AuditWriteError as exc:
                    return Return.err(audit_write_failed(exc))

        return Return.ok(scheduled)
