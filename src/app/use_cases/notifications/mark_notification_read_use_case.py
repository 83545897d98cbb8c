"""
Mark Notification Read Use Case
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.audit_hooks import NOTIFICATION_HOOKS, update_with_audit
from src.app.services.audit_recorder import (
    Actor,
    AuditRecorder,
    AuditWriteError,
    audit_write_failed,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Notification


class MarkNotificationReadUseCase:
    """
    Business Rules:
    - Only the recipient can mark a notification as read
    - Marking an already read notification is a no-op (no audit event)
    - The read-state change is audited (fail-open)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, notification_id: UUID, actor: Actor) -> Result[Notification]:
        async with self.uow:
            notification = await self.uow.notifications.get_by_id(notification_id)
            if notification is None or notification.employee_id != actor.id:
                return Return.err(
                    Error("NOTIFICATION_NOT_FOUND", "Notification not found")
                )
            if notification.is_read:
                return Return.ok(notification)

            notification, intent = await update_with_audit(
                self.uow.notifications,
                notification_id,
                {"is_read": True, "read_at": utcnow()},
                NOTIFICATION_HOOKS,
            )
            await self.uow.commit()

            if intent is not None:
                try:
                    await AuditRecorder(self.uow).record_intent(actor, intent, notification.id)
                except AuditWriteError as exc:
                    return Return.err(audit_write_failed(exc))

        return Return.ok(notification)
