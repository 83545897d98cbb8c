"""
Execute Scheduled Notifications Use Case

Dispatch sweep: turns every due scheduled notification into a live
Notification.
"""

import logging
from datetime import datetime
from typing import Optional, Tuple
from uuid import UUID

from libs.result import Result, Return
from src.app.services.audit_hooks import AuditIntent, SCHEDULED_NOTIFICATION_HOOKS
from src.app.services.audit_recorder import SYSTEM_ACTOR, AuditRecorder, AuditWriteError
from src.app.services.recurrence import calculate_next_execution
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Notification, ScheduledNotification

logger = logging.getLogger(__name__)

AUDIT_MODULE = "notificaciones"


class ExecuteScheduledNotificationsUseCase:
    """
    Deliver due scheduled notifications.

    Business Rules:
    - Due = active, not executed, scheduled_for <= now
    - Each record is dispatched in its own transaction: live Notification,
      executed/executed_at, and the successor of a recurring record commit together
    - A failing record is rolled back and stays pending for the next sweep
    - A record is re-read before dispatch, so one already executed by an
      overlapping sweep is skipped
    - Every dispatch is audited as the system actor; audit failures are logged only
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, now: Optional[datetime] = None) -> Result[int]:
        now = now or utcnow()

        async with self.uow:
            due_ids = await self.uow.scheduled_notifications.get_due_ids(now)

        logger.info(f"Found {len(due_ids)} scheduled notifications to execute")

        executed = 0
        for scheduled_id in due_ids:
            try:
                dispatched = await self._dispatch(scheduled_id, now)
            except Exception:
                logger.exception(f"Failed to execute scheduled notification {scheduled_id}")
                continue

            if dispatched is None:
                continue

            executed += 1
            scheduled, intent = dispatched
            if intent is not None:
                await self._audit(scheduled, intent)

        logger.info(f"Executed {executed} scheduled notifications")
        return Return.ok(executed)

    async def _dispatch(
        self, scheduled_id: UUID, now: datetime
    ) -> Optional[Tuple[ScheduledNotification, Optional[AuditIntent]]]:
        async with self.uow:
            scheduled = await self.uow.scheduled_notifications.get_by_id(scheduled_id)
            if scheduled is None or scheduled.executed or not scheduled.is_active:
                return None

            before = SCHEDULED_NOTIFICATION_HOOKS.snapshot(scheduled)

            await self.uow.notifications.create(
                Notification(
                    title=scheduled.title,
                    message=scheduled.message,
                    type=scheduled.type,
                    priority=scheduled.priority,
                    entity_type=scheduled.entity_type,
                    entity_id=scheduled.entity_id,
                    employee_id=scheduled.employee_id,
                    notification_metadata={
                        **(scheduled.notification_metadata or {}),
                        "is_scheduled_notification": True,
                        "original_scheduled_for": scheduled.scheduled_for.isoformat(),
                        "scheduled_notification_id": str(scheduled.id),
                    },
                )
            )

            scheduled.executed = True
            scheduled.executed_at = now
            scheduled.updated_at = now
            scheduled = await self.uow.scheduled_notifications.update(scheduled)

            if scheduled.is_recurring:
                next_at = calculate_next_execution(scheduled.scheduled_for, scheduled.frequency)
                await self.uow.scheduled_notifications.create(
                    ScheduledNotification(
                        title=scheduled.title,
                        message=scheduled.message,
                        type=scheduled.type,
                        priority=scheduled.priority,
                        entity_type=scheduled.entity_type,
                        entity_id=scheduled.entity_id,
                        employee_id=scheduled.employee_id,
                        scheduled_for=next_at,
                        frequency=scheduled.frequency,
                        next_execution=next_at,
                        notification_metadata=(
                            dict(scheduled.notification_metadata)
                            if scheduled.notification_metadata
                            else None
                        ),
                    )
                )

            await self.uow.commit()

        logger.info(f"Executed scheduled notification: {scheduled.title}")
        return scheduled, SCHEDULED_NOTIFICATION_HOOKS.update_intent(before, scheduled)

    async def _audit(self, scheduled: ScheduledNotification, intent: AuditIntent) -> None:
        async with self.uow:
            try:
                await AuditRecorder(self.uow).record_intent(
                    SYSTEM_ACTOR, intent, scheduled.id, module=AUDIT_MODULE
                )
            except AuditWriteError:
                logger.warning(f"Dispatch of {scheduled.id} not audited")
