"""
Create Notifications Use Case

Delivers one live notification to each recipient.
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    Notification,
    NotificationEntityType,
    NotificationPriority,
    NotificationType,
)

logger = logging.getLogger(__name__)


class CreateNotificationsCommand(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    message: str = Field(min_length=1)
    type: NotificationType
    priority: NotificationPriority = NotificationPriority.medium
    entity_type: Optional[NotificationEntityType] = None
    entity_id: Optional[str] = Field(default=None, max_length=64)
    employee_ids: List[UUID]
    metadata: Optional[Dict[str, Any]] = None


class CreateNotificationsUseCase:
    """
    Business Rules:
    - At least one recipient; duplicates receive a single notification
    - All notifications are committed together
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, command: CreateNotificationsCommand, sender_id: Optional[UUID] = None
    ) -> Result[List[Notification]]:
        recipients = list(dict.fromkeys(command.employee_ids))
        if not recipients:
            return Return.err(Error("VALIDATION_ERROR", "At least one recipient is required"))

        async with self.uow:
            created = []
            for employee_id in recipients:
                notification = Notification(
                    title=command.title,
                    message=command.message,
                    type=command.type,
                    priority=command.priority,
                    entity_type=command.entity_type,
                    entity_id=command.entity_id,
                    employee_id=employee_id,
                    sender_id=sender_id,
                    notification_metadata=command.metadata,
                )
                created.append(await self.uow.notifications.create(notification))
            await self.uow.commit()

        logger.info(f"Created {len(created)} notifications: {command.title}")
        return Return.ok(created)
