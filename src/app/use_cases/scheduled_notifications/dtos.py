"""
Scheduled Notification Use Case DTOs

Commands and responses of the scheduled-notification domain.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.base import to_naive_utc
from src.domain.entities import (
    NotificationEntityType,
    NotificationFrequency,
    NotificationPriority,
    NotificationType,
    ScheduledNotification,
)


# ============================================================================
# Command DTOs
# ============================================================================


class ScheduleNotificationCommand(BaseModel):
    """Request to deliver a notification at scheduled_for"""

    title: str = Field(min_length=1, max_length=255)
    message: str = Field(min_length=1)
    type: NotificationType
    priority: NotificationPriority = NotificationPriority.medium
    entity_type: Optional[NotificationEntityType] = None
    entity_id: Optional[str] = Field(default=None, max_length=64)
    employee_id: UUID
    scheduled_for: datetime
    frequency: NotificationFrequency = NotificationFrequency.once
    metadata: Optional[Dict[str, Any]] = None

    def to_entity(self) -> ScheduledNotification:
        scheduled_for = to_naive_utc(self.scheduled_for)
        return ScheduledNotification(
            title=self.title,
            message=self.message,
            type=self.type,
            priority=self.priority,
            entity_type=self.entity_type,
            entity_id=self.entity_id,
            employee_id=self.employee_id,
            scheduled_for=scheduled_for,
            frequency=self.frequency,
            # Recurring records fire next at their own scheduled_for
            next_execution=(
                scheduled_for if self.frequency != NotificationFrequency.once else None
            ),
            notification_metadata=self.metadata,
        )


# ============================================================================
# Response DTOs
# ============================================================================


class CheckResults(BaseModel):
    """Counts produced by one run of every notification check"""

    executed: int = 0
    follow_ups: int = 0
    tasks: int = 0
    invoices: int = 0
    cleanup: int = 0


class ScheduledNotificationStats(BaseModel):
    scheduled: int
    pending: int
    executed_today: int
    failed: int
    by_type: Dict[str, int]
    by_priority: Dict[str, int]
