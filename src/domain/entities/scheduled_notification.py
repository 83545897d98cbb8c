"""
ScheduledNotification Entity

Persisted intent to deliver a notification at or after a future timestamp.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utcnow

from .enums import (
    NotificationEntityType,
    NotificationFrequency,
    NotificationPriority,
    NotificationType,
)


class ScheduledNotification(SQLModel, table=True):
    """
    ScheduledNotification entity - a pending or fired notification intent.

    Business Rules:
    - Pending until scheduled_for <= now, then dispatched exactly once
    - executed=True implies executed_at is set
    - Recurring records spawn a successor record, they are never re-armed
    - next_execution is only set for recurring records
    - Executed or deactivated records are purged after the retention window
    """

    __tablename__ = "scheduled_notifications"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    title: str = Field(max_length=255)
    message: str
    type: NotificationType
    priority: NotificationPriority = Field(default=NotificationPriority.medium)

    entity_type: Optional[NotificationEntityType] = Field(default=None)
    entity_id: Optional[str] = Field(default=None, max_length=64)

    employee_id: UUID = Field(index=True)

    scheduled_for: datetime = Field(sa_column=Column(DateTime, nullable=False))
    executed: bool = Field(default=False)
    executed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    frequency: NotificationFrequency = Field(default=NotificationFrequency.once)
    next_execution: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    notification_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_scheduled_due", "scheduled_for", "executed", "is_active"),
        Index("idx_scheduled_employee_executed", "employee_id", "executed"),
        Index("idx_scheduled_entity", "entity_type", "entity_id"),
        Index("idx_scheduled_next_execution", "next_execution", "is_active"),
    )

    @property
    def is_recurring(self) -> bool:
        return self.frequency != NotificationFrequency.once
