"""
Notification Entity

Delivered, user-facing notification. One row per recipient.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utcnow

from .enums import NotificationEntityType, NotificationPriority, NotificationType


class Notification(SQLModel, table=True):
    """
    Notification entity - live notification addressed to one employee.

    Business Rules:
    - Created by the scheduled-notification dispatcher or by application code
    - Only mutation is the read state (is_read/read_at)
    """

    __tablename__ = "notifications"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    title: str = Field(max_length=255)
    message: str
    type: NotificationType
    priority: NotificationPriority = Field(default=NotificationPriority.medium)

    entity_type: Optional[NotificationEntityType] = Field(default=None)
    entity_id: Optional[str] = Field(default=None, max_length=64)

    employee_id: UUID
    sender_id: Optional[UUID] = Field(default=None)

    notification_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    is_read: bool = Field(default=False)
    read_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_notification_employee_created", "employee_id", "created_at"),
        Index("idx_notification_employee_read", "employee_id", "is_read"),
        Index("idx_notification_employee_type", "employee_id", "type"),
    )
