"""
Task Entity

Work item assigned to an employee with a due date.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import NotificationPriority, TaskStatus


class Task(SQLModel, table=True):
    """
    Task entity - audited, and scanned by the overdue/due-soon producers.

    Business Rules:
    - A task is overdue when due_date < now and status != completed
    - Only active tasks with an assignee produce notifications
    """

    __tablename__ = "tasks"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=255)
    description: str = ""

    assigned_to: Optional[UUID] = Field(default=None, index=True)
    status: TaskStatus = Field(default=TaskStatus.pending)
    priority: NotificationPriority = Field(default=NotificationPriority.medium)

    due_date: datetime = Field(sa_column=Column(DateTime, nullable=False))
    completed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    notes: str = ""

    created_by: Optional[UUID] = None
    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_task_due_status", "due_date", "status", "is_active"),)
