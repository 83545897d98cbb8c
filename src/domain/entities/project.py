"""
Project Entity

Client project tracked by the projects module.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utcnow

from .enums import NotificationPriority, ProjectStatus


class Project(SQLModel, table=True):
    """
    Project entity - audited on create, update and delete.

    Business Rules:
    - progress is a percentage (0-100)
    - budget cannot be negative
    - status transitions, progress and date changes produce specific audit actions
    """

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    description: str = ""
    client_id: Optional[UUID] = Field(default=None, index=True)

    status: ProjectStatus = Field(default=ProjectStatus.in_progress)
    priority: NotificationPriority = Field(default=NotificationPriority.medium)

    start_date: datetime = Field(sa_column=Column(DateTime, nullable=False))
    end_date: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    progress: int = Field(default=0, ge=0, le=100)
    budget: float = Field(default=0, ge=0)
    team: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    notes: str = ""

    manager_id: Optional[UUID] = None
    created_by: Optional[UUID] = None
    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_project_status", "status"),)
