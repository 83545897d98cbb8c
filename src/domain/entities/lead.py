"""
Lead Entity

Sales lead with its interaction history.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utcnow

FOLLOW_UP_STAGE = "Pendiente Seguimiento"
FOLLOW_UP_TITLE = "Seguimiento programado"
FOLLOW_UP_INTERACTION_TYPE = "other"


class Lead(SQLModel, table=True):
    """
    Lead entity.

    interaction_history items are plain dicts:
    {"type": str, "title": str, "description": str, "date": ISO-8601 str}

    A lead in FOLLOW_UP_STAGE with an interaction of FOLLOW_UP_INTERACTION_TYPE
    titled FOLLOW_UP_TITLE dated today has a follow-up due today.
    """

    __tablename__ = "leads"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    first_name: str = Field(max_length=100)
    last_name: str = Field(default="", max_length=100)
    company: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)

    current_stage: str = Field(default="Nuevo", max_length=100)
    assigned_to: Optional[UUID] = Field(default=None, index=True)
    interaction_history: List[dict] = Field(default_factory=list, sa_column=Column(JSON))
    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_lead_stage", "current_stage"),)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
