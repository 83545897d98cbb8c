"""
AuditEvent Entity

Immutable log of every audited action in the backoffice.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utcnow


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - immutable record of one audited action.

    Business Rules:
    - Append-only (never updated)
    - Deleted only by the retention or archive sweeps
    - previous_data/new_data are sanitized snapshots (no secrets)
    - action and target_type hold AuditAction/AuditTargetType values verbatim
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    actor_id: UUID = Field(index=True)
    actor_name: str = Field(max_length=255)

    action: str = Field(max_length=50)
    description: str

    target_type: str = Field(max_length=50)
    target_id: UUID

    previous_data: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    new_data: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    module: str = Field(max_length=100)
    ip: str = Field(default="0.0.0.0", max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    # Timestamps
    timestamp: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_timestamp", "timestamp"),
        Index("idx_audit_actor_timestamp", "actor_id", "timestamp"),
        Index("idx_audit_action_timestamp", "action", "timestamp"),
        Index("idx_audit_module_timestamp", "module", "timestamp"),
        Index("idx_audit_target", "target_type", "target_id", "timestamp"),
    )
