"""
Transaction Entity

Finance module ledger movement.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow

from .enums import TransactionType


class Transaction(SQLModel, table=True):
    """Transaction entity - amount changes produce a value-update audit action."""

    __tablename__ = "transactions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    type: TransactionType
    amount: float = Field(gt=0)
    description: str = ""
    category: Optional[str] = Field(default=None, max_length=100)
    date: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    account_id: Optional[UUID] = None
    invoice_id: Optional[UUID] = Field(default=None, index=True)
    created_by: Optional[UUID] = None

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
