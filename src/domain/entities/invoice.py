"""
Invoice Entity

Finance module invoice.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import InvoiceStatus


class Invoice(SQLModel, table=True):
    """
    Invoice entity - audited, and scanned by the invoice-due producer.

    Business Rules:
    - number is unique
    - Only draft/sent invoices are reminded before their due date
    - Status changes produce a state-update audit action
    """

    __tablename__ = "invoices"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    number: str = Field(unique=True, max_length=50)
    client_id: Optional[UUID] = Field(default=None, index=True)

    status: InvoiceStatus = Field(default=InvoiceStatus.draft)
    issue_date: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    due_date: datetime = Field(sa_column=Column(DateTime, nullable=False))

    subtotal: float = Field(default=0, ge=0)
    tax_rate: float = Field(default=0, ge=0)
    tax_amount: float = Field(default=0, ge=0)
    total: float = Field(default=0, ge=0)
    paid: float = Field(default=0, ge=0)
    balance: float = 0
    notes: str = ""

    created_by: Optional[UUID] = None
    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_invoice_due_status", "due_date", "status"),)
