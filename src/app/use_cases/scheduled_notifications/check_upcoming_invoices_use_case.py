"""
Check Upcoming Invoices Use Case

Reminds invoice owners of invoices due within the next week.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Optional

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import (
    InvoiceStatus,
    NotificationEntityType,
    NotificationPriority,
    NotificationType,
)

from .dtos import ScheduleNotificationCommand

logger = logging.getLogger(__name__)

LOOKAHEAD_DAYS = 7
URGENT_DAYS = 3
REMINDED_STATUSES = (InvoiceStatus.draft, InvoiceStatus.sent)


class CheckUpcomingInvoicesUseCase:
    """
    Producer for invoice due-date reminders.

    Business Rules:
    - Active draft/sent invoices with now <= due_date <= now + 7 days
    - Sent to the invoice creator; invoices without one are skipped
    - High priority when due within 3 days, medium otherwise
    - At most one pending reminder per invoice per UTC day
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, now: Optional[datetime] = None) -> Result[int]:
        now = now or utcnow()
        day_start = now.replace(hour=0, minute=0, second=0, microsecond=0)

        created = 0
        async with self.uow:
            invoices = await self.uow.invoices.get_due_between(
                now, now + timedelta(days=LOOKAHEAD_DAYS), REMINDED_STATUSES
            )

            for invoice in invoices:
                if invoice.created_by is None:
                    continue

                existing = await self.uow.scheduled_notifications.get_pending_for_entity(
                    NotificationEntityType.invoice,
                    str(invoice.id),
                    NotificationType.invoice,
                    day_start,
                    day_start + timedelta(days=1),
                )
                if existing:
                    continue

                days_until_due = math.ceil((invoice.due_date - now).total_seconds() / 86400)
                plural = "" if days_until_due == 1 else "s"

                command = ScheduleNotificationCommand(
                    title="Factura Próxima a Vencer",
                    message=(
                        f"La factura #{invoice.number} vence en {days_until_due} día{plural} "
                        f"({invoice.due_date.strftime('%d/%m/%Y')})"
                    ),
                    type=NotificationType.invoice,
                    priority=(
                        NotificationPriority.high
                        if days_until_due <= URGENT_DAYS
                        else NotificationPriority.medium
                    ),
                    entity_type=NotificationEntityType.invoice,
                    entity_id=str(invoice.id),
                    employee_id=invoice.created_by,
                    scheduled_for=now,
                    metadata={
                        "invoice_id": str(invoice.id),
                        "invoice_number": invoice.number,
                        "due_date": invoice.due_date.isoformat(),
                        "amount": invoice.total,
                        "days_until_due": days_until_due,
                    },
                )
                await self.uow.scheduled_notifications.create(command.to_entity())
                created += 1

            await self.uow.commit()

        logger.info(f"Created {created} invoice notifications")
        return Return.ok(created)
