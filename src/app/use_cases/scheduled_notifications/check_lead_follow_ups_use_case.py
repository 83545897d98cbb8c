"""
Check Lead Follow-Ups Use Case

Schedules a reminder for every lead whose follow-up is due today.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import to_naive_utc, utcnow
from src.domain.entities import (
    Lead,
    NotificationEntityType,
    NotificationPriority,
    NotificationType,
)
from src.domain.entities.lead import (
    FOLLOW_UP_INTERACTION_TYPE,
    FOLLOW_UP_STAGE,
    FOLLOW_UP_TITLE,
)

from .dtos import ScheduleNotificationCommand

logger = logging.getLogger(__name__)


def _interaction_date(interaction: dict) -> Optional[datetime]:
    raw = interaction.get("date")
    if not raw:
        return None
    try:
        return to_naive_utc(datetime.fromisoformat(str(raw).replace("Z", "+00:00")))
    except ValueError:
        return None


def find_follow_up(lead: Lead, day_start: datetime, day_end: datetime) -> Optional[dict]:
    """The scheduled follow-up interaction of a lead dated within [day_start, day_end)"""
    for interaction in lead.interaction_history or []:
        if interaction.get("type") != FOLLOW_UP_INTERACTION_TYPE:
            continue
        if interaction.get("title") != FOLLOW_UP_TITLE:
            continue
        when = _interaction_date(interaction)
        if when is not None and day_start <= when < day_end:
            return interaction
    return None


class CheckLeadFollowUpsUseCase:
    """
    Producer for lead follow-up reminders.

    Business Rules:
    - Leads in the follow-up stage with an assignee and a follow-up dated today (UTC)
    - High priority, scheduled at the follow-up time
    - At most one pending reminder per lead per day
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, now: Optional[datetime] = None) -> Result[int]:
        now = now or utcnow()
        day_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        day_end = day_start + timedelta(days=1)

        created = 0
        async with self.uow:
            leads = await self.uow.leads.get_assigned_in_stage(FOLLOW_UP_STAGE)

            for lead in leads:
                follow_up = find_follow_up(lead, day_start, day_end)
                if follow_up is None:
                    continue

                existing = await self.uow.scheduled_notifications.get_pending_for_entity(
                    NotificationEntityType.lead,
                    str(lead.id),
                    NotificationType.lead,
                    day_start,
                    day_end,
                )
                if existing:
                    continue

                description = follow_up.get("description") or ""
                note = description.split(": ", 1)[1] if ": " in description else ""
                company = lead.company or "empresa no especificada"

                command = ScheduleNotificationCommand(
                    title="Seguimiento de Lead Programado",
                    message=(
                        f"Tienes un seguimiento programado para {lead.full_name} de {company}. "
                        f"Nota: {note or 'Sin detalles adicionales'}"
                    ),
                    type=NotificationType.lead,
                    priority=NotificationPriority.high,
                    entity_type=NotificationEntityType.lead,
                    entity_id=str(lead.id),
                    employee_id=lead.assigned_to,
                    scheduled_for=_interaction_date(follow_up),
                    metadata={
                        "lead_id": str(lead.id),
                        "lead_name": lead.full_name,
                        "company": lead.company,
                        "follow_up_note": description,
                        "is_lead_follow_up": True,
                    },
                )
                await self.uow.scheduled_notifications.create(command.to_entity())
                created += 1

            await self.uow.commit()

        logger.info(f"Created {created} lead follow-up notifications")
        return Return.ok(created)
