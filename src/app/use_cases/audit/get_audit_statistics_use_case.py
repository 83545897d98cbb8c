"""
Get Audit Statistics Use Case

Aggregated audit activity over a date range.
"""

from datetime import date
from typing import Any, Dict, Optional

from libs.result import Error, Result, Return
from src.app.repositories.audit_event_repository import AuditLogFilters
from src.app.services.unit_of_work import UnitOfWork


class GetAuditStatisticsUseCase:
    """
    Counts by action, module, target type, top 10 actors and calendar day.

    Business Rules:
    - Same date semantics and system-actor exclusion as the log listing
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        include_system: bool = False,
    ) -> Result[Dict[str, Any]]:
        if start_date and end_date and start_date > end_date:
            return Return.err(
                Error("VALIDATION_ERROR", "start_date must not be after end_date")
            )

        filters = AuditLogFilters(
            start_date=start_date, end_date=end_date, include_system=include_system
        )
        async with self.uow:
            stats = await self.uow.audit_events.statistics(filters)

        return Return.ok(stats)
