"""
Get Audit Logs Use Case

Filtered, sorted and paginated audit log listing.
"""

from typing import Any, Dict

from libs.result import Error, Result, Return
from src.app.repositories.audit_event_repository import AuditLogFilters, SORTABLE_FIELDS
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.pagination import paginated, validate_page


class GetAuditLogsUseCase:
    """
    Use case for listing audit events.

    Business Rules:
    - System/automated actors are hidden unless filters.include_system
    - start_date is inclusive, end_date includes the whole day
    - sort_by must be a sortable field, optionally prefixed with "-"
    - Empty results are not an error
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        filters: AuditLogFilters,
        page: int = 1,
        limit: int = 20,
        sort_by: str = "-timestamp",
    ) -> Result[Dict[str, Any]]:
        error = validate_page(page, limit)
        if error:
            return Return.err(error)

        if sort_by.lstrip("-") not in SORTABLE_FIELDS:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    "Invalid sort field",
                    reason=f"Sortable fields: {', '.join(SORTABLE_FIELDS)}",
                )
            )

        if filters.start_date and filters.end_date and filters.start_date > filters.end_date:
            return Return.err(
                Error("VALIDATION_ERROR", "start_date must not be after end_date")
            )

        async with self.uow:
            events, total = await self.uow.audit_events.query(
                filters, page=page, limit=limit, sort_by=sort_by
            )

        return Return.ok(paginated(events, total, page, limit))
