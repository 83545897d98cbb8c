from typing import Any, Dict
from uuid import UUID

from libs.result import Result, Return
from src.app.repositories.audit_event_repository import AuditLogFilters
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.pagination import paginated, validate_page


class GetUserActivityUseCase:
    """
    Activity history of one actor, newest first.

    Business Rules:
    - Includes every event of the actor, system module included
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_id: UUID, page: int = 1, limit: int = 20
    ) -> Result[Dict[str, Any]]:
        error = validate_page(page, limit)
        if error:
            return Return.err(error)

        filters = AuditLogFilters(actor_id=actor_id, include_system=True)
        async with self.uow:
            events, total = await self.uow.audit_events.query(
                filters, page=page, limit=limit, sort_by="-timestamp"
            )

        return Return.ok(paginated(events, total, page, limit))
