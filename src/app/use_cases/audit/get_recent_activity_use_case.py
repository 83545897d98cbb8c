from typing import List

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent

MAX_RECENT = 50


class GetRecentActivityUseCase:
    """Newest audit events across every module, for dashboards"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, limit: int = 10, include_system: bool = False
    ) -> Result[List[AuditEvent]]:
        if limit < 1 or limit > MAX_RECENT:
            return Return.err(
                Error("VALIDATION_ERROR", f"Limit must be between 1 and {MAX_RECENT}")
            )

        async with self.uow:
            events = await self.uow.audit_events.recent(limit, include_system)

        return Return.ok(events)
