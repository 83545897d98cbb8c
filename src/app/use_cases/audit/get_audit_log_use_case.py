from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent


class GetAuditLogUseCase:
    """Fetch one audit event by id"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, event_id: UUID) -> Result[AuditEvent]:
        async with self.uow:
            event = await self.uow.audit_events.get_by_id(event_id)

        if event is None:
            return Return.err(Error("AUDIT_LOG_NOT_FOUND", "Audit log not found"))
        return Return.ok(event)
