from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.audit_hooks import delete_with_audit
from src.app.services.audit_recorder import (
    Actor,
    AuditRecorder,
    AuditWriteError,
    audit_write_failed,
)
from src.app.services.unit_of_work import UnitOfWork

from .kinds import get_kind, unknown_kind


class DeleteEntityUseCase:
    """Hard delete of an audited entity; the audit event keeps its last snapshot"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, kind_name: str, entity_id: UUID, actor: Actor) -> Result[UUID]:
        kind = get_kind(kind_name)
        if kind is None:
            return Return.err(unknown_kind(kind_name))

        async with self.uow:
            entity, intent = await delete_with_audit(
                kind.repository_of(self.uow), entity_id, kind.hooks
            )
            if entity is None:
                return Return.err(Error("ENTITY_NOT_FOUND", f"{kind.model.__name__} not found"))
            await self.uow.commit()

            try:
                await AuditRecorder(self.uow).record_intent(actor, intent, entity_id)
            except AuditWriteError as exc:
                return Return.err(audit_write_failed(exc))

        return Return.ok(entity_id)
