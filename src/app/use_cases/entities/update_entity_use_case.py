"""
Update Entity Use Case

Applies a partial update to an audited entity and records what changed.
"""

from typing import Any, Dict
from uuid import UUID

from pydantic import ValidationError
from sqlmodel import SQLModel

from libs.result import Error, Result, Return
from src.app.services.audit_hooks import update_with_audit
from src.app.services.audit_recorder import (
    Actor,
    AuditRecorder,
    AuditWriteError,
    audit_write_failed,
)
from src.app.services.unit_of_work import UnitOfWork

from .kinds import get_kind, unknown_fields, unknown_kind, validate_entity, validation_error


class UpdateEntityUseCase:
    """
    Business Rules:
    - The patched entity must still satisfy the model
    - The audit event carries the pre-update and post-update snapshots, the
      changed fields, and the most specific action (status change, progress...)
    - An update that changes nothing is not audited
    - Fail-open: the update is committed before the audit write
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, kind_name: str, entity_id: UUID, patch: Dict[str, Any], actor: Actor
    ) -> Result[SQLModel]:
        kind = get_kind(kind_name)
        if kind is None:
            return Return.err(unknown_kind(kind_name))

        error = unknown_fields(kind, patch)
        if error:
            return Return.err(error)

        async with self.uow:
            repository = kind.repository_of(self.uow)
            current = await repository.get_by_id(entity_id)
            if current is None:
                return Return.err(Error("ENTITY_NOT_FOUND", f"{kind.model.__name__} not found"))

            try:
                validated = validate_entity(kind, {**current.model_dump(), **patch})
            except ValidationError as exc:
                return Return.err(validation_error(exc))

            values = {name: getattr(validated, name) for name in patch}
            entity, intent = await update_with_audit(repository, entity_id, values, kind.hooks)
            await self.uow.commit()

            if intent is not None:
                try:
                    await AuditRecorder(self.uow).record_intent(actor, intent, entity.id)
                except AuditWriteError as exc:
                    return Return.err(audit_write_failed(exc))

        return Return.ok(entity)
