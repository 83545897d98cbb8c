"""
Create Entity Use Case

Creates any audited entity and records its creation.
"""

from typing import Any, Dict

from pydantic import ValidationError
from sqlmodel import SQLModel

from libs.result import Result, Return
from src.app.services.audit_hooks import create_with_audit
from src.app.services.audit_recorder import (
    Actor,
    AuditRecorder,
    AuditWriteError,
    audit_write_failed,
)
from src.app.services.unit_of_work import UnitOfWork

from .kinds import get_kind, unknown_fields, unknown_kind, validate_entity, validation_error


class CreateEntityUseCase:
    """
    Business Rules:
    - Data is validated against the entity model
    - created_by defaults to the acting user where the entity has it
    - The entity is committed first, then the creation is audited.
      If the audit write fails the entity stays created and
      AUDIT_WRITE_FAILED is returned (fail-open).
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, kind_name: str, data: Dict[str, Any], actor: Actor
    ) -> Result[SQLModel]:
        kind = get_kind(kind_name)
        if kind is None:
            return Return.err(unknown_kind(kind_name))

        error = unknown_fields(kind, data)
        if error:
            return Return.err(error)

        data = dict(data)
        if "created_by" in kind.model.model_fields and data.get("created_by") is None:
            data["created_by"] = actor.id

        try:
            entity = validate_entity(kind, data)
        except ValidationError as exc:
            return Return.err(validation_error(exc))

        async with self.uow:
            entity, intent = await create_with_audit(kind.repository_of(self.uow), entity, kind.hooks)
            await self.uow.commit()

            try:
                await AuditRecorder(self.uow).record_intent(actor, intent, entity.id)
            except AuditWriteError as exc:
                return Return.err(audit_write_failed(exc))

        return Return.ok(entity)
