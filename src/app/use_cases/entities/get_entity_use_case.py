from uuid import UUID

from sqlmodel import SQLModel

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .kinds import get_kind, unknown_kind


class GetEntityUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, kind_name: str, entity_id: UUID) -> Result[SQLModel]:
        kind = get_kind(kind_name)
        if kind is None:
            return Return.err(unknown_kind(kind_name))

        async with self.uow:
            entity = await kind.repository_of(self.uow).get_by_id(entity_id)

        if entity is None:
            return Return.err(Error("ENTITY_NOT_FOUND", f"{kind.model.__name__} not found"))
        return Return.ok(entity)
