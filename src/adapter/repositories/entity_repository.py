from datetime import datetime
from typing import Generic, List, Optional, Sequence, Type, TypeVar
from uuid import UUID

from sqlmodel import SQLModel, col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.entity_repository import (
    IEntityRepository,
    IInvoiceRepository,
    ILeadRepository,
    ITaskRepository,
)
from src.domain.entities import (
    Invoice,
    Lead,
    Permission,
    Project,
    Role,
    Task,
    TaskStatus,
    Transaction,
)

T = TypeVar("T", bound=SQLModel)


class SqlModelRepository(IEntityRepository[T], Generic[T]):
    """Generic SQLModel repository, subclasses set `model`"""

    model: Type[T]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, entity_id: UUID) -> Optional[T]:
        stmt = select(self.model).where(self.model.id == entity_id)
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, entity: T) -> T:
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def update(self, entity: T) -> T:
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: T) -> None:
        await self.session.delete(entity)
        await self.session.flush()


class ProjectRepository(SqlModelRepository[Project]):
    model = Project


class RoleRepository(SqlModelRepository[Role]):
    model = Role


class PermissionRepository(SqlModelRepository[Permission]):
    model = Permission


class TransactionRepository(SqlModelRepository[Transaction]):
    model = Transaction


class TaskRepository(SqlModelRepository[Task], ITaskRepository):
    model = Task

    def _open_tasks(self):
        return select(Task).where(
            Task.status != TaskStatus.completed,
            Task.is_active == True,
            col(Task.assigned_to).is_not(None),
        )

    async def get_overdue(self, now: datetime) -> List[Task]:
        stmt = self._open_tasks().where(Task.due_date < now)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_due_between(self, start: datetime, end: datetime) -> List[Task]:
        stmt = self._open_tasks().where(Task.due_date >= start, Task.due_date < end)
        result = await self.session.exec(stmt)
        return list(result.all())


class LeadRepository(SqlModelRepository[Lead], ILeadRepository):
    model = Lead

    async def get_assigned_in_stage(self, stage: str) -> List[Lead]:
        stmt = select(Lead).where(
            Lead.current_stage == stage,
            Lead.is_active == True,
            col(Lead.assigned_to).is_not(None),
        )
        result = await self.session.exec(stmt)
        return list(result.all())


class InvoiceRepository(SqlModelRepository[Invoice], IInvoiceRepository):
    model = Invoice

    async def get_due_between(
        self, start: datetime, end: datetime, statuses: Sequence[str]
    ) -> List[Invoice]:
        stmt = select(Invoice).where(
            Invoice.due_date >= start,
            Invoice.due_date <= end,
            col(Invoice.status).in_(statuses),
            Invoice.is_active == True,
        )
        result = await self.session.exec(stmt)
        return list(result.all())
