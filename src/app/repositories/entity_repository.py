from abc import ABC, abstractmethod
from datetime import datetime
from typing import Generic, List, Optional, Sequence, TypeVar
from uuid import UUID

from sqlmodel import SQLModel

from src.domain.entities import Invoice, Lead, Task

T = TypeVar("T", bound=SQLModel)


class IEntityRepository(ABC, Generic[T]):
    """Generic repository interface for audited domain entities"""

    @abstractmethod
    async def get_by_id(self, entity_id: UUID) -> Optional[T]:
        pass

    @abstractmethod
    async def create(self, entity: T) -> T:
        pass

    @abstractmethod
    async def update(self, entity: T) -> T:
        pass

    @abstractmethod
    async def delete(self, entity: T) -> None:
        pass


class ITaskRepository(IEntityRepository[Task]):
    @abstractmethod
    async def get_overdue(self, now: datetime) -> List[Task]:
        """Active, assigned, not completed tasks with due_date < now"""
        pass

    @abstractmethod
    async def get_due_between(self, start: datetime, end: datetime) -> List[Task]:
        """Active, assigned, not completed tasks with start <= due_date < end"""
        pass


class ILeadRepository(IEntityRepository[Lead]):
    @abstractmethod
    async def get_assigned_in_stage(self, stage: str) -> List[Lead]:
        """Active leads in a pipeline stage that have an assignee"""
        pass


class IInvoiceRepository(IEntityRepository[Invoice]):
    @abstractmethod
    async def get_due_between(
        self, start: datetime, end: datetime, statuses: Sequence[str]
    ) -> List[Invoice]:
        """Active invoices with a status in statuses and start <= due_date <= end"""
        pass
