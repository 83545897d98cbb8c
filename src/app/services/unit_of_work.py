from abc import ABC, abstractmethod

from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.entity_repository import (
    IEntityRepository,
    IInvoiceRepository,
    ILeadRepository,
    ITaskRepository,
)
from src.app.repositories.notification_repository import INotificationRepository
from src.app.repositories.scheduled_notification_repository import (
    IScheduledNotificationRepository,
)
from src.domain.entities import Permission, Project, Role, Transaction


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    audit_events: IAuditEventRepository
    scheduled_notifications: IScheduledNotificationRepository
    notifications: INotificationRepository
    projects: IEntityRepository[Project]
    tasks: ITaskRepository
    leads: ILeadRepository
    invoices: IInvoiceRepository
    transactions: IEntityRepository[Transaction]
    roles: IEntityRepository[Role]
    permissions: IEntityRepository[Permission]

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
