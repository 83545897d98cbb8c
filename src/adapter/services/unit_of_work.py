from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.entity_repository import (
    InvoiceRepository,
    LeadRepository,
    PermissionRepository,
    ProjectRepository,
    RoleRepository,
    TaskRepository,
    TransactionRepository,
)
from src.adapter.repositories.notification_repository import NotificationRepository
from src.adapter.repositories.scheduled_notification_repository import (
    ScheduledNotificationRepository,
)
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.audit_events = AuditEventRepository(self.session)
        self.scheduled_notifications = ScheduledNotificationRepository(self.session)
        self.notifications = NotificationRepository(self.session)
        self.projects = ProjectRepository(self.session)
        self.tasks = TaskRepository(self.session)
        self.leads = LeadRepository(self.session)
        self.invoices = InvoiceRepository(self.session)
        self.transactions = TransactionRepository(self.session)
        self.roles = RoleRepository(self.session)
        self.permissions = PermissionRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type is not None:
            await self.rollback()
        # Uncommitted work is discarded; loaded entities stay readable, detached
        await self.session.close()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
