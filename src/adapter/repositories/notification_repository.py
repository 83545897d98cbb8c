from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, update
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.notification_repository import INotificationRepository
from src.domain.base import utcnow
from src.domain.entities import Notification


class NotificationRepository(INotificationRepository):
    """Notification repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, notification: Notification) -> Notification:
        self.session.add(notification)
        await self.session.flush()
        await self.session.refresh(notification)
        return notification

    async def get_by_id(self, notification_id: UUID) -> Optional[Notification]:
        stmt = select(Notification).where(Notification.id == notification_id)
        result = await self.session.exec(stmt)
        return result.first()

    async def update(self, notification: Notification) -> Notification:
        self.session.add(notification)
        await self.session.flush()
        await self.session.refresh(notification)
        return notification

    async def list_by_employee(
        self,
        employee_id: UUID,
        is_read: Optional[bool] = None,
        notification_type: Optional[str] = None,
        priority: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Notification], int]:
        conditions = [Notification.employee_id == employee_id]
        if is_read is not None:
            conditions.append(Notification.is_read == is_read)
        if notification_type:
            conditions.append(Notification.type == notification_type)
        if priority:
            conditions.append(Notification.priority == priority)

        count_stmt = select(func.count()).select_from(Notification).where(*conditions)
        total = (await self.session.exec(count_stmt)).one()

        stmt = (
            select(Notification)
            .where(*conditions)
            .order_by(col(Notification.created_at).desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all()), total

    async def mark_all_read(
        self, employee_id: UUID, notification_type: Optional[str] = None
    ) -> int:
        stmt = update(Notification).where(
            Notification.employee_id == employee_id,
            Notification.is_read == False,
        )
        if notification_type:
            stmt = stmt.where(Notification.type == notification_type)
        result = await self.session.execute(stmt.values(is_read=True, read_at=utcnow()))
        await self.session.flush()
        return result.rowcount

    async def count_unread(
        self, employee_id: UUID, notification_type: Optional[str] = None
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(Notification)
            .where(Notification.employee_id == employee_id, Notification.is_read == False)
        )
        if notification_type:
            stmt = stmt.where(Notification.type == notification_type)
        return (await self.session.exec(stmt)).one()
