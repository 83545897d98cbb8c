from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, delete, func, or_
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.scheduled_notification_repository import (
    IScheduledNotificationRepository,
)
from src.domain.entities import ScheduledNotification


class ScheduledNotificationRepository(IScheduledNotificationRepository):
    """ScheduledNotification repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, scheduled: ScheduledNotification) -> ScheduledNotification:
        self.session.add(scheduled)
        await self.session.flush()
        await self.session.refresh(scheduled)
        return scheduled

    async def get_by_id(self, scheduled_id: UUID) -> Optional[ScheduledNotification]:
        stmt = select(ScheduledNotification).where(ScheduledNotification.id == scheduled_id)
        result = await self.session.exec(stmt)
        return result.first()

    async def update(self, scheduled: ScheduledNotification) -> ScheduledNotification:
        self.session.add(scheduled)
        await self.session.flush()
        await self.session.refresh(scheduled)
        return scheduled

    async def get_due_ids(self, now: datetime) -> List[UUID]:
        stmt = (
            select(ScheduledNotification.id)
            .where(
                ScheduledNotification.scheduled_for <= now,
                ScheduledNotification.executed == False,
                ScheduledNotification.is_active == True,
            )
            .order_by(col(ScheduledNotification.scheduled_for))
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_pending_for_entity(
        self,
        entity_type: str,
        entity_id: str,
        notification_type: str,
        scheduled_from: datetime,
        scheduled_until: Optional[datetime] = None,
    ) -> List[ScheduledNotification]:
        stmt = select(ScheduledNotification).where(
            ScheduledNotification.entity_type == entity_type,
            ScheduledNotification.entity_id == entity_id,
            ScheduledNotification.type == notification_type,
            ScheduledNotification.executed == False,
            ScheduledNotification.scheduled_for >= scheduled_from,
        )
        if scheduled_until is not None:
            stmt = stmt.where(ScheduledNotification.scheduled_for < scheduled_until)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_paginated(
        self,
        executed: Optional[bool] = None,
        notification_type: Optional[str] = None,
        employee_id: Optional[UUID] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[ScheduledNotification], int]:
        conditions = [ScheduledNotification.is_active == True]
        if executed is not None:
            conditions.append(ScheduledNotification.executed == executed)
        if notification_type:
            conditions.append(ScheduledNotification.type == notification_type)
        if employee_id:
            conditions.append(ScheduledNotification.employee_id == employee_id)

        count_stmt = select(func.count()).select_from(ScheduledNotification).where(*conditions)
        total = (await self.session.exec(count_stmt)).one()

        stmt = (
            select(ScheduledNotification)
            .where(*conditions)
            .order_by(col(ScheduledNotification.scheduled_for).desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all()), total

    async def get_upcoming_for_employee(
        self, employee_id: UUID, start: datetime, end: datetime, limit: int = 20
    ) -> List[ScheduledNotification]:
        stmt = (
            select(ScheduledNotification)
            .where(
                ScheduledNotification.employee_id == employee_id,
                ScheduledNotification.scheduled_for >= start,
                ScheduledNotification.scheduled_for <= end,
                ScheduledNotification.executed == False,
                ScheduledNotification.is_active == True,
            )
            .order_by(col(ScheduledNotification.scheduled_for))
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def delete_stale(self, cutoff: datetime) -> int:
        stmt = delete(ScheduledNotification).where(
            or_(
                and_(
                    ScheduledNotification.executed == True,
                    ScheduledNotification.executed_at < cutoff,
                ),
                and_(
                    ScheduledNotification.executed == False,
                    ScheduledNotification.is_active == False,
                    ScheduledNotification.scheduled_for < cutoff,
                ),
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def count_active(self) -> int:
        stmt = (
            select(func.count())
            .select_from(ScheduledNotification)
            .where(ScheduledNotification.is_active == True)
        )
        return (await self.session.exec(stmt)).one()

    async def count_pending(self, scheduled_before: datetime) -> int:
        stmt = (
            select(func.count())
            .select_from(ScheduledNotification)
            .where(
                ScheduledNotification.is_active == True,
                ScheduledNotification.executed == False,
                ScheduledNotification.scheduled_for <= scheduled_before,
            )
        )
        return (await self.session.exec(stmt)).one()

    async def count_executed_since(self, since: datetime) -> int:
        stmt = (
            select(func.count())
            .select_from(ScheduledNotification)
            .where(
                ScheduledNotification.executed == True,
                ScheduledNotification.executed_at >= since,
            )
        )
        return (await self.session.exec(stmt)).one()

    async def count_active_by(self, field: str) -> Dict[str, int]:
        columns = {
            "type": col(ScheduledNotification.type),
            "priority": col(ScheduledNotification.priority),
        }
        column = columns[field]
        count = func.count().label("count")
        stmt = (
            select(column, count)
            .where(ScheduledNotification.is_active == True)
            .group_by(column)
            .order_by(count.desc())
        )
        rows = (await self.session.execute(stmt)).all()
        return {
            (row[0].value if isinstance(row[0], Enum) else row[0]): row[1] for row in rows
        }
