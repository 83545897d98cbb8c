from datetime import datetime, time
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, func, or_, text
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.audit_event_repository import (
    SYSTEM_ACTOR_NAMES,
    SYSTEM_MODULE,
    AuditLogFilters,
    IAuditEventRepository,
)
from src.domain.entities import AuditEvent

TOP_ACTORS_LIMIT = 10


def _conditions(filters: AuditLogFilters) -> list:
    """Translate AuditLogFilters into SQL where clauses"""
    conditions = []

    if filters.actor_id:
        conditions.append(AuditEvent.actor_id == filters.actor_id)
    if filters.action:
        conditions.append(AuditEvent.action == filters.action)
    if filters.module:
        conditions.append(AuditEvent.module == filters.module)
    if filters.target_type:
        conditions.append(AuditEvent.target_type == filters.target_type)
    if filters.target_id:
        conditions.append(AuditEvent.target_id == filters.target_id)

    if not filters.include_system:
        conditions.append(col(AuditEvent.actor_name).not_in(SYSTEM_ACTOR_NAMES))
        conditions.append(AuditEvent.module != SYSTEM_MODULE)

    # Date range: inclusive start of day, inclusive end of day
    if filters.start_date:
        conditions.append(AuditEvent.timestamp >= datetime.combine(filters.start_date, time.min))
    if filters.end_date:
        conditions.append(AuditEvent.timestamp <= datetime.combine(filters.end_date, time.max))

    if filters.search_text:
        pattern = f"%{filters.search_text}%"
        conditions.append(
            or_(
                col(AuditEvent.description).ilike(pattern),
                col(AuditEvent.actor_name).ilike(pattern),
            )
        )

    return conditions


class AuditEventRepository(IAuditEventRepository):
    """AuditEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Append a new audit event (immutable)"""
        self.session.add(audit_event)
        await self.session.flush()
        await self.session.refresh(audit_event)
        return audit_event

    async def get_by_id(self, event_id: UUID) -> Optional[AuditEvent]:
        stmt = select(AuditEvent).where(AuditEvent.id == event_id)
        result = await self.session.exec(stmt)
        return result.first()

    async def query(
        self,
        filters: AuditLogFilters,
        page: int = 1,
        limit: int = 20,
        sort_by: str = "-timestamp",
    ) -> Tuple[List[AuditEvent], int]:
        conditions = _conditions(filters)

        count_stmt = select(func.count()).select_from(AuditEvent)
        if conditions:
            count_stmt = count_stmt.where(*conditions)
        total = (await self.session.exec(count_stmt)).one()

        descending = sort_by.startswith("-")
        column = col(getattr(AuditEvent, sort_by.lstrip("-")))
        order = column.desc() if descending else column.asc()

        stmt = select(AuditEvent)
        if conditions:
            stmt = stmt.where(*conditions)
        stmt = stmt.order_by(order, col(AuditEvent.id)).offset((page - 1) * limit).limit(limit)

        result = await self.session.exec(stmt)
        return list(result.all()), total

    async def _group_counts(self, column, conditions: list) -> List[Tuple[Any, int]]:
        count = func.count().label("count")
        stmt = select(column, count)
        if conditions:
            stmt = stmt.where(*conditions)
        stmt = stmt.group_by(column).order_by(count.desc(), column)
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def statistics(self, filters: AuditLogFilters) -> Dict[str, Any]:
        conditions = _conditions(filters)

        action_stats = await self._group_counts(col(AuditEvent.action), conditions)
        module_stats = await self._group_counts(col(AuditEvent.module), conditions)
        target_type_stats = await self._group_counts(col(AuditEvent.target_type), conditions)

        # Top actors
        count = func.count().label("count")
        actor_stmt = select(col(AuditEvent.actor_id), col(AuditEvent.actor_name), count)
        if conditions:
            actor_stmt = actor_stmt.where(*conditions)
        actor_stmt = (
            actor_stmt.group_by(col(AuditEvent.actor_id), col(AuditEvent.actor_name))
            .order_by(count.desc(), col(AuditEvent.actor_name))
            .limit(TOP_ACTORS_LIMIT)
        )
        actor_rows = (await self.session.execute(actor_stmt)).all()

        # Per calendar day
        day = func.date(AuditEvent.timestamp).label("day")
        daily_stmt = select(day, func.count())
        if conditions:
            daily_stmt = daily_stmt.where(*conditions)
        daily_stmt = daily_stmt.group_by(day).order_by(day)
        daily_rows = (await self.session.execute(daily_stmt)).all()

        total_stmt = select(func.count()).select_from(AuditEvent)
        if conditions:
            total_stmt = total_stmt.where(*conditions)
        total = (await self.session.exec(total_stmt)).one()

        return {
            "action_stats": [{"action": k, "count": c} for k, c in action_stats],
            "module_stats": [{"module": k, "count": c} for k, c in module_stats],
            "target_type_stats": [
                {"target_type": k, "count": c} for k, c in target_type_stats
            ],
            "user_stats": [
                {"actor_id": str(row[0]), "actor_name": row[1], "count": row[2]}
                for row in actor_rows
            ],
            "daily_stats": [{"date": str(row[0]), "count": row[1]} for row in daily_rows],
            "total": total,
        }

    async def recent(self, limit: int = 10, include_system: bool = False) -> List[AuditEvent]:
        conditions = _conditions(AuditLogFilters(include_system=include_system))
        stmt = select(AuditEvent)
        if conditions:
            stmt = stmt.where(*conditions)
        stmt = stmt.order_by(col(AuditEvent.timestamp).desc()).limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count(
        self, since: Optional[datetime] = None, before: Optional[datetime] = None
    ) -> int:
        stmt = select(func.count()).select_from(AuditEvent)
        if since is not None:
            stmt = stmt.where(AuditEvent.timestamp >= since)
        if before is not None:
            stmt = stmt.where(AuditEvent.timestamp < before)
        return (await self.session.exec(stmt)).one()

    async def delete_older_than(self, cutoff: datetime) -> int:
        stmt = delete(AuditEvent).where(AuditEvent.timestamp < cutoff)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def archive_older_than(self, cutoff: datetime) -> int:
        """
        Archive events older than cutoff.

        Archival is permanent removal: no cold-storage copy is written.
        """
        stmt = delete(AuditEvent).where(AuditEvent.timestamp < cutoff)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def optimize_indexes(self) -> None:
        table = AuditEvent.__table__

        def _ensure_indexes(sync_conn):
            for index in table.indexes:
                index.create(sync_conn, checkfirst=True)

        connection = await self.session.connection()
        await connection.run_sync(_ensure_indexes)
        await self.session.execute(text(f"ANALYZE {table.name}"))
