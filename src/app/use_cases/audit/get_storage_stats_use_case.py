from datetime import timedelta

from pydantic import BaseModel

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

# Approximate stored size of one audit event with both snapshots
AVG_EVENT_SIZE_BYTES = 2048


class StorageStats(BaseModel):
    total_logs: int
    logs_last_30_days: int
    logs_last_90_days: int
    logs_last_365_days: int
    logs_older_than_365_days: int
    estimated_size_mb: float


class GetStorageStatsUseCase:
    """Audit log volume by age and estimated storage size"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[StorageStats]:
        now = utcnow()
        last_year = now - timedelta(days=365)

        async with self.uow:
            events = self.uow.audit_events
            total = await events.count()
            stats = StorageStats(
                total_logs=total,
                logs_last_30_days=await events.count(since=now - timedelta(days=30)),
                logs_last_90_days=await events.count(since=now - timedelta(days=90)),
                logs_last_365_days=await events.count(since=last_year),
                logs_older_than_365_days=await events.count(before=last_year),
                estimated_size_mb=round(total * AVG_EVENT_SIZE_BYTES / (1024 * 1024), 2),
            )

        return Return.ok(stats)
