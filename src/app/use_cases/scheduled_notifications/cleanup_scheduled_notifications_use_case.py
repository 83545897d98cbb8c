import logging
from datetime import timedelta

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

logger = logging.getLogger(__name__)


class CleanupScheduledNotificationsUseCase:
    """
    Purge stale scheduled notifications.

    Business Rules:
    - Executed records with executed_at older than the retention window
    - Inactive, never executed records scheduled before the retention window
    """

    def __init__(self, uow: UnitOfWork, retention_days: int = 30):
        self.uow = uow
        self.retention_days = retention_days

    async def execute(self) -> Result[int]:
        cutoff = utcnow() - timedelta(days=self.retention_days)
        async with self.uow:
            deleted = await self.uow.scheduled_notifications.delete_stale(cutoff)
            await self.uow.commit()

        logger.info(f"Cleaned up {deleted} old scheduled notifications")
        return Return.ok(deleted)
