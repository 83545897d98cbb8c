"""
Apply Retention Policy Use Case

Deletes audit events older than the retention window.
"""

import logging
from datetime import timedelta

from pydantic import BaseModel

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

logger = logging.getLogger(__name__)

DEFAULT_MIN_WINDOW_DAYS = 30


class RetentionResponse(BaseModel):
    deleted_count: int
    retention_days: int


def check_window(days: int, min_days: int):
    if days < min_days:
        return Error(
            "INVALID_RETENTION_DAYS",
            f"Window must be at least {min_days} days",
            reason=f"Got {days} days",
        )
    return None


class ApplyRetentionPolicyUseCase:
    """
    Permanently delete audit events with timestamp < now - days.

    Business Rules:
    - days must be at least min_days
    - Events exactly inside the window are kept
    """

    def __init__(self, uow: UnitOfWork, min_days: int = DEFAULT_MIN_WINDOW_DAYS):
        self.uow = uow
        self.min_days = min_days

    async def execute(self, days: int = 365) -> Result[RetentionResponse]:
        error = check_window(days, self.min_days)
        if error:
            return Return.err(error)

        cutoff = utcnow() - timedelta(days=days)
        async with self.uow:
            deleted = await self.uow.audit_events.delete_older_than(cutoff)
            await self.uow.commit()

        logger.info(f"Audit retention applied: {deleted} events older than {days} days deleted")
        return Return.ok(RetentionResponse(deleted_count=deleted, retention_days=days))
