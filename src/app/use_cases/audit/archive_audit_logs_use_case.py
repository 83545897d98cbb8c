"""
Archive Audit Logs Use Case

Archival removes events older than the archive window from the live log.
No copy is kept elsewhere.
"""

import logging
from datetime import timedelta

from pydantic import BaseModel

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit.apply_retention_policy_use_case import (
    DEFAULT_MIN_WINDOW_DAYS,
    check_window,
)
from src.domain.base import utcnow

logger = logging.getLogger(__name__)


class ArchiveResponse(BaseModel):
    archived_count: int
    archive_days: int


class ArchiveAuditLogsUseCase:
    def __init__(self, uow: UnitOfWork, min_days: int = DEFAULT_MIN_WINDOW_DAYS):
        self.uow = uow
        self.min_days = min_days

    async def execute(self, days: int = 90) -> Result[ArchiveResponse]:
        error = check_window(days, self.min_days)
        if error:
            return Return.err(error)

        cutoff = utcnow() - timedelta(days=days)
        async with self.uow:
            archived = await self.uow.audit_events.archive_older_than(cutoff)
            await self.uow.commit()

        logger.info(f"Audit archive: {archived} events older than {days} days archived")
        return Return.ok(ArchiveResponse(archived_count=archived, archive_days=days))
