"""
Run Audit Maintenance Use Case

Archive -> retention -> index optimization, with storage statistics taken
before and after.
"""

import logging
from typing import Optional

from pydantic import BaseModel

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit.apply_retention_policy_use_case import (
    DEFAULT_MIN_WINDOW_DAYS,
    ApplyRetentionPolicyUseCase,
)
from src.app.use_cases.audit.archive_audit_logs_use_case import ArchiveAuditLogsUseCase
from src.app.use_cases.audit.get_storage_stats_use_case import (
    GetStorageStatsUseCase,
    StorageStats,
)
from src.app.use_cases.audit.optimize_indexes_use_case import OptimizeIndexesUseCase

logger = logging.getLogger(__name__)


class MaintenanceResponse(BaseModel):
    archived_count: int
    deleted_count: int
    indexes_optimized: bool
    stats_before: Optional[StorageStats] = None
    stats_after: Optional[StorageStats] = None


class RunAuditMaintenanceUseCase:
    """
    Full audit maintenance run.

    Business Rules:
    - Archive runs before retention, both with the same minimum window
    - Stops at the first failing step and returns its error
    """

    def __init__(self, uow: UnitOfWork, min_days: int = DEFAULT_MIN_WINDOW_DAYS):
        self.uow = uow
        self.min_days = min_days

    async def execute(
        self,
        archive_days: int = 90,
        retention_days: int = 365,
        optimize_indexes: bool = True,
        generate_report: bool = True,
    ) -> Result[MaintenanceResponse]:
        stats_before = None
        if generate_report:
            stats_before = (await GetStorageStatsUseCase(self.uow).execute()).value

        archived = await ArchiveAuditLogsUseCase(self.uow, self.min_days).execute(archive_days)
        if archived.is_err():
            return Return.err(archived.error)

        retained = await ApplyRetentionPolicyUseCase(self.uow, self.min_days).execute(
            retention_days
        )
        if retained.is_err():
            return Return.err(retained.error)

        if optimize_indexes:
            await OptimizeIndexesUseCase(self.uow).execute()

        stats_after = None
        if generate_report:
            stats_after = (await GetStorageStatsUseCase(self.uow).execute()).value

        logger.info(
            f"Audit maintenance done: {archived.value.archived_count} archived, "
            f"{retained.value.deleted_count} deleted"
        )
        return Return.ok(
            MaintenanceResponse(
                archived_count=archived.value.archived_count,
                deleted_count=retained.value.deleted_count,
                indexes_optimized=optimize_indexes,
                stats_before=stats_before,
                stats_after=stats_after,
            )
        )
