"""
Run All Checks Use Case

Dispatch sweep, every producer and the cleanup, in sequence.
"""

import logging
from typing import Awaitable, Callable

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .check_lead_follow_ups_use_case import CheckLeadFollowUpsUseCase
from .check_overdue_tasks_use_case import CheckOverdueTasksUseCase
from .check_upcoming_invoices_use_case import CheckUpcomingInvoicesUseCase
from .cleanup_scheduled_notifications_use_case import CleanupScheduledNotificationsUseCase
from .dtos import CheckResults
from .execute_scheduled_notifications_use_case import ExecuteScheduledNotificationsUseCase

logger = logging.getLogger(__name__)


class RunAllChecksUseCase:
    """
    Run every automatic notification check.

    Order: dispatch, lead follow-ups, tasks, invoices, cleanup.
    A failing step is logged, counted as 0, and does not stop the others.
    """

    def __init__(self, uow: UnitOfWork, retention_days: int = 30):
        self.uow = uow
        self.retention_days = retention_days

    async def execute(self) -> Result[CheckResults]:
        logger.info("Running all notification checks")

        results = CheckResults(
            executed=await self._step(
                "executed", ExecuteScheduledNotificationsUseCase(self.uow).execute
            ),
            follow_ups=await self._step(
                "follow_ups", CheckLeadFollowUpsUseCase(self.uow).execute
            ),
            tasks=await self._step("tasks", CheckOverdueTasksUseCase(self.uow).execute),
            invoices=await self._step(
                "invoices", CheckUpcomingInvoicesUseCase(self.uow).execute
            ),
            cleanup=await self._step(
                "cleanup",
                CleanupScheduledNotificationsUseCase(self.uow, self.retention_days).execute,
            ),
        )

        logger.info(f"Notification checks completed: {results.model_dump()}")
        return Return.ok(results)

    async def _step(self, name: str, run: Callable[[], Awaitable[Result[int]]]) -> int:
        try:
            result = await run()
        except Exception:
            logger.exception(f"Notification check {name} failed")
            return 0
        if result.is_err():
            logger.warning(f"Notification check {name} failed: {result.error.code}")
            return 0
        return result.value
