"""
Notification Jobs

Cron job table of the notification subsystem.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List

from libs.result import Result
from src.app.services.cron import CronScheduler, CronTask, DailyTrigger, IntervalTrigger, Trigger
from src.app.services.unit_of_work import UnitOfWork

from .check_lead_follow_ups_use_case import CheckLeadFollowUpsUseCase
from .check_overdue_tasks_use_case import CheckOverdueTasksUseCase
from .check_upcoming_invoices_use_case import CheckUpcomingInvoicesUseCase
from .cleanup_scheduled_notifications_use_case import CleanupScheduledNotificationsUseCase
from .execute_scheduled_notifications_use_case import ExecuteScheduledNotificationsUseCase
from .run_all_checks_use_case import RunAllChecksUseCase

logger = logging.getLogger(__name__)

UnitOfWorkFactory = Callable[[], UnitOfWork]


@dataclass(frozen=True)
class NotificationJob:
    name: str
    trigger: Trigger
    run: Callable[[UnitOfWork], Awaitable[Result[Any]]]


def notification_jobs(timezone: str = "UTC", retention_days: int = 30) -> List[NotificationJob]:
    return [
        NotificationJob(
            "notifications-check",
            IntervalTrigger.minutes(5),
            lambda uow: ExecuteScheduledNotificationsUseCase(uow).execute(),
        ),
        NotificationJob(
            "lead-followups",
            IntervalTrigger.hours(1),
            lambda uow: CheckLeadFollowUpsUseCase(uow).execute(),
        ),
        NotificationJob(
            "overdue-tasks",
            IntervalTrigger.hours(2),
            lambda uow: CheckOverdueTasksUseCase(uow).execute(),
        ),
        NotificationJob(
            "upcoming-invoices",
            IntervalTrigger.hours(4),
            lambda uow: CheckUpcomingInvoicesUseCase(uow).execute(),
        ),
        NotificationJob(
            "daily-cleanup",
            DailyTrigger(hour=2, minute=0, tz=timezone),
            lambda uow: CleanupScheduledNotificationsUseCase(uow, retention_days).execute(),
        ),
        NotificationJob(
            "complete-check",
            IntervalTrigger.hours(6),
            lambda uow: RunAllChecksUseCase(uow, retention_days).execute(),
        ),
    ]


def job_task(job: NotificationJob, uow_factory: UnitOfWorkFactory) -> CronTask:
    """Cron task running a job on a fresh unit of work"""

    async def run() -> None:
        result = await job.run(uow_factory())
        if result.is_err():
            logger.warning(f"Job {job.name} returned {result.error.code}: {result.error.message}")
        else:
            logger.info(f"Job {job.name} result: {result.value}")

    return run


def initialize_jobs(
    scheduler: CronScheduler,
    uow_factory: UnitOfWorkFactory,
    timezone: str = "UTC",
    retention_days: int = 30,
) -> List[str]:
    """Register every notification job. Returns the job names."""
    jobs = notification_jobs(timezone, retention_days)
    for job in jobs:
        scheduler.schedule(job.name, job.trigger, job_task(job, uow_factory))

    logger.info(f"Notification jobs initialized: {len(jobs)}")
    return [job.name for job in jobs]
