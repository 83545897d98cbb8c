"""
Scheduled Notification Use Cases

Scheduling, dispatch, trigger-condition producers and housekeeping.
"""

from .cancel_scheduled_notification_use_case import CancelScheduledNotificationUseCase
from .check_lead_follow_ups_use_case import CheckLeadFollowUpsUseCase
from .check_overdue_tasks_use_case import CheckOverdueTasksUseCase
from .check_upcoming_invoices_use_case import CheckUpcomingInvoicesUseCase
from .cleanup_scheduled_notifications_use_case import CleanupScheduledNotificationsUseCase
from .dtos import CheckResults, ScheduledNotificationStats, ScheduleNotificationCommand
from .execute_scheduled_notifications_use_case import ExecuteScheduledNotificationsUseCase
from .get_scheduled_notification_stats_use_case import GetScheduledNotificationStatsUseCase
from .get_upcoming_notifications_use_case import GetUpcomingNotificationsUseCase
from .list_scheduled_notifications_use_case import ListScheduledNotificationsUseCase
from .notification_jobs import NotificationJob, initialize_jobs, notification_jobs
from .run_all_checks_use_case import RunAllChecksUseCase
from .schedule_notification_use_case import ScheduleNotificationUseCase

__all__ = [
    "CancelScheduledNotificationUseCase",
    "CheckLeadFollowUpsUseCase",
    "CheckOverdueTasksUseCase",
    "CheckUpcomingInvoicesUseCase",
    "CleanupScheduledNotificationsUseCase",
    "CheckResults",
    "ScheduledNotificationStats",
    "ScheduleNotificationCommand",
    "ExecuteScheduledNotificationsUseCase",
    "GetScheduledNotificationStatsUseCase",
    "GetUpcomingNotificationsUseCase",
    "ListScheduledNotificationsUseCase",
    "NotificationJob",
    "initialize_jobs",
    "notification_jobs",
    "RunAllChecksUseCase",
    "ScheduleNotificationUseCase",
]
