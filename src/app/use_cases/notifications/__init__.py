"""
Notification Use Cases

Live notifications of the current employee.
"""

from .create_notifications_use_case import CreateNotificationsCommand, CreateNotificationsUseCase
from .get_unread_count_use_case import GetUnreadCountUseCase
from .list_notifications_use_case import ListNotificationsUseCase
from .mark_all_notifications_read_use_case import MarkAllNotificationsReadUseCase
from .mark_notification_read_use_case import MarkNotificationReadUseCase

__all__ = [
    "CreateNotificationsCommand",
    "CreateNotificationsUseCase",
    "GetUnreadCountUseCase",
    "ListNotificationsUseCase",
    "MarkAllNotificationsReadUseCase",
    "MarkNotificationReadUseCase",
]
