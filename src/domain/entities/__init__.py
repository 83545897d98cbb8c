"""
Backoffice Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    AuditAction,
    AuditTargetType,
    InvoiceStatus,
    NotificationEntityType,
    NotificationFrequency,
    NotificationPriority,
    NotificationType,
    ProjectStatus,
    TaskStatus,
    TransactionType,
)

# Export all entities
from .audit_event import AuditEvent
from .scheduled_notification import ScheduledNotification
from .notification import Notification
from .project import Project
from .task import Task
from .lead import Lead
from .invoice import Invoice
from .transaction import Transaction
from .role import Role
from .permission import Permission

__all__ = [
    # Enums
    "AuditAction",
    "AuditTargetType",
    "InvoiceStatus",
    "NotificationEntityType",
    "NotificationFrequency",
    "NotificationPriority",
    "NotificationType",
    "ProjectStatus",
    "TaskStatus",
    "TransactionType",
    # Entities
    "AuditEvent",
    "ScheduledNotification",
    "Notification",
    "Project",
    "Task",
    "Lead",
    "Invoice",
    "Transaction",
    "Role",
    "Permission",
]
