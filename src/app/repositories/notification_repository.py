from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import Notification


class INotificationRepository(ABC):
    """Notification repository interface - application layer"""

    @abstractmethod
    async def create(self, notification: Notification) -> Notification:
        """Create a new live notification"""
        pass

    @abstractmethod
    async def get_by_id(self, notification_id: UUID) -> Optional[Notification]:
        pass

    @abstractmethod
    async def update(self, notification: Notification) -> Notification:
        pass

    @abstractmethod
    async def list_by_employee(
        self,
        employee_id: UUID,
        is_read: Optional[bool] = None,
        notification_type: Optional[str] = None,
        priority: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Notification], int]:
        """Notifications of one recipient, newest first. Returns (items, total)."""
        pass

    @abstractmethod
    async def mark_all_read(
        self, employee_id: UUID, notification_type: Optional[str] = None
    ) -> int:
        """Mark unread notifications as read. Returns count updated."""
        pass

    @abstractmethod
    async def count_unread(
        self, employee_id: UUID, notification_type: Optional[str] = None
    ) -> int:
        pass
