from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from src.domain.entities import ScheduledNotification


class IScheduledNotificationRepository(ABC):
    """ScheduledNotification repository interface - application layer"""

    @abstractmethod
    async def create(self, scheduled: ScheduledNotification) -> ScheduledNotification:
        """Create a new scheduled notification"""
        pass

    @abstractmethod
    async def get_by_id(self, scheduled_id: UUID) -> Optional[ScheduledNotification]:
        """Get scheduled notification by ID"""
        pass

    @abstractmethod
    async def update(self, scheduled: ScheduledNotification) -> ScheduledNotification:
        """Update existing scheduled notification"""
        pass

    @abstractmethod
    async def get_due_ids(self, now: datetime) -> List[UUID]:
        """IDs of active, unexecuted records with scheduled_for <= now"""
        pass

    @abstractmethod
    async def get_pending_for_entity(
        self,
        entity_type: str,
        entity_id: str,
        notification_type: str,
        scheduled_from: datetime,
        scheduled_until: Optional[datetime] = None,
    ) -> List[ScheduledNotification]:
        """Unexecuted records for an entity scheduled within [from, until)"""
        pass

    @abstractmethod
    async def list_paginated(
        self,
        executed: Optional[bool] = None,
        notification_type: Optional[str] = None,
        employee_id: Optional[UUID] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[ScheduledNotification], int]:
        """Active records, newest scheduled_for first. Returns (items, total)."""
        pass

    @abstractmethod
    async def get_upcoming_for_employee(
        self, employee_id: UUID, start: datetime, end: datetime, limit: int = 20
    ) -> List[ScheduledNotification]:
        """Pending active records for an employee within [start, end], soonest first"""
        pass

    @abstractmethod
    async def delete_stale(self, cutoff: datetime) -> int:
        """
        Delete records executed before cutoff, and inactive never-executed records
        scheduled before cutoff. Returns count deleted.
        """
        pass

    @abstractmethod
    async def count_active(self) -> int:
        pass

    @abstractmethod
    async def count_pending(self, scheduled_before: datetime) -> int:
        """Active, unexecuted records with scheduled_for <= scheduled_before"""
        pass

    @abstractmethod
    async def count_executed_since(self, since: datetime) -> int:
        pass

    @abstractmethod
    async def count_active_by(self, field: str) -> Dict[str, int]:
        """Counts of active records grouped by "type" or "priority" """
        pass
