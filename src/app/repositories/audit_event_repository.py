from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import AuditEvent

# Actor names and module written by automated jobs, hidden unless requested
SYSTEM_ACTOR_NAMES = ("sistema", "Usuario desconocido")
SYSTEM_MODULE = "sistema"

SORTABLE_FIELDS = ("timestamp", "action", "module", "target_type", "actor_name")


class AuditLogFilters(BaseModel):
    """Filters accepted by audit log queries. Unset fields do not filter."""

    actor_id: Optional[UUID] = None
    action: Optional[str] = None
    module: Optional[str] = None
    target_type: Optional[str] = None
    target_id: Optional[UUID] = None
    search_text: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    include_system: bool = False


class IAuditEventRepository(ABC):
    """AuditEvent repository interface - application layer"""

    @abstractmethod
    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Append a new audit event (immutable)"""
        pass

    @abstractmethod
    async def get_by_id(self, event_id: UUID) -> Optional[AuditEvent]:
        """Get audit event by ID"""
        pass

    @abstractmethod
    async def query(
        self,
        filters: AuditLogFilters,
        page: int = 1,
        limit: int = 20,
        sort_by: str = "-timestamp",
    ) -> Tuple[List[AuditEvent], int]:
        """
        Filtered, sorted, offset-paginated query.

        sort_by is a field name from SORTABLE_FIELDS, prefixed with "-" for
        descending order.

        Returns:
            Tuple of (events on the requested page, total matching events)
        """
        pass

    @abstractmethod
    async def statistics(self, filters: AuditLogFilters) -> Dict[str, Any]:
        """
        Aggregate counts for the events matching filters.

        Returns:
            Dict with action_stats, module_stats, target_type_stats,
            user_stats (top 10 actors), daily_stats and total
        """
        pass

    @abstractmethod
    async def recent(self, limit: int = 10, include_system: bool = False) -> List[AuditEvent]:
        """Most recent events, newest first"""
        pass

    @abstractmethod
    async def count(
        self, since: Optional[datetime] = None, before: Optional[datetime] = None
    ) -> int:
        """Count events with since <= timestamp < before (either bound optional)"""
        pass

    @abstractmethod
    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete every event with timestamp < cutoff. Returns count deleted."""
        pass

    @abstractmethod
    async def archive_older_than(self, cutoff: datetime) -> int:
        """Archive (permanently remove) events with timestamp < cutoff. Returns count."""
        pass

    @abstractmethod
    async def optimize_indexes(self) -> None:
        """Ensure declared indexes exist and refresh planner statistics"""
        pass
