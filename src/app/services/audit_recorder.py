"""
Audit Recorder

Write path of the audit log: builds one AuditEvent and persists it.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional
from uuid import UUID

from libs.result import Error
from src.app.services.audit_hooks import AuditIntent
from src.app.services.audit_utils import module_for_target_type, sanitize
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditEvent, AuditTargetType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Actor:
    """Identity an audited action is attributed to"""

    id: UUID
    name: str
    ip: str = "0.0.0.0"
    user_agent: Optional[str] = None


# Actor used by cron jobs; its events are hidden from default audit queries
SYSTEM_ACTOR = Actor(id=UUID(int=0), name="sistema")


class AuditWriteError(Exception):
    """Raised when an audit event could not be persisted"""


def audit_write_failed(exc: AuditWriteError) -> Error:
    """Error returned by use cases whose business write succeeded but audit did not"""
    return Error(
        "AUDIT_WRITE_FAILED",
        "Change saved but the audit record could not be written",
        reason=str(exc),
    )


class AuditRecorder:
    """
    Appends audit events to the audit log.

    Business Rules:
    - Insert-only, existing events are never touched
    - Snapshots are sanitized before storage
    - Each event is committed on its own, after the business write it describes.
      A failed audit write is logged and raised as AuditWriteError; the business
      write is not rolled back (fail-open).
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def record(
        self,
        actor: Actor,
        action: AuditAction,
        description: str,
        target_type: AuditTargetType,
        target_id: UUID,
        previous_data: Optional[Any] = None,
        new_data: Optional[Any] = None,
        module: Optional[str] = None,
    ) -> AuditEvent:
        event = AuditEvent(
            actor_id=actor.id,
            actor_name=actor.name,
            action=action.value,
            description=description,
            target_type=target_type.value,
            target_id=target_id,
            previous_data=sanitize(previous_data) if previous_data is not None else None,
            new_data=sanitize(new_data) if new_data is not None else None,
            module=module or module_for_target_type(target_type.value),
            ip=actor.ip,
            user_agent=actor.user_agent,
        )

        try:
            event = await self.uow.audit_events.create(event)
            await self.uow.commit()
        except Exception as exc:
            logger.exception(
                f"Failed to persist audit event: {action.value} {target_type.value} {target_id}"
            )
            await self.uow.rollback()
            raise AuditWriteError(str(exc)) from exc

        return event

    async def record_intent(
        self,
        actor: Actor,
        intent: AuditIntent,
        target_id: UUID,
        module: Optional[str] = None,
    ) -> AuditEvent:
        """Persist the audit metadata produced by an entity lifecycle hook"""
        return await self.record(
            actor=actor,
            action=intent.action,
            description=intent.description,
            target_type=intent.target_type,
            target_id=target_id,
            previous_data=intent.previous_data,
            new_data=intent.new_data,
            module=module,
        )
