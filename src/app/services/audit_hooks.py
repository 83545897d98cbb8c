"""
Entity lifecycle audit hooks

Turns create/update/delete of an audited entity into audit metadata
(AuditIntent). Hooks only describe what happened; persisting the event is the
job of AuditRecorder, after the business write has been committed.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Type, TypeVar
from uuid import UUID

from sqlmodel import SQLModel

from src.app.repositories.entity_repository import IEntityRepository
from src.app.services.audit_utils import (
    changed_fields,
    creation_description,
    deletion_description,
    sanitize,
    update_description,
)
from src.domain.base import utcnow
from src.domain.entities import (
    AuditAction,
    AuditTargetType,
    Invoice,
    Lead,
    Notification,
    Permission,
    Project,
    Role,
    ScheduledNotification,
    Task,
    Transaction,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=SQLModel)

# (previous snapshot, new snapshot, changed fields) -> (action, description) or None
TransitionHook = Callable[
    [Dict[str, Any], Dict[str, Any], List[str]], Optional[Tuple[AuditAction, str]]
]


@dataclass
class AuditIntent:
    """Audit metadata attached to one entity mutation"""

    action: AuditAction
    description: str
    target_type: AuditTargetType
    changed_fields: List[str] = field(default_factory=list)
    previous_data: Optional[Dict[str, Any]] = None
    new_data: Optional[Dict[str, Any]] = None


@dataclass
class EntityAuditHooks:
    """
    Audit hooks of one entity kind.

    The generic hook always produces creation/update/deletion metadata.
    Transition hooks run afterwards, in order, and the last one that matches
    overrides action and description. A failing transition hook is logged and
    skipped so it can never block the mutation.
    """

    target_type: AuditTargetType
    label: Callable[[Dict[str, Any]], str]
    noun: Optional[str] = None
    transitions: List[TransitionHook] = field(default_factory=list)

    @property
    def display_noun(self) -> str:
        return self.noun or self.target_type.value

    def snapshot(self, entity: Any) -> Dict[str, Any]:
        return sanitize(entity)

    def creation_intent(self, entity: Any) -> AuditIntent:
        after = self.snapshot(entity)
        return AuditIntent(
            action=AuditAction.creation,
            description=creation_description(self.display_noun, self.label(after)),
            target_type=self.target_type,
            new_data=after,
        )

    def update_intent(
        self, before: Dict[str, Any], entity: Any
    ) -> Optional[AuditIntent]:
        """None when the update changed nothing"""
        after = self.snapshot(entity)
        changed = changed_fields(before, after)
        if not changed:
            return None

        intent = AuditIntent(
            action=AuditAction.update,
            description=update_description(self.display_noun, self.label(after), changed),
            target_type=self.target_type,
            changed_fields=changed,
            previous_data=before,
            new_data=after,
        )

        for transition in self.transitions:
            try:
                override = transition(before, after, changed)
            except Exception:
                logger.exception(f"Audit transition hook failed for {self.target_type.value}")
                continue
            if override is not None:
                intent.action, intent.description = override

        return intent

    def deletion_intent(self, entity: Any) -> AuditIntent:
        before = self.snapshot(entity)
        return AuditIntent(
            action=AuditAction.deletion,
            description=deletion_description(self.display_noun, self.label(before)),
            target_type=self.target_type,
            previous_data=before,
        )


def field_transition(
    fields: Tuple[str, ...],
    action: AuditAction,
    describe: Callable[[Dict[str, Any], Dict[str, Any]], str],
    when: Optional[Callable[[Any, Any], bool]] = None,
) -> TransitionHook:
    """
    Build a transition hook that fires when any of `fields` changed.

    `when(old, new)` narrows the match on the first field's values.
    """

    def hook(before, after, changed):
        if not any(name in changed for name in fields):
            return None
        if when is not None and not when(before.get(fields[0]), after.get(fields[0])):
            return None
        return action, describe(before, after)

    return hook


def _change(field_name: str) -> Callable[[Dict[str, Any], Dict[str, Any]], str]:
    def render(before, after):
        return f"{before.get(field_name)} → {after.get(field_name)}"

    return render


def _project_label(data: Dict[str, Any]) -> str:
    return str(data.get("name", ""))


def _task_label(data: Dict[str, Any]) -> str:
    return str(data.get("title", ""))


def _lead_label(data: Dict[str, Any]) -> str:
    return f"{data.get('first_name', '')} {data.get('last_name', '')}".strip()


def _invoice_label(data: Dict[str, Any]) -> str:
    return f"#{data.get('number', '')}"


def _transaction_label(data: Dict[str, Any]) -> str:
    return data.get("description") or f"{data.get('type', '')} {data.get('amount', '')}"


PROJECT_HOOKS = EntityAuditHooks(
    target_type=AuditTargetType.project,
    label=_project_label,
    transitions=[
        field_transition(
            ("start_date", "end_date"),
            AuditAction.dates_update,
            lambda b, a: f"Actualización de fechas del proyecto: {_project_label(a)}",
        ),
        field_transition(
            ("progress",),
            AuditAction.progress_update,
            lambda b, a: (
                f"Actualización de progreso del proyecto: {_project_label(a)} "
                f"({b.get('progress')}% → {a.get('progress')}%)"
            ),
        ),
        field_transition(
            ("status",),
            AuditAction.status_change,
            lambda b, a: (
                f"Cambio de estado del proyecto: {_project_label(a)} "
                f"({_change('status')(b, a)})"
            ),
        ),
    ],
)

TASK_HOOKS = EntityAuditHooks(
    target_type=AuditTargetType.task,
    label=_task_label,
    transitions=[
        field_transition(
            ("assigned_to",),
            AuditAction.assignment,
            lambda b, a: f"Asignación de tarea: {_task_label(a)}",
            when=lambda old, new: new is not None,
        ),
        field_transition(
            ("status",),
            AuditAction.status_change,
            lambda b, a: (
                f"Cambio de estado de tarea: {_task_label(a)} ({_change('status')(b, a)})"
            ),
        ),
    ],
)

LEAD_HOOKS = EntityAuditHooks(
    target_type=AuditTargetType.lead,
    label=_lead_label,
    transitions=[
        field_transition(
            ("current_stage",),
            AuditAction.status_change,
            lambda b, a: (
                f"Cambio de etapa del lead: {_lead_label(a)} "
                f"({_change('current_stage')(b, a)})"
            ),
        ),
    ],
)

INVOICE_HOOKS = EntityAuditHooks(
    target_type=AuditTargetType.invoice,
    label=_invoice_label,
    transitions=[
        field_transition(
            ("status",),
            AuditAction.state_update,
            lambda b, a: (
                f"Actualización de estado de factura: {_invoice_label(a)} "
                f"({_change('status')(b, a)})"
            ),
        ),
    ],
)

TRANSACTION_HOOKS = EntityAuditHooks(
    target_type=AuditTargetType.transaction,
    label=_transaction_label,
    transitions=[
        field_transition(
            ("amount",),
            AuditAction.value_update,
            lambda b, a: (
                f"Actualización de valor de transacción: {_transaction_label(a)} "
                f"({_change('amount')(b, a)})"
            ),
        ),
    ],
)

ROLE_HOOKS = EntityAuditHooks(
    target_type=AuditTargetType.role,
    label=lambda data: str(data.get("name", "")),
    transitions=[
        field_transition(
            ("permissions",),
            AuditAction.assignment,
            lambda b, a: f"Asignación de permisos al rol: {a.get('name', '')}",
        ),
    ],
)

PERMISSION_HOOKS = EntityAuditHooks(
    target_type=AuditTargetType.permission,
    label=lambda data: str(data.get("name", "")),
)

NOTIFICATION_HOOKS = EntityAuditHooks(
    target_type=AuditTargetType.notification,
    label=lambda data: str(data.get("title", "")),
    transitions=[
        field_transition(
            ("is_read",),
            AuditAction.state_update,
            lambda b, a: f"Notificación marcada como leída: {a.get('title', '')}",
            when=lambda old, new: bool(new),
        ),
    ],
)

SCHEDULED_NOTIFICATION_HOOKS = EntityAuditHooks(
    target_type=AuditTargetType.notification,
    label=lambda data: str(data.get("title", "")),
    noun="notificación programada",
    transitions=[
        field_transition(
            ("executed",),
            AuditAction.execution,
            lambda b, a: f"Ejecución de notificación programada: {a.get('title', '')}",
            when=lambda old, new: not old and bool(new),
        ),
    ],
)

AUDIT_HOOKS: Dict[Type[SQLModel], EntityAuditHooks] = {
    Project: PROJECT_HOOKS,
    Task: TASK_HOOKS,
    Lead: LEAD_HOOKS,
    Invoice: INVOICE_HOOKS,
    Transaction: TRANSACTION_HOOKS,
    Role: ROLE_HOOKS,
    Permission: PERMISSION_HOOKS,
    Notification: NOTIFICATION_HOOKS,
    ScheduledNotification: SCHEDULED_NOTIFICATION_HOOKS,
}


def hooks_for(model: Type[SQLModel]) -> EntityAuditHooks:
    return AUDIT_HOOKS[model]


async def create_with_audit(
    repository: IEntityRepository[T], entity: T, hooks: EntityAuditHooks
) -> Tuple[T, AuditIntent]:
    entity = await repository.create(entity)
    return entity, hooks.creation_intent(entity)


async def update_with_audit(
    repository: IEntityRepository[T],
    entity_id: UUID,
    patch: Dict[str, Any],
    hooks: EntityAuditHooks,
) -> Tuple[Optional[T], Optional[AuditIntent]]:
    """
    Apply a patch to a stored entity and describe the change.

    The previous snapshot is taken before the patch touches the entity, so the
    diff always compares the stored state with the new one.

    Returns:
        (updated entity, intent), or (None, None) when the entity does not exist
    """
    entity = await repository.get_by_id(entity_id)
    if entity is None:
        return None, None

    before = hooks.snapshot(entity)

    for name, value in patch.items():
        setattr(entity, name, value)
    if hasattr(entity, "updated_at"):
        entity.updated_at = utcnow()

    entity = await repository.update(entity)
    return entity, hooks.update_intent(before, entity)


async def delete_with_audit(
    repository: IEntityRepository[T], entity_id: UUID, hooks: EntityAuditHooks
) -> Tuple[Optional[T], Optional[AuditIntent]]:
    entity = await repository.get_by_id(entity_id)
    if entity is None:
        return None, None

    intent = hooks.deletion_intent(entity)
    await repository.delete(entity)
    return entity, intent
