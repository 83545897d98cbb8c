"""
Audited entity kinds

Maps the public name of each audited entity to its model, unit-of-work
repository and audit hooks.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Type

from pydantic import ValidationError
from sqlmodel import SQLModel

from libs.result import Error
from src.app.services.audit_hooks import (
    INVOICE_HOOKS,
    LEAD_HOOKS,
    PERMISSION_HOOKS,
    PROJECT_HOOKS,
    ROLE_HOOKS,
    TASK_HOOKS,
    TRANSACTION_HOOKS,
    EntityAuditHooks,
)
from src.domain.base import to_naive_utc
from src.domain.entities import Invoice, Lead, Permission, Project, Role, Task, Transaction

# Managed by the store, never accepted from callers
READ_ONLY_FIELDS = frozenset({"id", "created_at", "updated_at"})


@dataclass(frozen=True)
class EntityKind:
    name: str
    model: Type[SQLModel]
    repository: str
    hooks: EntityAuditHooks

    def repository_of(self, uow):
        return getattr(uow, self.repository)


ENTITY_KINDS: Dict[str, EntityKind] = {
    kind.name: kind
    for kind in (
        EntityKind("projects", Project, "projects", PROJECT_HOOKS),
        EntityKind("tasks", Task, "tasks", TASK_HOOKS),
        EntityKind("leads", Lead, "leads", LEAD_HOOKS),
        EntityKind("invoices", Invoice, "invoices", INVOICE_HOOKS),
        EntityKind("transactions", Transaction, "transactions", TRANSACTION_HOOKS),
        EntityKind("roles", Role, "roles", ROLE_HOOKS),
        EntityKind("permissions", Permission, "permissions", PERMISSION_HOOKS),
    )
}


def get_kind(name: str) -> Optional[EntityKind]:
    return ENTITY_KINDS.get(name)


def unknown_kind(name: str) -> Error:
    return Error(
        "UNKNOWN_ENTITY_KIND",
        f"Unknown entity kind: {name}",
        reason=f"Known kinds: {', '.join(sorted(ENTITY_KINDS))}",
    )


def validation_error(exc: ValidationError) -> Error:
    fields = sorted({".".join(str(part) for part in err["loc"]) for err in exc.errors()})
    return Error("VALIDATION_ERROR", "Invalid entity data", reason=", ".join(fields))


def unknown_fields(kind: EntityKind, data: Dict[str, Any]) -> Optional[Error]:
    unknown = sorted(set(data) - set(kind.model.model_fields) | (set(data) & READ_ONLY_FIELDS))
    if unknown:
        return Error("VALIDATION_ERROR", "Unknown or read-only fields", reason=", ".join(unknown))
    return None


def validate_entity(kind: EntityKind, data: Dict[str, Any]) -> SQLModel:
    """
    Build a validated model instance. Aware datetimes are stored as naive UTC.

    Raises:
        ValidationError: when data does not satisfy the model
    """
    entity = kind.model.model_validate(data)
    for name in kind.model.model_fields:
        value = getattr(entity, name, None)
        if isinstance(value, datetime) and value.tzinfo is not None:
            setattr(entity, name, to_naive_utc(value))
    return entity
