"""
Audit helpers

Snapshot sanitizing, change detection and the standard audit descriptions
shared by every audited entity.
"""

import json
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities.enums import AuditTargetType

# Keys never written to an audit snapshot
SENSITIVE_FIELDS = frozenset(
    {
        "password",
        "password_hash",
        "salt",
        "password_reset_token",
        "password_reset_expires",
        "refresh_token_hash",
        "token_hash",
        "api_key_hash",
        "__v",
        "_sa_instance_state",
    }
)

# Bookkeeping keys that never count as a change
IGNORED_DIFF_FIELDS = frozenset({"id", "created_at", "updated_at"})

CIRCULAR_MARKER = "[Circular]"

_DROP = object()

MODULE_BY_TARGET_TYPE = {
    AuditTargetType.lead.value: "leads",
    AuditTargetType.client.value: "clientes",
    AuditTargetType.employee.value: "empleados",
    AuditTargetType.project.value: "proyectos",
    AuditTargetType.task.value: "tareas",
    AuditTargetType.finance.value: "finanzas",
    AuditTargetType.invoice.value: "finanzas",
    AuditTargetType.transaction.value: "finanzas",
    AuditTargetType.campaign.value: "marketing",
    AuditTargetType.role.value: "configuracion",
    AuditTargetType.permission.value: "configuracion",
    AuditTargetType.notification.value: "notificaciones",
}


def _plain(value: Any, seen: set) -> Any:
    """Convert value into JSON-compatible data, _DROP for values that are never kept"""
    # str enums are also str, convert them first
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (UUID, Decimal)):
        return str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return _DROP
    if callable(value) and not isinstance(value, BaseModel):
        return _DROP

    if isinstance(value, BaseModel):
        value = value.model_dump()

    if isinstance(value, dict):
        if id(value) in seen:
            return CIRCULAR_MARKER
        seen = seen | {id(value)}
        plain = {}
        for key, item in value.items():
            key = str(key)
            if key in SENSITIVE_FIELDS:
                continue
            converted = _plain(item, seen)
            if converted is not _DROP:
                plain[key] = converted
        return plain

    if isinstance(value, (list, tuple, set, frozenset)):
        if id(value) in seen:
            return CIRCULAR_MARKER
        seen = seen | {id(value)}
        items = sorted(value, key=repr) if isinstance(value, (set, frozenset)) else value
        converted_items = (_plain(item, seen) for item in items)
        return [item for item in converted_items if item is not _DROP]

    return str(value)


def sanitize(record: Any) -> Dict[str, Any]:
    """
    Build a plain, comparable snapshot of a record for audit storage or diffing.

    Removes SENSITIVE_FIELDS at every depth, drops binary blobs and callables,
    converts models, dates, UUIDs, decimals and enums into JSON-compatible values,
    and replaces circular references with CIRCULAR_MARKER.

    Returns:
        A new dict; {} when record is None
    """
    if record is None:
        return {}

    snapshot = _plain(record, set())
    if not isinstance(snapshot, dict):
        return {}
    return snapshot


def _stable(value: Any) -> str:
    return json.dumps(value, sort_keys=True, default=str, separators=(",", ":"))


def changed_fields(
    before: Optional[Dict[str, Any]], after: Optional[Dict[str, Any]]
) -> List[str]:
    """
    Names of top-level fields whose values differ between two sanitized records.

    Values are compared through a key-sorted JSON rendering, so key order inside
    nested objects never counts as a change. A key present on one side only is a
    change. IGNORED_DIFF_FIELDS are skipped.

    Returns:
        Changed keys: keys of `before` in order, then keys only in `after`
    """
    before = before or {}
    after = after or {}

    keys = list(before.keys()) + [key for key in after.keys() if key not in before]

    changed = []
    for key in keys:
        if key in IGNORED_DIFF_FIELDS:
            continue
        if (key in before) != (key in after):
            changed.append(key)
        elif _stable(before[key]) != _stable(after[key]):
            changed.append(key)
    return changed


def module_for_target_type(target_type: str) -> str:
    """Audit module a target type belongs to, "otro" when unmapped"""
    return MODULE_BY_TARGET_TYPE.get(target_type, "otro")


def creation_description(target_type: str, target_name: str) -> str:
    return f"Creación de {target_type}: {target_name}"


def update_description(
    target_type: str, target_name: str, fields: Optional[Iterable[str]] = None
) -> str:
    fields = list(fields or [])
    if fields:
        return f"Actualización de {target_type}: {target_name} (campos: {', '.join(fields)})"
    return f"Actualización de {target_type}: {target_name}"


def deletion_description(target_type: str, target_name: str) -> str:
    return f"Eliminación de {target_type}: {target_name}"
