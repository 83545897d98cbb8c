"""
Backoffice Domain Enums

All enumeration types used across domain entities.
Audit vocabularies are persisted verbatim, filters and statistics depend on them.
"""

from enum import Enum


class AuditAction(str, Enum):
    """Kind of audited action"""

    creation = "creación"
    update = "actualización"
    deletion = "eliminación"
    login = "login"
    logout = "logout"
    export = "exportación"
    assignment = "asignación"
    status_change = "cambio_estado"
    execution = "ejecución"
    value_update = "actualización_valor"
    state_update = "actualización_estado"
    progress_update = "actualización_progreso"
    dates_update = "actualización_fechas"
    other = "otro"


class AuditTargetType(str, Enum):
    """Domain noun an audit event refers to"""

    lead = "lead"
    client = "cliente"
    employee = "empleado"
    project = "proyecto"
    task = "tarea"
    finance = "finanzas"
    campaign = "campaña"
    role = "rol"
    permission = "permiso"
    department = "departamento"
    invoice = "factura"
    transaction = "transacción"
    notification = "notificación"
    report = "reporte"
    metric = "métrica"
    comment = "comentario"
    session = "sesión"
    other = "otro"


class NotificationType(str, Enum):
    """Category of a live or scheduled notification"""

    task = "task"
    client = "client"
    event = "event"
    employee = "employee"
    invoice = "invoice"
    project = "project"
    system = "system"
    lead = "lead"


class NotificationEntityType(str, Enum):
    """Subject record referenced by a notification"""

    task = "task"
    client = "client"
    event = "event"
    employee = "employee"
    invoice = "invoice"
    project = "project"
    system = "system"
    lead = "lead"
    other = "other"


class NotificationPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class NotificationFrequency(str, Enum):
    """Recurrence of a scheduled notification"""

    once = "once"
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"


class ProjectStatus(str, Enum):
    pending = "pending"
    planning = "planning"
    active = "active"
    in_progress = "in_progress"
    completed = "completed"
    paused = "paused"
    canceled = "canceled"


class TaskStatus(str, Enum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"
    cancelled = "cancelled"


class InvoiceStatus(str, Enum):
    draft = "draft"
    sent = "sent"
    paid = "paid"
    partially_paid = "partially_paid"
    overdue = "overdue"
    cancelled = "cancelled"


class TransactionType(str, Enum):
    income = "income"
    expense = "expense"
    transfer = "transfer"
