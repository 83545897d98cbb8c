from datetime import datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.app.services.audit_hooks import (
    PROJECT_HOOKS,
    ROLE_HOOKS,
    SCHEDULED_NOTIFICATION_HOOKS,
    TASK_HOOKS,
    TRANSACTION_HOOKS,
    EntityAuditHooks,
    delete_with_audit,
    update_with_audit,
)
from src.domain.entities import (
    AuditAction,
    AuditTargetType,
    NotificationType,
    Project,
    ProjectStatus,
    Role,
    ScheduledNotification,
    Task,
    TaskStatus,
    Transaction,
    TransactionType,
)


def _project(**overrides):
    data = {"name": "Alpha", "start_date": datetime(2024, 1, 1), "status": ProjectStatus.pending}
    data.update(overrides)
    return Project(**data)


def _repository(entity):
    repository = MagicMock()
    repository.get_by_id = AsyncMock(return_value=entity)
    repository.update = AsyncMock(side_effect=lambda e: e)
    repository.delete = AsyncMock()
    return repository


def test_creation_intent():
    project = _project()

    intent = PROJECT_HOOKS.creation_intent(project)

    assert intent.action == AuditAction.creation
    assert intent.target_type == AuditTargetType.project
    assert intent.description == "Creación de proyecto: Alpha"
    assert intent.previous_data is None
    assert intent.new_data["name"] == "Alpha"


def test_update_intent_generic_change():
    project = _project()
    before = PROJECT_HOOKS.snapshot(project)
    project.notes = "Kick-off done"

    intent = PROJECT_HOOKS.update_intent(before, project)

    assert intent.action == AuditAction.update
    assert intent.changed_fields == ["notes"]
    assert intent.description == "Actualización de proyecto: Alpha (campos: notes)"
    assert intent.previous_data["notes"] == ""
    assert intent.new_data["notes"] == "Kick-off done"


def test_update_intent_without_changes_is_none():
    project = _project()

    assert PROJECT_HOOKS.update_intent(PROJECT_HOOKS.snapshot(project), project) is None


def test_project_status_change_overrides_action():
    project = _project()
    before = PROJECT_HOOKS.snapshot(project)
    project.status = ProjectStatus.completed

    intent = PROJECT_HOOKS.update_intent(before, project)

    assert intent.action == AuditAction.status_change
    assert "pending → completed" in intent.description
    assert intent.changed_fields == ["status"]


def test_project_progress_and_dates():
    project = _project()
    before = PROJECT_HOOKS.snapshot(project)
    project.progress = 40

    assert PROJECT_HOOKS.update_intent(before, project).action == AuditAction.progress_update

    project = _project()
    before = PROJECT_HOOKS.snapshot(project)
    project.end_date = datetime(2024, 6, 30)

    assert PROJECT_HOOKS.update_intent(before, project).action == AuditAction.dates_update


def test_task_assignment_and_status():
    task = Task(title="Write report", due_date=datetime(2024, 5, 1))
    before = TASK_HOOKS.snapshot(task)
    task.assigned_to = uuid4()

    assert TASK_HOOKS.update_intent(before, task).action == AuditAction.assignment

    before = TASK_HOOKS.snapshot(task)
    task.status = TaskStatus.completed

    assert TASK_HOOKS.update_intent(before, task).action == AuditAction.status_change


def test_transaction_amount_and_role_permissions():
    transaction = Transaction(type=TransactionType.income, amount=100, description="Pago")
    before = TRANSACTION_HOOKS.snapshot(transaction)
    transaction.amount = 150

    assert TRANSACTION_HOOKS.update_intent(before, transaction).action == AuditAction.value_update

    role = Role(name="ventas", permissions=["leads.read"])
    before = ROLE_HOOKS.snapshot(role)
    role.permissions = ["leads.read", "leads.write"]

    assert ROLE_HOOKS.update_intent(before, role).action == AuditAction.assignment


def test_scheduled_notification_execution():
    scheduled = ScheduledNotification(
        title="Reminder",
        message="Call the client",
        type=NotificationType.lead,
        employee_id=uuid4(),
        scheduled_for=datetime(2024, 5, 1),
    )
    before = SCHEDULED_NOTIFICATION_HOOKS.snapshot(scheduled)
    scheduled.executed = True
    scheduled.executed_at = datetime(2024, 5, 1, 0, 5)

    intent = SCHEDULED_NOTIFICATION_HOOKS.update_intent(before, scheduled)

    assert intent.action == AuditAction.execution
    assert intent.description == "Ejecución de notificación programada: Reminder"


def test_failing_transition_hook_is_skipped(caplog):
    def broken(before, after, changed):
        raise RuntimeError("boom")

    hooks = EntityAuditHooks(
        target_type=AuditTargetType.project,
        label=lambda data: data.get("name", ""),
        transitions=[broken],
    )
    project = _project()
    before = hooks.snapshot(project)
    project.notes = "changed"

    intent = hooks.update_intent(before, project)

    assert intent.action == AuditAction.update
    assert intent.changed_fields == ["notes"]
    assert "Audit transition hook failed for proyecto" in caplog.text


@pytest.mark.asyncio
async def test_update_with_audit_snapshots_before_patch():
    project = _project()
    repository = _repository(project)

    entity, intent = await update_with_audit(
        repository, project.id, {"status": ProjectStatus.active, "progress": 20}, PROJECT_HOOKS
    )

    assert entity.status == ProjectStatus.active
    assert intent.previous_data["status"] == "pending"
    assert intent.new_data["status"] == "active"
    assert intent.changed_fields == ["status", "progress"]
    assert intent.action == AuditAction.status_change
    repository.update.assert_awaited_once_with(project)


@pytest.mark.asyncio
async def test_update_with_audit_missing_target():
    repository = _repository(None)

    entity, intent = await update_with_audit(repository, uuid4(), {"name": "x"}, PROJECT_HOOKS)

    assert entity is None
    assert intent is None
    repository.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_with_audit():
    project = _project()
    repository = _repository(project)

    entity, intent = await delete_with_audit(repository, project.id, PROJECT_HOOKS)

    assert entity is project
    assert intent.action == AuditAction.deletion
    assert intent.previous_data["name"] == "Alpha"
    repository.delete.assert_awaited_once_with(project)
