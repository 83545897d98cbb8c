from datetime import datetime, timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.app.use_cases.scheduled_notifications import (
    CheckLeadFollowUpsUseCase,
    CheckOverdueTasksUseCase,
    CheckUpcomingInvoicesUseCase,
    RunAllChecksUseCase,
    ScheduleNotificationCommand,
    ScheduleNotificationUseCase,
)
from src.app.services.audit_recorder import Actor
from src.domain.entities import (
    Invoice,
    Lead,
    NotificationFrequency,
    NotificationPriority,
    NotificationType,
    ScheduledNotification,
    Task,
)

NOW = datetime(2024, 5, 1, 12, 0)


def make_task(**overrides):
    values = dict(
        id=uuid4(),
        title="Preparar propuesta",
        assigned_to=uuid4(),
        due_date=NOW - timedelta(days=2),
    )
    values.update(overrides)
    return Task(**values)


def make_invoice(days_ahead, **overrides):
    values = dict(
        id=uuid4(),
        number="F-0042",
        total=1500.0,
        due_date=NOW + timedelta(days=days_ahead),
        created_by=uuid4(),
    )
    values.update(overrides)
    return Invoice(**values)


@pytest.mark.asyncio
async def test_overdue_task_gets_high_priority_reminder(mock_uow):
    task = make_task()
    mock_uow.tasks.get_overdue = AsyncMock(return_value=[task])
    mock_uow.tasks.get_due_between = AsyncMock(return_value=[])

    result = await CheckOverdueTasksUseCase(mock_uow).execute(now=NOW)

    assert result.value == 1
    scheduled = mock_uow.scheduled_notifications.create.await_args.args[0]
    assert scheduled.title == "Tarea Vencida"
    assert scheduled.priority == NotificationPriority.high
    assert scheduled.employee_id == task.assigned_to
    assert scheduled.entity_id == str(task.id)
    assert scheduled.scheduled_for == NOW
    assert scheduled.notification_metadata["is_overdue"] is True
    assert "29/04/2024" in scheduled.message


@pytest.mark.asyncio
async def test_overdue_task_with_pending_reminder_today_is_skipped(mock_uow):
    task = make_task()
    mock_uow.tasks.get_overdue = AsyncMock(return_value=[task])
    mock_uow.tasks.get_due_between = AsyncMock(return_value=[])
    existing = ScheduledNotification(
        title="Tarea Vencida",
        message="...",
        type=NotificationType.task,
        employee_id=task.assigned_to,
        scheduled_for=NOW - timedelta(hours=2),
        notification_metadata={"is_overdue": True},
    )
    mock_uow.scheduled_notifications.get_pending_for_entity = AsyncMock(return_value=[existing])

    result = await CheckOverdueTasksUseCase(mock_uow).execute(now=NOW)

    assert result.value == 0
    mock_uow.scheduled_notifications.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_due_soon_reminder_is_not_blocked_by_overdue_reminder(mock_uow):
    task = make_task(due_date=NOW + timedelta(hours=5))
    mock_uow.tasks.get_overdue = AsyncMock(return_value=[])
    mock_uow.tasks.get_due_between = AsyncMock(return_value=[task])
    overdue_reminder = ScheduledNotification(
        title="Tarea Vencida",
        message="...",
        type=NotificationType.task,
        employee_id=task.assigned_to,
        scheduled_for=NOW,
        notification_metadata={"is_overdue": True},
    )
    mock_uow.scheduled_notifications.get_pending_for_entity = AsyncMock(
        return_value=[overdue_reminder]
    )

    result = await CheckOverdueTasksUseCase(mock_uow).execute(now=NOW)

    assert result.value == 1
    scheduled = mock_uow.scheduled_notifications.create.await_args.args[0]
    assert scheduled.priority == NotificationPriority.medium
    assert scheduled.notification_metadata["is_due_soon"] is True


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "days_ahead, priority, phrase",
    [
        (1, NotificationPriority.high, "vence en 1 día "),
        (3, NotificationPriority.high, "vence en 3 días"),
        (5, NotificationPriority.medium, "vence en 5 días"),
    ],
)
async def test_invoice_reminder_priority(mock_uow, days_ahead, priority, phrase):
    invoice = make_invoice(days_ahead)
    mock_uow.invoices.get_due_between = AsyncMock(return_value=[invoice])

    result = await CheckUpcomingInvoicesUseCase(mock_uow).execute(now=NOW)

    assert result.value == 1
    scheduled = mock_uow.scheduled_notifications.create.await_args.args[0]
    assert scheduled.priority == priority
    assert phrase in scheduled.message
    assert scheduled.employee_id == invoice.created_by
    assert scheduled.notification_metadata["invoice_number"] == "F-0042"


@pytest.mark.asyncio
async def test_invoice_without_owner_is_skipped(mock_uow):
    mock_uow.invoices.get_due_between = AsyncMock(return_value=[make_invoice(2, created_by=None)])

    result = await CheckUpcomingInvoicesUseCase(mock_uow).execute(now=NOW)

    assert result.value == 0


@pytest.mark.asyncio
async def test_lead_follow_up_scheduled_at_interaction_time(mock_uow):
    lead = Lead(
        id=uuid4(),
        first_name="Carlos",
        last_name="Ruiz",
        company="Acme",
        current_stage="Pendiente Seguimiento",
        assigned_to=uuid4(),
        interaction_history=[
            {
                "type": "other",
                "title": "Seguimiento programado",
                "description": "Seguimiento: enviar cotización",
                "date": "2024-05-01T15:30:00Z",
            }
        ],
    )
    mock_uow.leads.get_assigned_in_stage = AsyncMock(return_value=[lead])

    result = await CheckLeadFollowUpsUseCase(mock_uow).execute(now=NOW)

    assert result.value == 1
    scheduled = mock_uow.scheduled_notifications.create.await_args.args[0]
    assert scheduled.scheduled_for == datetime(2024, 5, 1, 15, 30)
    assert scheduled.priority == NotificationPriority.high
    assert "Carlos Ruiz de Acme" in scheduled.message
    assert "Nota: enviar cotización" in scheduled.message


@pytest.mark.asyncio
async def test_lead_follow_up_on_other_day_is_ignored(mock_uow):
    lead = Lead(
        first_name="Carlos",
        current_stage="Pendiente Seguimiento",
        assigned_to=uuid4(),
        interaction_history=[
            {"type": "other", "title": "Seguimiento programado", "date": "2024-05-03T10:00:00"}
        ],
    )
    mock_uow.leads.get_assigned_in_stage = AsyncMock(return_value=[lead])

    result = await CheckLeadFollowUpsUseCase(mock_uow).execute(now=NOW)

    assert result.value == 0


@pytest.mark.asyncio
async def test_run_all_checks_isolates_failing_step(mock_uow):
    mock_uow.scheduled_notifications.get_due_ids = AsyncMock(return_value=[])
    mock_uow.leads.get_assigned_in_stage = AsyncMock(side_effect=RuntimeError("boom"))
    mock_uow.tasks.get_overdue = AsyncMock(return_value=[make_task()])
    mock_uow.tasks.get_due_between = AsyncMock(return_value=[])
    mock_uow.invoices.get_due_between = AsyncMock(return_value=[])
    mock_uow.scheduled_notifications.delete_stale = AsyncMock(return_value=4)

    result = await RunAllChecksUseCase(mock_uow).execute()

    assert result.value.executed == 0
    assert result.value.follow_ups == 0
    assert result.value.tasks == 1
    assert result.value.invoices == 0
    assert result.value.cleanup == 4


@pytest.mark.asyncio
async def test_schedule_rejects_past_date(mock_uow):
    command = ScheduleNotificationCommand(
        title="Recordatorio",
        message="Revisar contrato",
        type=NotificationType.system,
        employee_id=uuid4(),
        scheduled_for=datetime(2000, 1, 1),
    )

    result = await ScheduleNotificationUseCase(mock_uow).execute(command)

    assert result.error.code == "INVALID_SCHEDULE_DATE"
    mock_uow.scheduled_notifications.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_schedule_recurring_sets_next_execution_and_audits(mock_uow):
    when = datetime.now() + timedelta(days=30)
    command = ScheduleNotificationCommand(
        title="Reporte semanal",
        message="Enviar reporte",
        type=NotificationType.system,
        employee_id=uuid4(),
        scheduled_for=when,
        frequency=NotificationFrequency.weekly,
    )
    actor = Actor(id=uuid4(), name="Ana Pérez")

    result = await ScheduleNotificationUseCase(mock_uow).execute(command, actor=actor)

    assert result.value.next_execution == result.value.scheduled_for
    event = mock_uow.audit_events.create.await_args.args[0]
    assert event.action == "creación"
    assert event.actor_name == "Ana Pérez"


@pytest.mark.asyncio
async def test_schedule_audit_failure_keeps_record(mock_uow):
    command = ScheduleNotificationCommand(
        title="Recordatorio",
        message="Revisar contrato",
        type=NotificationType.system,
        employee_id=uuid4(),
        scheduled_for=datetime.now() + timedelta(days=2),
    )
    mock_uow.audit_events.create = AsyncMock(side_effect=RuntimeError("audit down"))

    result = await ScheduleNotificationUseCase(mock_uow).execute(
        command, actor=Actor(id=uuid4(), name="Ana Pérez")
    )

    assert result.error.code == "AUDIT_WRITE_FAILED"
    mock_uow.scheduled_notifications.create.assert_awaited_once()
    mock_uow.commit.assert_awaited_once()
