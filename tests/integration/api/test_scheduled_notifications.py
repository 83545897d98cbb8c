from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.app.use_cases.scheduled_notifications import (
    CheckOverdueTasksUseCase,
    ExecuteScheduledNotificationsUseCase,
)
from src.domain.base import utcnow
from src.domain.entities import (
    AuditEvent,
    Notification,
    NotificationFrequency,
    NotificationType,
    ScheduledNotification,
    Task,
)


async def add(db_session, *entities):
    db_session.add_all(entities)
    await db_session.commit()


async def all_of(db_session, model):
    return list((await db_session.exec(select(model))).all())


def due_record(frequency=NotificationFrequency.once, **overrides) -> ScheduledNotification:
    values = dict(
        title="Llamar al cliente",
        message="Recordatorio de llamada",
        type=NotificationType.client,
        employee_id=uuid4(),
        scheduled_for=utcnow() - timedelta(minutes=1),
        frequency=frequency,
    )
    values.update(overrides)
    return ScheduledNotification(**values)


@pytest.mark.asyncio
async def test_once_record_dispatches_exactly_one_notification(db_session, uow):
    record = due_record()
    await add(db_session, record)

    result = await ExecuteScheduledNotificationsUseCase(uow).execute()

    assert result.value == 1
    notifications = await all_of(db_session, Notification)
    assert len(notifications) == 1
    assert notifications[0].employee_id == record.employee_id
    assert notifications[0].notification_metadata["scheduled_notification_id"] == str(record.id)

    records = await all_of(db_session, ScheduledNotification)
    assert len(records) == 1
    assert records[0].executed is True
    assert records[0].executed_at is not None

    events = await all_of(db_session, AuditEvent)
    assert [event.action for event in events] == ["ejecución"]
    assert events[0].actor_name == "sistema"


@pytest.mark.asyncio
async def test_daily_record_gets_successor_and_is_not_redelivered(db_session, uow):
    record = due_record(NotificationFrequency.daily)
    original_time = record.scheduled_for
    await add(db_session, record)

    first = await ExecuteScheduledNotificationsUseCase(uow).execute()
    second = await ExecuteScheduledNotificationsUseCase(uow).execute()

    assert first.value == 1
    assert second.value == 0
    assert len(await all_of(db_session, Notification)) == 1

    pending = [r for r in await all_of(db_session, ScheduledNotification) if not r.executed]
    assert len(pending) == 1
    assert pending[0].scheduled_for == original_time + timedelta(days=1)
    assert pending[0].frequency == NotificationFrequency.daily


@pytest.mark.asyncio
async def test_overdue_producer_is_idempotent_within_a_day(db_session, uow):
    await add(
        db_session,
        Task(title="Preparar propuesta", assigned_to=uuid4(), due_date=utcnow() - timedelta(days=1)),
        Task(title="Sin asignar", due_date=utcnow() - timedelta(days=1)),
    )

    first = await CheckOverdueTasksUseCase(uow).execute()
    second = await CheckOverdueTasksUseCase(uow).execute()

    assert first.value == 1
    assert second.value == 0
    assert len(await all_of(db_session, ScheduledNotification)) == 1


@pytest.mark.asyncio
async def test_schedule_in_the_past_is_rejected(client: AsyncClient, employee):
    response = await client.post(
        "/api/scheduled-notifications",
        json={
            "title": "Recordatorio",
            "message": "Revisar contrato",
            "scheduled_for": (datetime.now(UTC) - timedelta(hours=1)).isoformat(),
        },
        headers=employee.headers,
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_SCHEDULE_DATE"


@pytest.mark.asyncio
async def test_schedule_list_upcoming_and_cancel(client: AsyncClient, admin, employee):
    scheduled = await client.post(
        "/api/scheduled-notifications",
        json={
            "title": "Reporte semanal",
            "message": "Enviar reporte",
            "frequency": "weekly",
            "scheduled_for": (datetime.now(UTC) + timedelta(days=2)).isoformat(),
            "metadata": {"report": "ventas"},
        },
        headers=employee.headers,
    )
    assert scheduled.status_code == 201
    data = scheduled.json()["data"]
    assert data["employee_id"] == str(employee.id)
    assert data["next_execution"] == data["scheduled_for"]
    assert data["metadata"] == {"report": "ventas"}

    upcoming = await client.get("/api/scheduled-notifications/upcoming", headers=employee.headers)
    assert [item["id"] for item in upcoming.json()["data"]] == [data["id"]]

    listed = await client.get("/api/scheduled-notifications", headers=admin.headers)
    assert listed.json()["pagination"]["total"] == 1

    cancelled = await client.delete(
        f"/api/scheduled-notifications/{data['id']}", headers=employee.headers
    )
    assert cancelled.status_code == 200
    assert cancelled.json()["data"]["is_active"] is False

    upcoming = await client.get("/api/scheduled-notifications/upcoming", headers=employee.headers)
    assert upcoming.json()["data"] == []


@pytest.mark.asyncio
async def test_cancel_executed_record_conflicts(client: AsyncClient, db_session, employee):
    record = due_record(executed=True, executed_at=utcnow())
    await add(db_session, record)

    response = await client.delete(
        f"/api/scheduled-notifications/{record.id}", headers=employee.headers
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "ALREADY_EXECUTED"


@pytest.mark.asyncio
async def test_manual_check_and_stats(client: AsyncClient, db_session, admin):
    await add(db_session, due_record(), due_record())

    check = await client.post("/api/scheduled-notifications/run-check", headers=admin.headers)
    assert check.status_code == 200
    assert check.json()["data"]["executed"] == 2

    stats = await client.get("/api/scheduled-notifications/stats", headers=admin.headers)
    assert stats.json()["data"]["executed_today"] == 2
    assert stats.json()["data"]["failed"] == 0


@pytest.mark.asyncio
async def test_jobs_status_requires_admin(client: AsyncClient, employee):
    response = await client.get("/api/scheduled-notifications/jobs", headers=employee.headers)

    assert response.status_code == 403
