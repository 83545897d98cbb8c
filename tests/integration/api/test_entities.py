import pytest
from httpx import AsyncClient

from src.adapter.repositories.audit_event_repository import AuditEventRepository


async def create_project(client: AsyncClient, headers: dict, **overrides) -> dict:
    payload = {"name": "Portal de clientes", "start_date": "2024-01-10T00:00:00Z"}
    payload.update(overrides)
    response = await client.post("/api/entities/projects", json=payload, headers=headers)
    assert response.status_code == 201
    return response.json()["data"]


async def project_events(client: AsyncClient, headers: dict, project_id: str) -> list:
    response = await client.get(
        "/api/audit/logs",
        params={"targetId": project_id, "sortBy": "timestamp"},
        headers=headers,
    )
    return response.json()["data"]


@pytest.mark.asyncio
async def test_project_status_change_is_audited(client: AsyncClient, admin):
    project = await create_project(client, admin.headers)

    response = await client.patch(
        f"/api/entities/projects/{project['id']}",
        json={"status": "completed"},
        headers=admin.headers,
    )

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "completed"

    events = await project_events(client, admin.headers, project["id"])
    assert [event["action"] for event in events] == ["creación", "cambio_estado"]
    change = events[1]
    assert change["previous_data"]["status"] == "in_progress"
    assert change["new_data"]["status"] == "completed"
    assert "in_progress → completed" in change["description"]


@pytest.mark.asyncio
async def test_noop_update_is_not_audited(client: AsyncClient, admin):
    project = await create_project(client, admin.headers, progress=20)

    await client.patch(
        f"/api/entities/projects/{project['id']}", json={"progress": 20}, headers=admin.headers
    )

    events = await project_events(client, admin.headers, project["id"])
    assert [event["action"] for event in events] == ["creación"]


@pytest.mark.asyncio
async def test_delete_is_audited_with_previous_snapshot(client: AsyncClient, admin):
    project = await create_project(client, admin.headers)

    deleted = await client.delete(f"/api/entities/projects/{project['id']}", headers=admin.headers)
    missing = await client.get(f"/api/entities/projects/{project['id']}", headers=admin.headers)

    assert deleted.status_code == 200
    assert missing.status_code == 404
    events = await project_events(client, admin.headers, project["id"])
    assert events[-1]["action"] == "eliminación"
    assert events[-1]["previous_data"]["name"] == "Portal de clientes"
    assert events[-1]["new_data"] is None


@pytest.mark.asyncio
async def test_audit_failure_keeps_the_update(client: AsyncClient, admin, monkeypatch):
    project = await create_project(client, admin.headers)

    async def failing_create(self, audit_event):
        raise RuntimeError("audit store unavailable")

    monkeypatch.setattr(AuditEventRepository, "create", failing_create)

    response = await client.patch(
        f"/api/entities/projects/{project['id']}", json={"progress": 60}, headers=admin.headers
    )

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "AUDIT_WRITE_FAILED"

    stored = await client.get(f"/api/entities/projects/{project['id']}", headers=admin.headers)
    assert stored.json()["data"]["progress"] == 60


@pytest.mark.asyncio
async def test_unknown_kind_and_invalid_data(client: AsyncClient, admin):
    unknown = await client.post("/api/entities/widgets", json={}, headers=admin.headers)
    invalid = await client.post(
        "/api/entities/projects",
        json={"name": "X", "start_date": "2024-01-10", "progress": 500},
        headers=admin.headers,
    )

    assert unknown.status_code == 404
    assert unknown.json()["error"]["code"] == "UNKNOWN_ENTITY_KIND"
    assert invalid.status_code == 400
    assert invalid.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_role_changes_are_filed_under_configuration(client: AsyncClient, admin):
    created = await client.post(
        "/api/entities/roles",
        json={"name": "ventas", "permissions": ["leads:read"]},
        headers=admin.headers,
    )
    assert created.status_code == 201

    response = await client.get(
        "/api/audit/logs", params={"module": "configuracion"}, headers=admin.headers
    )

    event = response.json()["data"][0]
    assert event["target_type"] == "rol"
    assert event["description"] == "Creación de rol: ventas"
    assert event["new_data"]["permissions"] == ["leads:read"]
