from datetime import date, timedelta
from unittest.mock import AsyncMock

import pytest

from src.app.repositories.audit_event_repository import AuditLogFilters
from src.app.use_cases.audit import (
    ApplyRetentionPolicyUseCase,
    ArchiveAuditLogsUseCase,
    GetAuditLogsUseCase,
    GetStorageStatsUseCase,
    RunAuditMaintenanceUseCase,
)
from src.domain.base import utcnow


@pytest.mark.asyncio
async def test_get_audit_logs_paginates(mock_uow):
    mock_uow.audit_events.query = AsyncMock(return_value=([], 45))

    result = await GetAuditLogsUseCase(mock_uow).execute(
        AuditLogFilters(module="proyectos"), page=2, limit=20, sort_by="-timestamp"
    )

    assert result.is_ok()
    assert result.value["total"] == 45
    assert result.value["pages"] == 3
    assert result.value["page"] == 2
    mock_uow.audit_events.query.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_audit_logs_rejects_unknown_sort_field(mock_uow):
    mock_uow.audit_events.query = AsyncMock()

    result = await GetAuditLogsUseCase(mock_uow).execute(AuditLogFilters(), sort_by="-password")

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    mock_uow.audit_events.query.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_audit_logs_rejects_inverted_date_range(mock_uow):
    filters = AuditLogFilters(start_date=date(2024, 5, 2), end_date=date(2024, 5, 1))

    result = await GetAuditLogsUseCase(mock_uow).execute(filters)

    assert result.error.code == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_retention_uses_cutoff_from_days(mock_uow):
    mock_uow.audit_events.delete_older_than = AsyncMock(return_value=7)

    before = utcnow()
    result = await ApplyRetentionPolicyUseCase(mock_uow).execute(365)

    assert result.value.deleted_count == 7
    cutoff = mock_uow.audit_events.delete_older_than.await_args.args[0]
    assert abs((before - timedelta(days=365)) - cutoff) < timedelta(seconds=5)
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_retention_below_minimum_window_is_rejected(mock_uow):
    mock_uow.audit_events.delete_older_than = AsyncMock()

    result = await ApplyRetentionPolicyUseCase(mock_uow, min_days=30).execute(29)

    assert result.is_err()
    assert result.error.code == "INVALID_RETENTION_DAYS"
    mock_uow.audit_events.delete_older_than.assert_not_awaited()


@pytest.mark.asyncio
async def test_archive_returns_count(mock_uow):
    mock_uow.audit_events.archive_older_than = AsyncMock(return_value=3)

    result = await ArchiveAuditLogsUseCase(mock_uow).execute(90)

    assert result.value.archived_count == 3
    assert result.value.archive_days == 90


@pytest.mark.asyncio
async def test_storage_stats(mock_uow):
    mock_uow.audit_events.count = AsyncMock(side_effect=[1024, 10, 100, 500, 524])

    result = await GetStorageStatsUseCase(mock_uow).execute()

    assert result.value.total_logs == 1024
    assert result.value.logs_older_than_365_days == 524
    assert result.value.estimated_size_mb == 2.0


@pytest.mark.asyncio
async def test_maintenance_runs_archive_then_retention(mock_uow):
    calls = []
    mock_uow.audit_events.count = AsyncMock(return_value=0)
    mock_uow.audit_events.archive_older_than = AsyncMock(
        side_effect=lambda cutoff: calls.append("archive") or 4
    )
    mock_uow.audit_events.delete_older_than = AsyncMock(
        side_effect=lambda cutoff: calls.append("retention") or 1
    )
    mock_uow.audit_events.optimize_indexes = AsyncMock()

    result = await RunAuditMaintenanceUseCase(mock_uow).execute(
        archive_days=90, retention_days=365
    )

    assert calls == ["archive", "retention"]
    assert result.value.archived_count == 4
    assert result.value.deleted_count == 1
    assert result.value.indexes_optimized is True
    mock_uow.audit_events.optimize_indexes.assert_awaited_once()


@pytest.mark.asyncio
async def test_maintenance_stops_on_invalid_window(mock_uow):
    mock_uow.audit_events.count = AsyncMock(return_value=0)
    mock_uow.audit_events.archive_older_than = AsyncMock()

    result = await RunAuditMaintenanceUseCase(mock_uow).execute(archive_days=7)

    assert result.error.code == "INVALID_RETENTION_DAYS"
    mock_uow.audit_events.archive_older_than.assert_not_awaited()
