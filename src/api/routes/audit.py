"""
Audit API Routes

Audit log queries for administrators and audit maintenance endpoints.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, ConfigDict

from config import ApplicationConfig
from src.api.error import ClientError
from src.api.responses import DataResponse, ListResponse, list_response, raise_for_error
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.repositories.audit_event_repository import AuditLogFilters
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import (
    ApplyRetentionPolicyUseCase,
    ArchiveAuditLogsUseCase,
    ArchiveResponse,
    GetAuditLogsUseCase,
    GetAuditLogUseCase,
    GetAuditStatisticsUseCase,
    GetRecentActivityUseCase,
    GetStorageStatsUseCase,
    GetUserActivityUseCase,
    MaintenanceResponse,
    OptimizeIndexesUseCase,
    RetentionResponse,
    RunAuditMaintenanceUseCase,
    StorageStats,
)
from src.depends import ADMIN_ROLES, get_current_user, get_unit_of_work, require_admin
from libs.result import Error

router = APIRouter(prefix="/audit", tags=["Audit"])


class AuditEventResponse(BaseModel):
    """Single audit event in response"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    actor_id: UUID
    actor_name: str
    action: str
    description: str
    target_type: str
    target_id: UUID
    previous_data: Optional[Dict[str, Any]] = None
    new_data: Optional[Dict[str, Any]] = None
    module: str
    ip: str
    user_agent: Optional[str] = None
    timestamp: datetime


class RetentionRequest(BaseModel):
    days: int = ApplicationConfig.AUDIT_RETENTION_DAYS


class ArchiveRequest(BaseModel):
    days: int = ApplicationConfig.AUDIT_ARCHIVE_DAYS


class MaintenanceRequest(BaseModel):
    archive_days: int = ApplicationConfig.AUDIT_ARCHIVE_DAYS
    retention_days: int = ApplicationConfig.AUDIT_RETENTION_DAYS
    optimize_indexes: bool = True
    generate_report: bool = True


def _events(events) -> List[AuditEventResponse]:
    return [AuditEventResponse.model_validate(event) for event in events]


@router.get(
    "/logs",
    status_code=status.HTTP_200_OK,
    response_model=ListResponse[AuditEventResponse],
)
async def get_audit_logs(
    _: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    actor_id: Optional[UUID] = Query(None, alias="userId"),
    action: Optional[str] = None,
    module: Optional[str] = None,
    target_type: Optional[str] = Query(None, alias="targetType"),
    target_id: Optional[UUID] = Query(None, alias="targetId"),
    search: Optional[str] = None,
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    include_system: bool = Query(False, alias="includeSystem"),
    sort_by: str = Query("-timestamp", alias="sortBy"),
):
    """
    List audit logs

    Filters by actor, action, module, target, free text (description and actor
    name) and an inclusive date range. Automated actors are hidden unless
    includeSystem=true.
    """
    filters = AuditLogFilters(
        actor_id=actor_id,
        action=action,
        module=module,
        target_type=target_type,
        target_id=target_id,
        search_text=search,
        start_date=start_date,
        end_date=end_date,
        include_system=include_system,
    )
    result = await GetAuditLogsUseCase(uow).execute(filters, page=page, limit=limit, sort_by=sort_by)
    if result.is_err():
        raise_for_error(result.error, {})

    return list_response(result.value, _events(result.value["items"]))


@router.get("/logs/{event_id}", response_model=DataResponse[AuditEventResponse])
async def get_audit_log(
    event_id: UUID,
    _: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetAuditLogUseCase(uow).execute(event_id)
    if result.is_err():
        raise_for_error(result.error, {"AUDIT_LOG_NOT_FOUND": status.HTTP_404_NOT_FOUND})

    return {"success": True, "data": AuditEventResponse.model_validate(result.value)}


@router.get("/statistics", response_model=DataResponse[Dict[str, Any]])
async def get_audit_statistics(
    _: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    include_system: bool = Query(False, alias="includeSystem"),
):
    result = await GetAuditStatisticsUseCase(uow).execute(start_date, end_date, include_system)
    if result.is_err():
        raise_for_error(result.error, {})

    return {"success": True, "data": result.value}


@router.get("/recent", response_model=DataResponse[List[AuditEventResponse]])
async def get_recent_activity(
    _: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    limit: int = Query(10, ge=1, le=50),
    include_system: bool = Query(False, alias="includeSystem"),
):
    result = await GetRecentActivityUseCase(uow).execute(limit, include_system)
    if result.is_err():
        raise_for_error(result.error, {})

    return {"success": True, "data": _events(result.value)}


@router.get(
    "/users/{user_id}/activity",
    response_model=ListResponse[AuditEventResponse],
)
async def get_user_activity(
    user_id: UUID,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
):
    """Activity history of one user. Users may read their own history."""
    if current_user.get("role") not in ADMIN_ROLES and current_user["user_id"] != str(user_id):
        raise ClientError(
            Error("INSUFFICIENT_ROLE", "You can only view your own activity"),
            status_code=status.HTTP_403_FORBIDDEN,
        )

    result = await GetUserActivityUseCase(uow).execute(user_id, page=page, limit=limit)
    if result.is_err():
        raise_for_error(result.error, {})

    return list_response(result.value, _events(result.value["items"]))


@router.get("/storage-stats", response_model=DataResponse[StorageStats])
async def get_storage_stats(
    _: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetStorageStatsUseCase(uow).execute()
    return {"success": True, "data": result.value}


@router.post(
    "/retention",
    response_model=DataResponse[RetentionResponse],
    dependencies=[Depends(verify_admin_api_key)],
)
async def apply_retention_policy(
    request: RetentionRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Delete audit events older than `days` (minimum window enforced)"""
    use_case = ApplyRetentionPolicyUseCase(uow, min_days=ApplicationConfig.AUDIT_MIN_RETENTION_DAYS)
    result = await use_case.execute(request.days)
    if result.is_err():
        raise_for_error(result.error, {})

    return {
        "success": True,
        "message": f"{result.value.deleted_count} audit logs deleted",
        "data": result.value,
    }


@router.post(
    "/archive",
    response_model=DataResponse[ArchiveResponse],
    dependencies=[Depends(verify_admin_api_key)],
)
async def archive_audit_logs(
    request: ArchiveRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = ArchiveAuditLogsUseCase(uow, min_days=ApplicationConfig.AUDIT_MIN_RETENTION_DAYS)
    result = await use_case.execute(request.days)
    if result.is_err():
        raise_for_error(result.error, {})

    return {
        "success": True,
        "message": f"{result.value.archived_count} audit logs archived",
        "data": result.value,
    }


@router.post(
    "/optimize-indexes",
    response_model=DataResponse[bool],
    dependencies=[Depends(verify_admin_api_key)],
)
async def optimize_indexes(uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await OptimizeIndexesUseCase(uow).execute()
    return {"success": True, "message": "Audit indexes optimized", "data": result.value}


@router.post(
    "/maintenance",
    response_model=DataResponse[MaintenanceResponse],
    dependencies=[Depends(verify_admin_api_key)],
)
async def run_maintenance(
    request: MaintenanceRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Archive, apply retention and optimize indexes in one run"""
    use_case = RunAuditMaintenanceUseCase(uow, min_days=ApplicationConfig.AUDIT_MIN_RETENTION_DAYS)
    result = await use_case.execute(
        archive_days=request.archive_days,
        retention_days=request.retention_days,
        optimize_indexes=request.optimize_indexes,
        generate_report=request.generate_report,
    )
    if result.is_err():
        raise_for_error(result.error, {})

    return {"success": True, "message": "Audit maintenance completed", "data": result.value}
