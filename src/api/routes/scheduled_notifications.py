"""
Scheduled Notification API Routes

Custom scheduling, listing and cancellation, scheduler status and manual
checks.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from config import ApplicationConfig
from src.api.responses import DataResponse, ListResponse, list_response, raise_for_error
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.audit_recorder import Actor
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.scheduled_notifications import (
    CancelScheduledNotificationUseCase,
    CheckResults,
    CleanupScheduledNotificationsUseCase,
    GetScheduledNotificationStatsUseCase,
    GetUpcomingNotificationsUseCase,
    ListScheduledNotificationsUseCase,
    RunAllChecksUseCase,
    ScheduledNotificationStats,
    ScheduleNotificationCommand,
    ScheduleNotificationUseCase,
)
from src.depends import get_actor, get_current_user, get_unit_of_work, require_admin
from src.domain.entities import (
    NotificationEntityType,
    NotificationFrequency,
    NotificationPriority,
    NotificationType,
)

router = APIRouter(prefix="/scheduled-notifications", tags=["Scheduled Notifications"])


class ScheduledNotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    message: str
    type: NotificationType
    priority: NotificationPriority
    entity_type: Optional[NotificationEntityType] = None
    entity_id: Optional[str] = None
    employee_id: UUID
    scheduled_for: datetime
    executed: bool
    executed_at: Optional[datetime] = None
    frequency: NotificationFrequency
    next_execution: Optional[datetime] = None
    metadata: Optional[Dict[str, Any]] = Field(
        default=None, validation_alias=AliasChoices("notification_metadata", "metadata")
    )
    is_active: bool
    created_at: datetime


class CronJobStatus(BaseModel):
    name: str
    trigger: str
    running: bool
    in_flight: int
    next_run: Optional[str] = None
    last_run: Optional[str] = None


class CustomNotificationRequest(BaseModel):
    """Schedule request; employee_id defaults to the current user"""

    title: str = Field(min_length=1, max_length=255)
    message: str = Field(min_length=1)
    type: NotificationType = NotificationType.system
    priority: NotificationPriority = NotificationPriority.medium
    entity_type: Optional[NotificationEntityType] = None
    entity_id: Optional[str] = Field(default=None, max_length=64)
    employee_id: Optional[UUID] = None
    scheduled_for: datetime
    frequency: NotificationFrequency = NotificationFrequency.once
    metadata: Optional[Dict[str, Any]] = None


def _scheduled(items) -> List[ScheduledNotificationResponse]:
    return [ScheduledNotificationResponse.model_validate(item) for item in items]


@router.get("/jobs", response_model=DataResponse[List[CronJobStatus]])
async def get_jobs_status(request: Request, _: dict = Depends(require_admin)):
    """Registered cron jobs with their next and last run"""
    return {"success": True, "data": request.app.state.cron.status()}


@router.post("/run-check", response_model=DataResponse[CheckResults])
async def run_manual_check(
    _: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Run dispatch, every producer and the cleanup now"""
    use_case = RunAllChecksUseCase(
        uow, retention_days=ApplicationConfig.SCHEDULED_NOTIFICATION_RETENTION_DAYS
    )
    result = await use_case.execute()
    return {"success": True, "message": "Notification checks completed", "data": result.value}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=DataResponse[ScheduledNotificationResponse],
)
async def schedule_custom_notification(
    request: CustomNotificationRequest,
    actor: Actor = Depends(get_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    command = ScheduleNotificationCommand(
        **request.model_dump(exclude={"employee_id"}),
        employee_id=request.employee_id or actor.id,
    )
    result = await ScheduleNotificationUseCase(uow).execute(command, actor=actor)
    if result.is_err():
        raise_for_error(result.error, {"INVALID_SCHEDULE_DATE": status.HTTP_400_BAD_REQUEST})

    return {
        "success": True,
        "message": "Notification scheduled",
        "data": ScheduledNotificationResponse.model_validate(result.value),
    }


@router.get("", response_model=ListResponse[ScheduledNotificationResponse])
async def list_scheduled_notifications(
    _: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    executed: Optional[bool] = None,
    type: Optional[NotificationType] = None,
    employee_id: Optional[UUID] = Query(None, alias="employeeId"),
):
    result = await ListScheduledNotificationsUseCase(uow).execute(
        executed=executed,
        notification_type=type,
        employee_id=employee_id,
        page=page,
        limit=limit,
    )
    if result.is_err():
        raise_for_error(result.error, {})

    return list_response(result.value, _scheduled(result.value["items"]))


@router.get("/stats", response_model=DataResponse[ScheduledNotificationStats])
async def get_stats(
    _: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetScheduledNotificationStatsUseCase(uow).execute()
    return {"success": True, "data": result.value}


@router.get("/upcoming", response_model=DataResponse[List[ScheduledNotificationResponse]])
async def get_upcoming(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    days: int = Query(7, ge=1, le=90),
):
    """Pending notifications of the current user for the next `days` days"""
    result = await GetUpcomingNotificationsUseCase(uow).execute(
        UUID(current_user["user_id"]), days=days
    )
    if result.is_err():
        raise_for_error(result.error, {})

    return {"success": True, "data": _scheduled(result.value)}


@router.delete("/{scheduled_id}", response_model=DataResponse[ScheduledNotificationResponse])
async def cancel_scheduled_notification(
    scheduled_id: UUID,
    actor: Actor = Depends(get_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await CancelScheduledNotificationUseCase(uow).execute(scheduled_id, actor)
    if result.is_err():
        raise_for_error(
            result.error,
            {
                "SCHEDULED_NOTIFICATION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
                "ALREADY_EXECUTED": status.HTTP_409_CONFLICT,
            },
        )

    return {
        "success": True,
        "message": "Scheduled notification cancelled",
        "data": ScheduledNotificationResponse.model_validate(result.value),
    }


@router.post(
    "/cleanup",
    response_model=DataResponse[int],
    dependencies=[Depends(verify_admin_api_key)],
)
async def cleanup(uow: UnitOfWork = Depends(get_unit_of_work)):
    use_case = CleanupScheduledNotificationsUseCase(
        uow, retention_days=ApplicationConfig.SCHEDULED_NOTIFICATION_RETENTION_DAYS
    )
    result = await use_case.execute()
    return {
        "success": True,
        "message": f"{result.value} scheduled notifications removed",
        "data": result.value,
    }
