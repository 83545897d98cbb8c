"""
Notification API Routes

Live notifications of the current user.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from src.api.responses import DataResponse, MessageResponse, list_response, raise_for_error
from src.app.services.audit_recorder import Actor
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.notifications import (
    CreateNotificationsCommand,
    CreateNotificationsUseCase,
    GetUnreadCountUseCase,
    ListNotificationsUseCase,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadUseCase,
)
from src.depends import get_actor, get_current_user, get_unit_of_work, require_admin
from src.domain.entities import NotificationEntityType, NotificationPriority, NotificationType

router = APIRouter(prefix="/notifications", tags=["Notifications"])


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    message: str
    type: NotificationType
    priority: NotificationPriority
    entity_type: Optional[NotificationEntityType] = None
    entity_id: Optional[str] = None
    employee_id: UUID
    sender_id: Optional[UUID] = None
    metadata: Optional[Dict[str, Any]] = Field(
        default=None, validation_alias=AliasChoices("notification_metadata", "metadata")
    )
    is_read: bool
    read_at: Optional[datetime] = None
    created_at: datetime


class NotificationListResponse(BaseModel):
    success: bool = True
    data: List[NotificationResponse]
    pagination: Dict[str, int]
    unread_count: int


class UnreadCountResponse(BaseModel):
    success: bool = True
    count: int


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    is_read: Optional[bool] = Query(None, alias="isRead"),
    type: Optional[NotificationType] = None,
    priority: Optional[NotificationPriority] = None,
):
    result = await ListNotificationsUseCase(uow).execute(
        UUID(current_user["user_id"]),
        is_read=is_read,
        notification_type=type,
        priority=priority,
        page=page,
        limit=limit,
    )
    if result.is_err():
        raise_for_error(result.error, {})

    items = [NotificationResponse.model_validate(item) for item in result.value["items"]]
    response = list_response(result.value, items)
    response["unread_count"] = result.value["unread_count"]
    return response


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    type: Optional[NotificationType] = None,
):
    result = await GetUnreadCountUseCase(uow).execute(UUID(current_user["user_id"]), type)
    return {"success": True, "count": result.value}


@router.patch("/read-all", response_model=DataResponse[int])
async def mark_all_read(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    type: Optional[NotificationType] = None,
):
    result = await MarkAllNotificationsReadUseCase(uow).execute(
        UUID(current_user["user_id"]), type
    )
    return {
        "success": True,
        "message": f"{result.value} notifications marked as read",
        "data": result.value,
    }


@router.patch("/{notification_id}/read", response_model=DataResponse[NotificationResponse])
async def mark_read(
    notification_id: UUID,
    actor: Actor = Depends(get_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await MarkNotificationReadUseCase(uow).execute(notification_id, actor)
    if result.is_err():
        raise_for_error(result.error, {"NOTIFICATION_NOT_FOUND": status.HTTP_404_NOT_FOUND})

    return {
        "success": True,
        "message": "Notification marked as read",
        "data": NotificationResponse.model_validate(result.value),
    }


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
)
async def create_notifications(
    command: CreateNotificationsCommand,
    current_user: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Send one notification to each listed employee"""
    result = await CreateNotificationsUseCase(uow).execute(
        command, sender_id=UUID(current_user["user_id"])
    )
    if result.is_err():
        raise_for_error(result.error, {})

    return {"success": True, "message": f"{len(result.value)} notifications created"}
