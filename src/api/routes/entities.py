"""
Audited Entity API Routes

Create, read, update and delete of every audited entity kind
(/entities/{kind}/...). Every mutation is recorded in the audit log.
"""

from typing import Any, Dict
from uuid import UUID

from fastapi import APIRouter, Body, Depends, status

from src.api.responses import DataResponse, MessageResponse, raise_for_error
from src.app.services.audit_recorder import Actor
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.entities import (
    CreateEntityUseCase,
    DeleteEntityUseCase,
    GetEntityUseCase,
    UpdateEntityUseCase,
)
from src.depends import get_actor, get_current_user, get_unit_of_work

router = APIRouter(prefix="/entities", tags=["Entities"])

ERROR_STATUSES = {
    "UNKNOWN_ENTITY_KIND": status.HTTP_404_NOT_FOUND,
    "ENTITY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
}


@router.post(
    "/{kind}",
    status_code=status.HTTP_201_CREATED,
    response_model=DataResponse[Dict[str, Any]],
)
async def create_entity(
    kind: str,
    data: Dict[str, Any] = Body(...),
    actor: Actor = Depends(get_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await CreateEntityUseCase(uow).execute(kind, data, actor)
    if result.is_err():
        raise_for_error(result.error, ERROR_STATUSES)

    return {"success": True, "message": "Created", "data": result.value.model_dump(mode="json")}


@router.get("/{kind}/{entity_id}", response_model=DataResponse[Dict[str, Any]])
async def get_entity(
    kind: str,
    entity_id: UUID,
    _: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetEntityUseCase(uow).execute(kind, entity_id)
    if result.is_err():
        raise_for_error(result.error, ERROR_STATUSES)

    return {"success": True, "data": result.value.model_dump(mode="json")}


@router.patch("/{kind}/{entity_id}", response_model=DataResponse[Dict[str, Any]])
async def update_entity(
    kind: str,
    entity_id: UUID,
    patch: Dict[str, Any] = Body(...),
    actor: Actor = Depends(get_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await UpdateEntityUseCase(uow).execute(kind, entity_id, patch, actor)
    if result.is_err():
        raise_for_error(result.error, ERROR_STATUSES)

    return {"success": True, "message": "Updated", "data": result.value.model_dump(mode="json")}


@router.delete("/{kind}/{entity_id}", response_model=MessageResponse)
async def delete_entity(
    kind: str,
    entity_id: UUID,
    actor: Actor = Depends(get_actor),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await DeleteEntityUseCase(uow).execute(kind, entity_id, actor)
    if result.is_err():
        raise_for_error(result.error, ERROR_STATUSES)

    return {"success": True, "message": "Deleted"}
