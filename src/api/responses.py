"""
Response envelopes shared by the route modules.
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar

from fastapi import status
from pydantic import BaseModel

from libs.result import Error
from src.api.error import ClientError, ServerError

T = TypeVar("T")


class Pagination(BaseModel):
    total: int
    pages: int
    page: int
    limit: int


class ListResponse(BaseModel, Generic[T]):
    success: bool = True
    data: List[T]
    pagination: Pagination


class DataResponse(BaseModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: T


class MessageResponse(BaseModel):
    success: bool = True
    message: str


def list_response(page: Dict[str, Any], items: List[Any]) -> Dict[str, Any]:
    return {
        "success": True,
        "data": items,
        "pagination": {
            "total": page["total"],
            "pages": page["pages"],
            "page": page["page"],
            "limit": page["limit"],
        },
    }


def raise_for_error(error: Error, statuses: Dict[str, int]) -> None:
    """Map a use case error to an HTTP error. Unmapped codes are server errors."""
    if error.code in statuses:
        raise ClientError(error, status_code=statuses[error.code])
    if error.code in ("VALIDATION_ERROR", "INVALID_RETENTION_DAYS"):
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    raise ServerError(error)
