from typing import Any, Dict

from fastapi import status
from libs.result import Error


class ApiError(Exception):
    """Use case Error raised out of a route, rendered by the app's error handlers"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)

    @property
    def public_message(self) -> str:
        return self.base_error.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "message": self.public_message,
            "error": {"code": self.base_error.code, "message": self.public_message},
        }


class ClientError(ApiError):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(base_error)
        self.status_code = status_code


class ServerError(ApiError):
    """Keeps the error code, hides the message and reason from the caller"""

    @property
    def public_message(self) -> str:
        return "Internal server error"
