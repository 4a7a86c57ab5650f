"""Typed application errors.

Handlers raise these and let them propagate; ``app.main`` maps every
``AppError`` to the JSON error envelope in one place.
"""
from typing import Any, Optional

from fastapi import status


class AppError(Exception):
    """Base class for errors that carry an HTTP status and a client message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: Optional[str] = None

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.details = details

    def to_dict(self) -> dict:
        body = {
            "success": False,
            "error": self.message,
            "status_code": self.status_code,
        }
        if self.code:
            body["code"] = self.code
        if self.details is not None:
            body["details"] = self.details
        return body


class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "BAD_REQUEST"


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "NOT_AUTHENTICATED"

    def __init__(self, message: str = "Not authorized to access this route", **kwargs):
        super().__init__(message, **kwargs)


class PermissionDeniedError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"


class DuplicateOrderError(ConflictError):
    """A completed-order record with this order id already exists."""

    code = "DUPLICATE_ORDER"

    def __init__(self, order_id: str):
        super().__init__(f"Order {order_id} has already been completed")
        self.order_id = order_id
