"""Response envelopes shared by every endpoint."""
from datetime import datetime, timezone
from typing import Generic, List, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """``{"success": true, "data": ...}`` envelope."""
    success: bool = True
    data: T
    message: Optional[str] = None


class PaginatedResponse(BaseModel, Generic[T]):
    """Envelope for paginated list endpoints."""
    success: bool = True
    count: int
    total: int
    page: int
    pages: int
    data: List[T]

    @classmethod
    def build(cls, items: List[T], total: int, page: int, page_size: int) -> "PaginatedResponse[T]":
        pages = (total + page_size - 1) // page_size if page_size else 0
        return cls(count=len(items), total=total, page=page, pages=pages, data=items)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Express a datetime in UTC. Naive values (SQLite returns them) are read as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
