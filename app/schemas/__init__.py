"""Pydantic schemas."""
from app.schemas.common import ApiResponse, PaginatedResponse
from app.schemas.auth import (
    LoginRequest, LoginResponse, TokenResponse, UserResponse, ProfileUpdateRequest
)
from app.schemas.scanned_item import (
    ScanMetadata, ScannedItemCreate, ScannedItemResponse, ScannedItemFilters
)
from app.schemas.order import (
    ItemResponse, ItemScanRequest, ItemNotFoundRequest, ItemUpdateRequest,
    OrderCreate, OrderStatusUpdate, OrderResponse, OrderDetailResponse,
    CompletedOrderCreate, CompletedOrderResponse
)
from app.schemas.bag import BagScanRequest, BagUpdateRequest, BagResponse
from app.schemas.pick import ReportIssueRequest, ReportIssueResponse
from app.schemas.rack import RackScanRequest, RackResponse
from app.schemas.task import TaskCreate, TaskUpdate, TaskResponse

__all__ = [
    "ApiResponse", "PaginatedResponse",
    "LoginRequest", "LoginResponse", "TokenResponse", "UserResponse", "ProfileUpdateRequest",
    "ScanMetadata", "ScannedItemCreate", "ScannedItemResponse", "ScannedItemFilters",
    "ItemResponse", "ItemScanRequest", "ItemNotFoundRequest", "ItemUpdateRequest",
    "OrderCreate", "OrderStatusUpdate", "OrderResponse", "OrderDetailResponse",
    "CompletedOrderCreate", "CompletedOrderResponse",
    "BagScanRequest", "BagUpdateRequest", "BagResponse",
    "ReportIssueRequest", "ReportIssueResponse",
    "RackScanRequest", "RackResponse",
    "TaskCreate", "TaskUpdate", "TaskResponse",
]
