"""Order, order item and completed-order schemas."""
from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.core.enums import OrderStatus, Zone, ItemStatus, ItemCategory
from app.schemas.common import as_utc


class ItemCreate(BaseModel):
    """Order line supplied when an order is created."""
    item_code: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    quantity: int = Field(1, ge=1)
    category: Optional[ItemCategory] = None
    location: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None


class ItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_id: str
    item_code: str
    name: str
    quantity: int
    category: Optional[ItemCategory] = None
    status: ItemStatus
    location: Optional[str] = None
    notes: Optional[str] = None
    scanned_at: Optional[datetime] = None


class ItemScanRequest(BaseModel):
    """Barcode of an order line scanned off the shelf."""
    order_id: str = Field(..., min_length=1, max_length=100)
    item_code: str = Field(..., min_length=1, max_length=100)


class ItemNotFoundRequest(BaseModel):
    notes: Optional[str] = None


class ItemUpdateRequest(BaseModel):
    """Patch of an order line. Omitted fields are left untouched."""
    status: Optional[ItemStatus] = None
    location: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None


class OrderCreate(BaseModel):
    """Request to open a new in-progress order."""
    order_id: str = Field(..., min_length=1, max_length=100)
    zone: Zone
    item_count: int = Field(..., ge=1)
    target_time: Optional[int] = Field(None, ge=0, description="Target pick time in minutes")
    items: List[ItemCreate] = Field(default_factory=list)


class OrderStatusUpdate(BaseModel):
    """Patch of an in-progress order. Omitted fields are left untouched."""
    status: Optional[OrderStatus] = None
    bag_id: Optional[str] = Field(None, max_length=100)
    rack_location: Optional[str] = Field(None, max_length=100)
    rider_name: Optional[str] = Field(None, max_length=255)
    rider_id: Optional[str] = Field(None, max_length=100)
    pick_time: Optional[int] = Field(None, ge=0)


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_id: str
    user_id: str
    zone: Zone
    status: OrderStatus
    item_count: int
    target_time: Optional[int] = None
    pick_time: Optional[int] = None
    bag_id: Optional[str] = None
    rack_location: Optional[str] = None
    rider_name: Optional[str] = None
    rider_id: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class OrderDetailResponse(BaseModel):
    """An order together with its lines. ``order`` is null when only items exist."""
    order: Optional[OrderResponse] = None
    items: List[ItemResponse]


class CompletedOrderCreate(BaseModel):
    """Finalized attributes of an order, validated before they reach the store.

    Temporal fields must be ordered: ``created_at <= started_at <= completed_at``
    for whichever of them are present. A missing ``created_at`` becomes the
    earliest of ``started_at``, ``completed_at`` and the current time.
    """
    order_id: str = Field(..., min_length=1, max_length=100)
    user_id: str = Field(..., min_length=1)
    zone: Zone
    status: OrderStatus = OrderStatus.COMPLETED
    item_count: int = Field(..., ge=1)
    target_time: Optional[int] = Field(None, ge=0)
    pick_time: Optional[int] = Field(None, ge=0)
    bag_id: Optional[str] = None
    rack_location: Optional[str] = None
    rider_name: Optional[str] = None
    rider_id: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    rack_assigned_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @model_validator(mode="after")
    def check_timeline(self) -> "CompletedOrderCreate":
        started_at = as_utc(self.started_at)
        completed_at = as_utc(self.completed_at)
        if self.created_at is None:
            known = [t for t in (started_at, completed_at) if t is not None]
            self.created_at = min(known + [datetime.now(timezone.utc)])
        created_at = as_utc(self.created_at)

        if created_at and started_at and started_at < created_at:
            raise ValueError("started_at must not be earlier than created_at")
        if started_at and completed_at and completed_at < started_at:
            raise ValueError("completed_at must not be earlier than started_at")
        if created_at and completed_at and completed_at < created_at:
            raise ValueError("completed_at must not be earlier than created_at")
        return self


class CompletedOrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_id: str
    user_id: str
    zone: Zone
    status: OrderStatus
    item_count: int
    target_time: Optional[int] = None
    pick_time: Optional[int] = None
    bag_id: Optional[str] = None
    rack_location: Optional[str] = None
    rider_name: Optional[str] = None
    rider_id: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    rack_assigned_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
