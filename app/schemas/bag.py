"""Bag schemas."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from app.core.enums import BagStatus


class BagScanRequest(BaseModel):
    """Bag QR scanned against an order."""
    qr_code: str = Field(..., min_length=1, max_length=255, description="BAG-{number}-{size}-{code}")
    order_id: str = Field(..., min_length=1, max_length=100)


class BagUpdateRequest(BaseModel):
    status: Optional[BagStatus] = None
    photo_url: Optional[str] = Field(None, max_length=1000)


class BagResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    bag_id: str
    order_id: str
    user_id: str
    status: BagStatus
    size: Optional[str] = None
    scanned_at: datetime
    photo_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
