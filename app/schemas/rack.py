"""Rack schemas."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class RackScanRequest(BaseModel):
    """Rack QR scanned to park a finished order."""
    qr_code: str = Field(..., min_length=1, max_length=255, description="Rack-{id}-Slot{n} ({rider name})")
    order_id: str = Field(..., min_length=1, max_length=100)
    rider_id: Optional[str] = Field(None, max_length=100)
    pick_time: Optional[int] = Field(None, ge=0, description="Minutes; derived from started_at when omitted")


class RackResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    rack_code: str
    rack_identifier: str
    slot_number: int
    location: str
    zone: str
    is_available: bool
    current_order_id: Optional[str] = None
    rider_name: Optional[str] = None
    rider_id: Optional[str] = None
    assigned_at: Optional[datetime] = None
