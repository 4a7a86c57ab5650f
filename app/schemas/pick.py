"""Pick issue schemas."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from app.core.enums import PickNextAction
from app.schemas.common import as_utc


class ReportIssueRequest(BaseModel):
    order_id: str = Field(..., min_length=1, max_length=100)
    sku: str = Field(..., min_length=1, max_length=100)
    bin_id: str = Field(..., min_length=1, max_length=100)
    issue_type: str = Field(..., description="One of ITEM_DAMAGED, ITEM_MISSING, ITEM_EXPIRED, WRONG_ITEM")
    device_id: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None
    timestamp: Optional[datetime] = None  # device clock, stored as reported_at

    @field_validator("timestamp")
    @classmethod
    def timestamp_in_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class ReportIssueResponse(BaseModel):
    pick_issue_id: str
    next_action: PickNextAction
    bin_id: Optional[str] = Field(None, description="Alternate bin when next_action is ALTERNATE_BIN")
