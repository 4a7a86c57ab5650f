"""Scanned item schemas."""
from datetime import datetime
from typing import Any, Dict, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, AliasChoices, field_validator, model_validator

from app.core.enums import BarcodeType
from app.schemas.common import as_utc


Primitive = Union[str, int, float, bool, None]


class ScanMetadata(BaseModel):
    """Free-form scan context: known keys are typed, extra keys must be primitives."""
    model_config = ConfigDict(extra="allow")

    item_name: Optional[str] = Field(None, max_length=255)
    quantity: Optional[int] = Field(None, ge=0)
    location: Optional[str] = Field(None, max_length=100)

    @model_validator(mode="after")
    def check_extra_values(self) -> "ScanMetadata":
        for key, value in (self.model_extra or {}).items():
            if not isinstance(value, (str, int, float, bool)) and value is not None:
                raise ValueError(f"metadata.{key} must be a string, number, boolean or null")
        return self

    def to_dict(self) -> Dict[str, Primitive]:
        return self.model_dump(exclude_none=True)


class ScannedItemCreate(BaseModel):
    """A barcode scan as submitted by the device."""
    model_config = ConfigDict(extra="ignore")

    barcode_data: str = Field(..., min_length=1, max_length=500)
    barcode_type: BarcodeType = BarcodeType.OTHER
    order_id: Optional[str] = Field(None, max_length=100)
    device_id: Optional[str] = Field(None, max_length=100)
    metadata: ScanMetadata = Field(default_factory=ScanMetadata)
    scanned_at: Optional[datetime] = None

    @field_validator("scanned_at")
    @classmethod
    def scanned_at_in_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class ScannedItemResponse(BaseModel):
    """Scanned item response schema."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    barcode_data: str
    barcode_type: BarcodeType
    order_id: Optional[str] = None
    user_id: Optional[str] = None
    device_id: Optional[str] = None
    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("scan_metadata", "metadata"),
    )
    scanned_at: datetime
    created_at: datetime
    updated_at: datetime


class ScannedItemFilters(BaseModel):
    """Query filters for listing scans."""
    order_id: Optional[str] = None
    user_id: Optional[str] = None
    device_id: Optional[str] = None
    barcode_type: Optional[BarcodeType] = None
    barcode_data: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def range_in_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)
