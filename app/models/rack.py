"""Rack model."""
from datetime import datetime
from typing import Optional
from sqlalchemy import String, Integer, Boolean, DateTime, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
import uuid

from app.core.database import Base, TimestampMixin


class Rack(TimestampMixin, Base):
    """Hand-off rack slot where a finished bag waits for its rider."""

    __tablename__ = "racks"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    rack_code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)  # "Rack-D1-Slot3"
    rack_identifier: Mapped[str] = mapped_column(String(20), nullable=False, index=True)  # "D1"
    slot_number: Mapped[int] = mapped_column(Integer, nullable=False)
    location: Mapped[str] = mapped_column(String(100), nullable=False)
    zone: Mapped[str] = mapped_column(String(50), nullable=False)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    current_order_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    rider_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    rider_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    assigned_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("rack_identifier", "slot_number", name="uq_rack_identifier_slot"),
        Index("ix_rack_zone_available", "zone", "is_available"),
    )
