"""Inventory model."""
from datetime import datetime
from typing import Optional
from sqlalchemy import String, Integer, DateTime, Index, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
import uuid

from app.core.database import Base, TimestampMixin, enum_column
from app.core.enums import InventoryStatus


class Inventory(TimestampMixin, Base):
    """Stock of one SKU in one bin."""

    __tablename__ = "inventory"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    sku: Mapped[str] = mapped_column(String(100), nullable=False)
    bin_id: Mapped[str] = mapped_column(String(100), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    status: Mapped[InventoryStatus] = mapped_column(
        enum_column(InventoryStatus),
        default=InventoryStatus.AVAILABLE,
        nullable=False
    )
    expiry_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    batch_number: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    __table_args__ = (
        UniqueConstraint("sku", "bin_id", name="uq_inventory_sku_bin"),
        CheckConstraint("quantity >= 0", name="quantity_non_negative"),
        Index("ix_inventory_sku_status", "sku", "status"),
        Index("ix_inventory_bin_status", "bin_id", "status"),
    )
