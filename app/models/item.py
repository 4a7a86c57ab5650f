"""Order item model."""
from datetime import datetime
from typing import Optional
from sqlalchemy import String, Integer, DateTime, Text, Index, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
import uuid

from app.core.database import Base, TimestampMixin, enum_column
from app.core.enums import ItemStatus, ItemCategory


class Item(TimestampMixin, Base):
    """A line of an order that the picker has to collect."""

    __tablename__ = "order_items"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    order_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    item_code: Mapped[str] = mapped_column(String(100), nullable=False, index=True)  # SKU
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    category: Mapped[Optional[ItemCategory]] = mapped_column(enum_column(ItemCategory), nullable=True)
    status: Mapped[ItemStatus] = mapped_column(
        enum_column(ItemStatus),
        default=ItemStatus.PENDING,
        nullable=False
    )
    scanned_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="quantity_positive"),
        Index("ix_item_order_status", "order_id", "status"),
    )
