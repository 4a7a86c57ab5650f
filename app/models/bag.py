"""Bag model."""
from datetime import datetime
from typing import Optional
from sqlalchemy import String, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column
import uuid

from app.core.database import Base, TimestampMixin, enum_column, utcnow
from app.core.enums import BagStatus


class Bag(TimestampMixin, Base):
    """Pick bag attached to an order. bag_id is globally unique."""

    __tablename__ = "bags"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    bag_id: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    order_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False
    )
    status: Mapped[BagStatus] = mapped_column(
        enum_column(BagStatus),
        default=BagStatus.SCANNED,
        nullable=False
    )
    size: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)  # e.g. "25L"
    scanned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False
    )
    photo_url: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)

    __table_args__ = (
        Index("ix_bag_order_status", "order_id", "status"),
    )
