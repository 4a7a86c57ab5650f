"""In-progress order model."""
from datetime import datetime
from typing import Optional
from sqlalchemy import String, Integer, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
import uuid

from app.core.database import Base, TimestampMixin, enum_column
from app.core.enums import OrderStatus, Zone


class OrderFieldsMixin(TimestampMixin):
    """Columns shared by live orders and their completed records."""

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    order_id: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    zone: Mapped[Zone] = mapped_column(enum_column(Zone), nullable=False)
    item_count: Mapped[int] = mapped_column(Integer, nullable=False)
    target_time: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # minutes
    pick_time: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # minutes
    bag_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    rack_location: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    rider_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    rider_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    started_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)


class Order(OrderFieldsMixin, Base):
    """Order currently moving through pick / bag / rack."""

    __tablename__ = "orders"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    status: Mapped[OrderStatus] = mapped_column(
        enum_column(OrderStatus),
        default=OrderStatus.PENDING,
        nullable=False
    )

    # Relationships
    user = relationship("User", back_populates="orders")

    __table_args__ = (
        CheckConstraint("item_count >= 1", name="item_count_positive"),
        CheckConstraint("target_time IS NULL OR target_time >= 0", name="target_time_non_negative"),
        CheckConstraint("pick_time IS NULL OR pick_time >= 0", name="pick_time_non_negative"),
        Index("ix_order_user_status", "user_id", "status"),
    )


Index("ix_order_status_created", Order.__table__.c.status, Order.__table__.c.created_at.desc())
