"""CompletedOrder model."""
from datetime import datetime
from typing import Optional
from sqlalchemy import String, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, enum_column
from app.core.enums import OrderStatus
from app.models.order import OrderFieldsMixin


class CompletedOrder(OrderFieldsMixin, Base):
    """Terminal record of a fulfilled order. One row per order_id, never updated."""

    __tablename__ = "completed_orders"

    # Reporting history outlives the account; deleting a user with records is refused
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    status: Mapped[OrderStatus] = mapped_column(
        enum_column(OrderStatus),
        default=OrderStatus.COMPLETED,
        nullable=False
    )
    rack_assigned_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True
    )

    # Relationships
    user = relationship("User", back_populates="completed_orders")

    __table_args__ = (
        CheckConstraint("item_count >= 1", name="item_count_positive"),
        CheckConstraint("target_time IS NULL OR target_time >= 0", name="target_time_non_negative"),
        CheckConstraint("pick_time IS NULL OR pick_time >= 0", name="pick_time_non_negative"),
        Index("ix_completed_order_user_status", "user_id", "status"),
    )


Index(
    "ix_completed_order_status_created",
    CompletedOrder.__table__.c.status,
    CompletedOrder.__table__.c.created_at.desc(),
)
