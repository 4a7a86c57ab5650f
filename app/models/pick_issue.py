"""PickIssue and Task models."""
from datetime import datetime
from typing import Optional
from sqlalchemy import String, DateTime, ForeignKey, Text, Index
from sqlalchemy.orm import Mapped, mapped_column
import uuid

from app.core.database import Base, TimestampMixin, enum_column
from app.core.enums import PickIssueType, TaskStatus, TaskPriority


class PickIssue(TimestampMixin, Base):
    """Problem reported by a picker against a bin during picking."""

    __tablename__ = "pick_issues"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    order_id: Mapped[str] = mapped_column(String(100), nullable=False)
    sku: Mapped[str] = mapped_column(String(100), nullable=False)
    bin_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    issue_type: Mapped[PickIssueType] = mapped_column(enum_column(PickIssueType), nullable=False)
    reported_by: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    device_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    reported_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)  # device clock

    __table_args__ = (
        Index("ix_pick_issue_order_sku", "order_id", "sku"),
    )


class Task(TimestampMixin, Base):
    """Follow-up work (bin audit, bin correction) raised by pick issues."""

    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    order_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    status: Mapped[TaskStatus] = mapped_column(
        enum_column(TaskStatus),
        default=TaskStatus.PENDING,
        nullable=False
    )
    priority: Mapped[TaskPriority] = mapped_column(
        enum_column(TaskPriority),
        default=TaskPriority.MEDIUM,
        nullable=False
    )
    due_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_task_user_status", "user_id", "status"),
    )


Index(
    "ix_pick_issue_type_created",
    PickIssue.__table__.c.issue_type,
    PickIssue.__table__.c.created_at.desc(),
)
