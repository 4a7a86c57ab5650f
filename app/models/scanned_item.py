"""ScannedItem model."""
from datetime import datetime
from typing import Any, Dict, Optional
from sqlalchemy import String, DateTime, Index, JSON
from sqlalchemy.orm import Mapped, mapped_column
import uuid

from app.core.database import Base, TimestampMixin, enum_column, utcnow
from app.core.enums import BarcodeType


class ScannedItem(TimestampMixin, Base):
    """One raw barcode scan. Rows are append-only; rescans add new rows."""

    __tablename__ = "scanned_items"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    barcode_data: Mapped[str] = mapped_column(String(500), nullable=False)
    barcode_type: Mapped[BarcodeType] = mapped_column(
        enum_column(BarcodeType),
        default=BarcodeType.OTHER,
        nullable=False
    )
    # Loose references: a scan never owns the order or user it mentions
    order_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    user_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    device_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    # "metadata" is reserved on declarative classes
    scan_metadata: Mapped[Dict[str, Any]] = mapped_column(
        "metadata",
        JSON,
        default=dict,
        nullable=False
    )
    scanned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False
    )


_table = ScannedItem.__table__

Index("ix_scanned_item_barcode_scanned", _table.c.barcode_data, _table.c.scanned_at.desc())
Index("ix_scanned_item_order_scanned", _table.c.order_id, _table.c.scanned_at.desc())
Index("ix_scanned_item_user_scanned", _table.c.user_id, _table.c.scanned_at.desc())
Index("ix_scanned_item_device_scanned", _table.c.device_id, _table.c.scanned_at.desc())
