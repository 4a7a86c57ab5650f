"""Scan record store: append-only log of barcode scans."""
from typing import List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import utcnow
from app.core.logging import get_logger
from app.models.scanned_item import ScannedItem
from app.schemas.scanned_item import ScannedItemCreate, ScannedItemFilters


logger = get_logger(__name__)


async def create_scanned_item(
    db: AsyncSession,
    data: ScannedItemCreate,
    user_id: Optional[str] = None,
) -> ScannedItem:
    """Append one scan. No deduplication: every call adds a row."""
    item = ScannedItem(
        barcode_data=data.barcode_data,
        barcode_type=data.barcode_type,
        order_id=data.order_id,
        user_id=user_id,
        device_id=data.device_id,
        scan_metadata=data.metadata.to_dict(),
        scanned_at=data.scanned_at or utcnow(),
    )
    db.add(item)
    await db.commit()
    await db.refresh(item)

    logger.info(
        f"Scan recorded: {item.barcode_type.value} {item.barcode_data}",
        extra={"user_id": user_id, "order_id": item.order_id},
    )
    return item


async def get_scanned_item(db: AsyncSession, scanned_item_id: str) -> Optional[ScannedItem]:
    result = await db.execute(
        select(ScannedItem).where(ScannedItem.id == scanned_item_id)
    )
    return result.scalar_one_or_none()


async def find_by_barcode(
    db: AsyncSession,
    barcode_data: str,
    limit: int = 50,
) -> List[ScannedItem]:
    """Scan history of one barcode, most recent first."""
    result = await db.execute(
        select(ScannedItem)
        .where(ScannedItem.barcode_data == barcode_data)
        .order_by(ScannedItem.scanned_at.desc(), ScannedItem.created_at.desc())
        .limit(limit)
    )
    return list(result.scalars().all())


def _filter_clauses(filters: ScannedItemFilters) -> list:
    clauses = []
    if filters.order_id:
        clauses.append(ScannedItem.order_id == filters.order_id)
    if filters.user_id:
        clauses.append(ScannedItem.user_id == filters.user_id)
    if filters.device_id:
        clauses.append(ScannedItem.device_id == filters.device_id)
    if filters.barcode_type:
        clauses.append(ScannedItem.barcode_type == filters.barcode_type)
    if filters.barcode_data:
        clauses.append(ScannedItem.barcode_data == filters.barcode_data)
    if filters.start_date:
        clauses.append(ScannedItem.scanned_at >= filters.start_date)
    if filters.end_date:
        clauses.append(ScannedItem.scanned_at <= filters.end_date)
    return clauses


async def list_scanned_items(
    db: AsyncSession,
    filters: ScannedItemFilters,
    page: int = 1,
    page_size: int = 50,
) -> Tuple[List[ScannedItem], int]:
    """Filtered range lookup, most recent first. Returns (page of items, total)."""
    clauses = _filter_clauses(filters)

    count_result = await db.execute(
        select(func.count(ScannedItem.id)).where(*clauses)
    )
    total = count_result.scalar() or 0

    offset = (page - 1) * page_size
    result = await db.execute(
        select(ScannedItem)
        .where(*clauses)
        .order_by(ScannedItem.scanned_at.desc(), ScannedItem.created_at.desc())
        .offset(offset)
        .limit(page_size)
    )
    return list(result.scalars().all()), total
