"""Bin stock lookups used while resolving pick issues."""
from typing import Optional

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import utcnow
from app.core.enums import InventoryStatus
from app.models.inventory import Inventory


async def get_bin_stock(db: AsyncSession, sku: str, bin_id: str) -> Optional[Inventory]:
    result = await db.execute(
        select(Inventory).where(Inventory.sku == sku, Inventory.bin_id == bin_id)
    )
    return result.scalar_one_or_none()


async def find_alternate_bin(
    db: AsyncSession,
    sku: str,
    exclude_bin_id: str,
    fresh_only: bool = False,
) -> Optional[Inventory]:
    """Best other bin holding available stock of ``sku``.

    By default the fullest bin wins. With ``fresh_only`` expired batches are
    skipped and the earliest-expiring batch wins, undated stock last.
    """
    query = select(Inventory).where(
        Inventory.sku == sku,
        Inventory.bin_id != exclude_bin_id,
        Inventory.status == InventoryStatus.AVAILABLE,
        Inventory.quantity > 0,
    )

    if fresh_only:
        query = query.where(
            or_(Inventory.expiry_date.is_(None), Inventory.expiry_date >= utcnow())
        ).order_by(Inventory.expiry_date.asc().nulls_last(), Inventory.bin_id)
    else:
        query = query.order_by(Inventory.quantity.desc(), Inventory.bin_id)

    result = await db.execute(query.limit(1))
    return result.scalar_one_or_none()
