"""Completed order store: one immutable record per fulfilled order."""
from typing import List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import OrderStatus
from app.core.exceptions import DuplicateOrderError
from app.core.logging import get_logger
from app.models.completed_order import CompletedOrder
from app.schemas.order import CompletedOrderCreate


logger = get_logger(__name__)


def _is_unique_violation(exc: IntegrityError) -> bool:
    message = str(exc.orig).lower()
    return "unique" in message or "duplicate key" in message


async def create_completed_order(
    db: AsyncSession,
    data: CompletedOrderCreate,
    commit: bool = True,
) -> CompletedOrder:
    """Insert the terminal record of an order.

    A second insert for the same ``order_id`` raises ``DuplicateOrderError``
    and rolls the session back; the existing record is never overwritten.
    With ``commit=False`` the row is only flushed so the caller can commit it
    together with its own changes.
    """
    fields = data.model_dump(exclude_none=True)
    order = CompletedOrder(**fields)
    db.add(order)

    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        if _is_unique_violation(e):
            logger.warning(
                f"Duplicate completion rejected for order {data.order_id}",
                extra={"order_id": data.order_id},
            )
            raise DuplicateOrderError(data.order_id) from e
        raise

    if commit:
        await db.commit()
        await db.refresh(order)

    logger.info(
        f"Order {data.order_id} recorded as {data.status.value}",
        extra={"order_id": data.order_id, "user_id": data.user_id},
    )
    return order


async def get_completed_order(db: AsyncSession, order_id: str) -> Optional[CompletedOrder]:
    result = await db.execute(
        select(CompletedOrder).where(CompletedOrder.order_id == order_id)
    )
    return result.scalar_one_or_none()


async def list_by_user_and_status(
    db: AsyncSession,
    user_id: str,
    status: OrderStatus = OrderStatus.COMPLETED,
    page: int = 1,
    page_size: int = 50,
) -> Tuple[List[CompletedOrder], int]:
    """A user's completed orders in one status, newest first."""
    clauses = [CompletedOrder.user_id == user_id, CompletedOrder.status == status]

    count_result = await db.execute(
        select(func.count(CompletedOrder.id)).where(*clauses)
    )
    total = count_result.scalar() or 0

    offset = (page - 1) * page_size
    result = await db.execute(
        select(CompletedOrder)
        .where(*clauses)
        .order_by(CompletedOrder.created_at.desc(), CompletedOrder.id)
        .offset(offset)
        .limit(page_size)
    )
    return list(result.scalars().all()), total


async def list_recent_by_status(
    db: AsyncSession,
    status: OrderStatus = OrderStatus.COMPLETED,
    limit: int = 50,
) -> List[CompletedOrder]:
    """Operational dashboard: latest records in a status across all users."""
    result = await db.execute(
        select(CompletedOrder)
        .where(CompletedOrder.status == status)
        .order_by(CompletedOrder.created_at.desc(), CompletedOrder.id)
        .limit(limit)
    )
    return list(result.scalars().all())
