"""Order line API endpoints: the per-item pick step."""
from typing import List, Optional

from fastapi import APIRouter, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import utcnow
from app.core.dependencies import CurrentPrincipal, DbSession
from app.core.enums import ItemStatus
from app.core.exceptions import NotFoundError
from app.core.logging import get_logger
from app.models.item import Item
from app.schemas.common import ApiResponse
from app.schemas.order import (
    ItemResponse, ItemScanRequest, ItemNotFoundRequest, ItemUpdateRequest
)


router = APIRouter()
logger = get_logger(__name__)


async def get_item_or_404(db: AsyncSession, item_id: str) -> Item:
    result = await db.execute(select(Item).where(Item.id == item_id))
    item = result.scalar_one_or_none()
    if item is None:
        raise NotFoundError(f"Item not found with id of {item_id}")
    return item


@router.get("/order/{order_id}", response_model=ApiResponse[List[ItemResponse]])
async def get_order_items(
    order_id: str,
    principal: CurrentPrincipal,
    db: DbSession,
    status_filter: Optional[ItemStatus] = Query(None, alias="status"),
):
    """Lines of an order in the order they were added."""
    query = select(Item).where(Item.order_id == order_id)
    if status_filter:
        query = query.where(Item.status == status_filter)

    result = await db.execute(query.order_by(Item.created_at, Item.id))
    items = result.scalars().all()
    return ApiResponse(data=[ItemResponse.model_validate(i) for i in items])


@router.post("/scan", response_model=ApiResponse[ItemResponse])
async def scan_item(
    request: ItemScanRequest,
    principal: CurrentPrincipal,
    db: DbSession,
):
    """Confirm a line by its item code."""
    result = await db.execute(
        select(Item).where(Item.order_id == request.order_id, Item.item_code == request.item_code)
    )
    item = result.scalars().first()
    if item is None:
        raise NotFoundError("Item not found")

    item.status = ItemStatus.SCANNED
    item.scanned_at = utcnow()
    await db.commit()
    await db.refresh(item)

    logger.info(
        f"Item {item.item_code} scanned",
        extra={"order_id": item.order_id, "user_id": principal.user_id},
    )
    return ApiResponse(data=ItemResponse.model_validate(item))


@router.put("/{item_id}/not-found", response_model=ApiResponse[ItemResponse])
async def mark_item_not_found(
    item_id: str,
    request: ItemNotFoundRequest,
    principal: CurrentPrincipal,
    db: DbSession,
):
    item = await get_item_or_404(db, item_id)

    item.status = ItemStatus.NOT_FOUND
    if request.notes:
        item.notes = request.notes

    await db.commit()
    await db.refresh(item)

    logger.warning(
        f"Item {item.item_code} not found at {item.location}",
        extra={"order_id": item.order_id, "user_id": principal.user_id},
    )
    return ApiResponse(data=ItemResponse.model_validate(item))


@router.put("/{item_id}", response_model=ApiResponse[ItemResponse])
async def update_item(
    item_id: str,
    request: ItemUpdateRequest,
    principal: CurrentPrincipal,
    db: DbSession,
):
    item = await get_item_or_404(db, item_id)

    if request.status:
        item.status = request.status
    if request.location:
        item.location = request.location
    if request.notes:
        item.notes = request.notes

    await db.commit()
    await db.refresh(item)
    return ApiResponse(data=ItemResponse.model_validate(item))
