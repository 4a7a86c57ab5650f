"""Order API endpoints: live orders and completed-order history."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from app.core.config import settings
from app.core.database import utcnow
from app.core.dependencies import CurrentPrincipal, DbSession, require_role
from app.core.enums import OrderStatus, UserRole
from app.core.exceptions import ConflictError, DuplicateOrderError, NotFoundError
from app.core.logging import get_logger
from app.models.item import Item
from app.models.order import Order
from app.repositories import completed_orders as completed_store
from app.schemas.common import ApiResponse, PaginatedResponse
from app.schemas.order import (
    OrderCreate, OrderStatusUpdate, OrderResponse, OrderDetailResponse,
    ItemResponse, CompletedOrderResponse
)


router = APIRouter()
logger = get_logger(__name__)


@router.get("", response_model=PaginatedResponse[OrderResponse])
async def list_orders(
    principal: CurrentPrincipal,
    db: DbSession,
    status_filter: Optional[OrderStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
):
    """List the caller's in-progress orders, newest first."""
    query = select(Order).where(Order.user_id == principal.user_id)
    if status_filter:
        query = query.where(Order.status == status_filter)

    count_result = await db.execute(
        select(func.count()).select_from(query.subquery())
    )
    total = count_result.scalar() or 0

    offset = (page - 1) * limit
    result = await db.execute(
        query.order_by(Order.created_at.desc(), Order.id).offset(offset).limit(limit)
    )
    orders = result.scalars().all()

    return PaginatedResponse.build(
        [OrderResponse.model_validate(o) for o in orders],
        total=total, page=page, page_size=limit,
    )


@router.post("", response_model=ApiResponse[OrderResponse], status_code=status.HTTP_201_CREATED)
async def create_order(
    request: OrderCreate,
    principal: CurrentPrincipal,
    db: DbSession,
):
    """Open an order for the caller, together with its lines."""
    existing = await db.execute(select(Order.id).where(Order.order_id == request.order_id))
    if existing.scalar_one_or_none() is not None:
        raise ConflictError(f"Order {request.order_id} already exists")

    if await completed_store.get_completed_order(db, request.order_id) is not None:
        raise DuplicateOrderError(request.order_id)

    now = utcnow()
    order = Order(
        order_id=request.order_id,
        user_id=principal.user_id,
        zone=request.zone,
        item_count=request.item_count,
        target_time=request.target_time,
        status=OrderStatus.RECEIVED,
        started_at=now,
        created_at=now,
    )
    db.add(order)
    for line in request.items:
        db.add(Item(order_id=request.order_id, **line.model_dump(exclude_none=True)))

    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise ConflictError(f"Order {request.order_id} already exists") from e

    await db.refresh(order)

    logger.info(
        f"Order {order.order_id} created with {len(request.items)} items",
        extra={"order_id": order.order_id, "user_id": principal.user_id},
    )
    return ApiResponse(data=OrderResponse.model_validate(order))


@router.get("/completed", response_model=PaginatedResponse[CompletedOrderResponse])
async def list_completed_orders(
    principal: CurrentPrincipal,
    db: DbSession,
    status_filter: OrderStatus = Query(OrderStatus.COMPLETED, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
):
    """The caller's completed orders in one status, newest first."""
    orders, total = await completed_store.list_by_user_and_status(
        db, principal.user_id, status=status_filter, page=page, page_size=limit
    )
    return PaginatedResponse.build(
        [CompletedOrderResponse.model_validate(o) for o in orders],
        total=total, page=page, page_size=limit,
    )


@router.get(
    "/completed/recent",
    response_model=ApiResponse[list[CompletedOrderResponse]],
    dependencies=[Depends(require_role(UserRole.SUPERVISOR.value, UserRole.ADMIN.value))],
)
async def list_recent_completed_orders(
    db: DbSession,
    status_filter: OrderStatus = Query(OrderStatus.COMPLETED, alias="status"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
):
    """Latest completed orders across all pickers."""
    orders = await completed_store.list_recent_by_status(db, status=status_filter, limit=limit)
    return ApiResponse(data=[CompletedOrderResponse.model_validate(o) for o in orders])


@router.get("/{order_id}", response_model=ApiResponse[OrderDetailResponse])
async def get_order(
    order_id: str,
    principal: CurrentPrincipal,
    db: DbSession,
):
    """Get an order with its lines. The caller's own order is preferred."""
    result = await db.execute(
        select(Order).where(Order.order_id == order_id, Order.user_id == principal.user_id)
    )
    order = result.scalar_one_or_none()
    if order is None:
        result = await db.execute(select(Order).where(Order.order_id == order_id))
        order = result.scalar_one_or_none()

    items_result = await db.execute(
        select(Item).where(Item.order_id == order_id).order_by(Item.created_at, Item.id)
    )
    items = items_result.scalars().all()

    if order is None and not items:
        raise NotFoundError(f"Order not found with id of {order_id}")

    return ApiResponse(
        data=OrderDetailResponse(
            order=OrderResponse.model_validate(order) if order is not None else None,
            items=[ItemResponse.model_validate(i) for i in items],
        )
    )


@router.put("/{order_id}/status", response_model=ApiResponse[OrderResponse])
async def update_order_status(
    order_id: str,
    request: OrderStatusUpdate,
    principal: CurrentPrincipal,
    db: DbSession,
):
    """Patch one of the caller's orders.

    Moving to ``picking`` stamps ``started_at`` unless already set; moving to
    ``completed`` stamps ``completed_at``.
    """
    result = await db.execute(
        select(Order).where(Order.order_id == order_id, Order.user_id == principal.user_id)
    )
    order = result.scalar_one_or_none()
    if order is None:
        raise NotFoundError(f"Order not found with id of {order_id}")

    if request.status:
        order.status = request.status
    if request.bag_id:
        order.bag_id = request.bag_id
    if request.rack_location:
        order.rack_location = request.rack_location
    if request.rider_name:
        order.rider_name = request.rider_name
    if request.rider_id:
        order.rider_id = request.rider_id
    if request.pick_time is not None:
        order.pick_time = request.pick_time

    if request.status == OrderStatus.PICKING and order.started_at is None:
        order.started_at = utcnow()
    if request.status == OrderStatus.COMPLETED:
        order.completed_at = utcnow()

    await db.commit()
    await db.refresh(order)

    logger.info(
        f"Order {order_id} updated to {order.status.value}",
        extra={"order_id": order_id, "user_id": principal.user_id},
    )
    return ApiResponse(data=OrderResponse.model_validate(order))
