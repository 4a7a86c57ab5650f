"""Rack API endpoints."""
from typing import Optional

from fastapi import APIRouter
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.codes import RackCode, parse_rack_qr
from app.core.database import utcnow
from app.core.dependencies import CurrentPrincipal, DbSession
from app.core.enums import OrderStatus
from app.core.exceptions import BadRequestError, NotFoundError
from app.core.logging import get_logger
from app.models.order import Order
from app.models.rack import Rack
from app.repositories import completed_orders as completed_store
from app.schemas.common import ApiResponse, as_utc
from app.schemas.order import CompletedOrderCreate
from app.schemas.rack import RackScanRequest, RackResponse


router = APIRouter()
logger = get_logger(__name__)


async def _find_or_create_rack(db: AsyncSession, code: RackCode) -> Rack:
    result = await db.execute(
        select(Rack).where(
            Rack.rack_identifier == code.rack_identifier,
            Rack.slot_number == code.slot_number,
        )
    )
    rack = result.scalar_one_or_none()
    if rack is not None:
        return rack

    # Zone letter is the first character of the rack identifier
    rack = Rack(
        rack_code=code.rack_code,
        rack_identifier=code.rack_identifier,
        slot_number=code.slot_number,
        location=f"{code.rack_identifier}-Slot{code.slot_number}",
        zone=f"Zone {code.rack_identifier[0]}",
        is_available=True,
    )
    db.add(rack)
    await db.flush()
    logger.info(f"Rack {code.rack_code} registered on first scan")
    return rack


def _elapsed_minutes(order: Order, now) -> Optional[int]:
    started_at = as_utc(order.started_at)
    if started_at is None:
        return None
    return max(round((now - started_at).total_seconds() / 60), 0)


async def _complete_order(
    db: AsyncSession,
    order: Order,
    code: RackCode,
    request: RackScanRequest,
) -> None:
    """Move a live order into the completed store; the caller commits."""
    now = utcnow()
    pick_time = request.pick_time
    if pick_time is None:
        pick_time = _elapsed_minutes(order, now)
    if pick_time is None:
        pick_time = order.pick_time

    if await completed_store.get_completed_order(db, order.order_id) is None:
        record = CompletedOrderCreate(
            order_id=order.order_id,
            user_id=order.user_id,
            zone=order.zone,
            status=OrderStatus.COMPLETED,
            item_count=order.item_count,
            target_time=order.target_time,
            pick_time=pick_time,
            bag_id=order.bag_id,
            rack_location=code.rack_code,
            rider_name=code.rider_name,
            rider_id=request.rider_id or order.rider_id,
            started_at=as_utc(order.started_at),
            completed_at=now,
            rack_assigned_at=now,
            created_at=as_utc(order.created_at),
        )
        await completed_store.create_completed_order(db, record, commit=False)
    else:
        logger.info(
            f"Order {order.order_id} already completed, skipping duplicate",
            extra={"order_id": order.order_id},
        )

    await db.delete(order)


@router.post("/scan", response_model=ApiResponse[RackResponse])
async def scan_rack(
    request: RackScanRequest,
    principal: CurrentPrincipal,
    db: DbSession,
):
    """Park a finished order on a rack slot and hand it to its rider.

    The rack is assigned and the caller's live order, if any, is moved into
    the completed-order store in the same transaction.
    """
    code = parse_rack_qr(request.qr_code)
    rack = await _find_or_create_rack(db, code)

    if not rack.is_available:
        raise BadRequestError(
            f"Rack {code.rack_code} is not available. "
            f"Currently assigned to order {rack.current_order_id}"
        )

    rack.is_available = False
    rack.current_order_id = request.order_id
    rack.rider_name = code.rider_name
    if request.rider_id:
        rack.rider_id = request.rider_id
    rack.assigned_at = utcnow()

    result = await db.execute(
        select(Order).where(
            Order.order_id == request.order_id,
            Order.user_id == principal.user_id,
        )
    )
    order = result.scalar_one_or_none()
    if order is not None:
        await _complete_order(db, order, code, request)
    else:
        logger.warning(
            f"Order {request.order_id} not found in live orders, nothing to move",
            extra={"order_id": request.order_id, "user_id": principal.user_id},
        )

    await db.commit()
    await db.refresh(rack)

    logger.info(
        f"Rack {rack.rack_code} assigned to order {request.order_id}",
        extra={"order_id": request.order_id, "user_id": principal.user_id},
    )
    return ApiResponse(
        data=RackResponse.model_validate(rack),
        message="Rack scanned and assigned successfully",
    )


@router.get("/available", response_model=ApiResponse[list[RackResponse]])
async def list_available_racks(
    principal: CurrentPrincipal,
    db: DbSession,
    zone: Optional[str] = None,
):
    """Free rack slots, optionally within one zone."""
    query = select(Rack).where(Rack.is_available.is_(True))
    if zone:
        query = query.where(Rack.zone == zone)

    result = await db.execute(
        query.order_by(Rack.zone, Rack.rack_identifier, Rack.slot_number)
    )
    return ApiResponse(data=[RackResponse.model_validate(r) for r in result.scalars().all()])


@router.get("/{rack_code}", response_model=ApiResponse[RackResponse])
async def get_rack(
    rack_code: str,
    principal: CurrentPrincipal,
    db: DbSession,
):
    result = await db.execute(select(Rack).where(Rack.rack_code == rack_code))
    rack = result.scalar_one_or_none()
    if rack is None:
        raise NotFoundError(f"Rack not found with code {rack_code}")
    return ApiResponse(data=RackResponse.model_validate(rack))
