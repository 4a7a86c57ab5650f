"""Bag API endpoints."""
from fastapi import APIRouter, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.codes import parse_bag_qr
from app.core.database import utcnow
from app.core.dependencies import CurrentPrincipal, DbSession
from app.core.enums import BagStatus
from app.core.exceptions import ConflictError, NotFoundError
from app.core.logging import get_logger
from app.models.bag import Bag
from app.schemas.bag import BagScanRequest, BagUpdateRequest, BagResponse
from app.schemas.common import ApiResponse


router = APIRouter()
logger = get_logger(__name__)


def _already_scanned(bag_id: str, order_id: str) -> ConflictError:
    return ConflictError(
        f"Bag {bag_id} has already been scanned for order {order_id}. "
        "Please scan a different bag.",
        code="BAG_ALREADY_SCANNED",
    )


async def get_bag_or_404(db: AsyncSession, bag_id: str) -> Bag:
    result = await db.execute(select(Bag).where(Bag.bag_id == bag_id))
    bag = result.scalar_one_or_none()
    if bag is None:
        raise NotFoundError(f"Bag not found with id of {bag_id}")
    return bag


@router.post("/scan", response_model=ApiResponse[BagResponse], status_code=status.HTTP_201_CREATED)
async def scan_bag(
    request: BagScanRequest,
    principal: CurrentPrincipal,
    db: DbSession,
):
    """Attach a freshly scanned bag to an order. Each bag can be scanned once."""
    code = parse_bag_qr(request.qr_code)

    result = await db.execute(select(Bag).where(Bag.bag_id == code.bag_id))
    existing = result.scalar_one_or_none()
    if existing is not None:
        raise _already_scanned(code.bag_id, existing.order_id)

    bag = Bag(
        bag_id=code.bag_id,
        order_id=request.order_id,
        user_id=principal.user_id,
        size=code.size,
        status=BagStatus.SCANNED,
        scanned_at=utcnow(),
    )
    db.add(bag)

    try:
        await db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent scan of the same bag
        await db.rollback()
        raise _already_scanned(code.bag_id, request.order_id) from e

    await db.refresh(bag)

    logger.info(
        f"Bag {bag.bag_id} scanned",
        extra={"bag_id": bag.bag_id, "order_id": bag.order_id, "user_id": principal.user_id},
    )
    return ApiResponse(data=BagResponse.model_validate(bag), message="Bag scanned successfully")


@router.get("/{bag_id}", response_model=ApiResponse[BagResponse])
async def get_bag(
    bag_id: str,
    principal: CurrentPrincipal,
    db: DbSession,
):
    bag = await get_bag_or_404(db, bag_id)
    return ApiResponse(data=BagResponse.model_validate(bag))


@router.put("/{bag_id}", response_model=ApiResponse[BagResponse])
async def update_bag(
    bag_id: str,
    request: BagUpdateRequest,
    principal: CurrentPrincipal,
    db: DbSession,
):
    """Patch bag status and/or photo URL."""
    bag = await get_bag_or_404(db, bag_id)

    if request.status:
        bag.status = request.status
    if request.photo_url:
        bag.photo_url = request.photo_url

    await db.commit()
    await db.refresh(bag)
    return ApiResponse(data=BagResponse.model_validate(bag))
