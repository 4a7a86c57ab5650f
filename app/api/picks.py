"""Pick issue API endpoints."""
from typing import Optional

from fastapi import APIRouter
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import CurrentPrincipal, DbSession
from app.core.enums import (
    PickIssueType, PickNextAction, InventoryStatus, ItemStatus, TaskPriority, TaskStatus
)
from app.core.exceptions import BadRequestError, NotFoundError
from app.core.logging import get_logger
from app.models.inventory import Inventory
from app.models.item import Item
from app.models.pick_issue import PickIssue, Task
from app.repositories.inventory import get_bin_stock, find_alternate_bin
from app.schemas.common import ApiResponse
from app.schemas.pick import ReportIssueRequest, ReportIssueResponse


router = APIRouter()
logger = get_logger(__name__)


async def _mark_bin(
    db: AsyncSession,
    request: ReportIssueRequest,
    status: InventoryStatus,
    decrement: bool = False,
) -> None:
    stock = await get_bin_stock(db, request.sku, request.bin_id)
    if stock is None:
        return
    stock.status = status
    if decrement:
        stock.quantity = max(stock.quantity - 1, 0)


def _open_task(request: ReportIssueRequest, issue_type: PickIssueType, user_id: str) -> Task:
    if issue_type == PickIssueType.WRONG_ITEM:
        return Task(
            title=f"Bin Correction Required: {request.bin_id}",
            description=(
                f"Wrong item found in bin {request.bin_id} for order "
                f"{request.order_id}. Expected: {request.sku}"
            ),
            user_id=user_id,
            order_id=request.order_id,
            status=TaskStatus.PENDING,
            priority=TaskPriority.URGENT,
        )
    return Task(
        title=f"Bin Audit Required: {request.bin_id}",
        description=(
            f"Item {request.sku} reported as missing in bin {request.bin_id} "
            f"for order {request.order_id}"
        ),
        user_id=user_id,
        order_id=request.order_id,
        status=TaskStatus.PENDING,
        priority=TaskPriority.HIGH,
    )


@router.post("/report-issue", response_model=ApiResponse[ReportIssueResponse])
async def report_issue(
    request: ReportIssueRequest,
    principal: CurrentPrincipal,
    db: DbSession,
):
    """Record a picking problem and tell the picker where to go next.

    Damaged stock is marked and decremented, expired stock is blocked,
    missing or wrong items open a follow-up task for the bin. In every case
    the order line is reassigned to an alternate bin when one has stock,
    otherwise it is marked short.
    """
    try:
        issue_type = PickIssueType(request.issue_type)
    except ValueError:
        raise BadRequestError("Invalid issue type") from None

    result = await db.execute(
        select(Item).where(Item.order_id == request.order_id, Item.item_code == request.sku)
    )
    order_item = result.scalars().first()
    if order_item is None:
        raise NotFoundError("Order item not found")

    issue = PickIssue(
        order_id=request.order_id,
        sku=request.sku,
        bin_id=request.bin_id,
        issue_type=issue_type,
        reported_by=principal.user_id,
        device_id=request.device_id,
        notes=request.notes,
        reported_at=request.timestamp,
    )
    db.add(issue)

    fresh_only = False
    if issue_type == PickIssueType.ITEM_DAMAGED:
        await _mark_bin(db, request, InventoryStatus.DAMAGED, decrement=True)
    elif issue_type == PickIssueType.ITEM_EXPIRED:
        await _mark_bin(db, request, InventoryStatus.EXPIRED)
        fresh_only = True
    else:
        db.add(_open_task(request, issue_type, principal.user_id))

    # Pending bin updates must be visible to the alternate lookup
    await db.flush()
    alternate: Optional[Inventory] = await find_alternate_bin(
        db, request.sku, exclude_bin_id=request.bin_id, fresh_only=fresh_only
    )

    if alternate is not None:
        next_action = PickNextAction.ALTERNATE_BIN
        order_item.status = ItemStatus.REASSIGNED
        order_item.location = alternate.bin_id
    else:
        next_action = PickNextAction.SKIP_ITEM
        order_item.status = ItemStatus.SHORT

    await db.commit()
    await db.refresh(issue)

    logger.info(
        f"Pick issue {issue_type.value} on {request.sku} in {request.bin_id}: {next_action.value}",
        extra={"order_id": request.order_id, "user_id": principal.user_id},
    )

    return ApiResponse(
        data=ReportIssueResponse(
            pick_issue_id=issue.id,
            next_action=next_action,
            bin_id=alternate.bin_id if alternate is not None else None,
        )
    )
