"""Scanned item API endpoints."""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Query, status

from app.core.config import settings
from app.core.dependencies import CurrentPrincipal, DbSession
from app.core.enums import BarcodeType
from app.core.exceptions import NotFoundError
from app.repositories import scanned_items as store
from app.schemas.common import ApiResponse, PaginatedResponse
from app.schemas.scanned_item import (
    ScannedItemCreate, ScannedItemResponse, ScannedItemFilters
)


router = APIRouter()


@router.post("", response_model=ApiResponse[ScannedItemResponse], status_code=status.HTTP_201_CREATED)
async def create_scanned_item(
    request: ScannedItemCreate,
    principal: CurrentPrincipal,
    db: DbSession,
):
    """Record one barcode scan for the caller. Rescans are recorded again."""
    item = await store.create_scanned_item(db, request, user_id=principal.user_id)
    return ApiResponse(data=ScannedItemResponse.model_validate(item))


@router.get("", response_model=PaginatedResponse[ScannedItemResponse])
async def list_scanned_items(
    principal: CurrentPrincipal,
    db: DbSession,
    order_id: Optional[str] = None,
    user_id: Optional[str] = None,
    device_id: Optional[str] = None,
    barcode_type: Optional[BarcodeType] = None,
    barcode_data: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
):
    """List scans, most recent first, filtered by order, user, device, type or date range."""
    filters = ScannedItemFilters(
        order_id=order_id,
        user_id=user_id,
        device_id=device_id,
        barcode_type=barcode_type,
        barcode_data=barcode_data,
        start_date=start_date,
        end_date=end_date,
    )
    items, total = await store.list_scanned_items(db, filters, page=page, page_size=limit)
    return PaginatedResponse.build(
        [ScannedItemResponse.model_validate(i) for i in items],
        total=total, page=page, page_size=limit,
    )


@router.get("/barcode/{barcode_data}", response_model=ApiResponse[list[ScannedItemResponse]])
async def get_barcode_history(
    barcode_data: str,
    principal: CurrentPrincipal,
    db: DbSession,
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
):
    """Every scan of one barcode, most recent first."""
    items = await store.find_by_barcode(db, barcode_data, limit=limit)
    return ApiResponse(data=[ScannedItemResponse.model_validate(i) for i in items])


@router.get("/{scanned_item_id}", response_model=ApiResponse[ScannedItemResponse])
async def get_scanned_item(
    scanned_item_id: str,
    principal: CurrentPrincipal,
    db: DbSession,
):
    """Get a specific scan by ID."""
    item = await store.get_scanned_item(db, scanned_item_id)
    if item is None:
        raise NotFoundError(f"Scanned item not found with id of {scanned_item_id}")
    return ApiResponse(data=ScannedItemResponse.model_validate(item))
