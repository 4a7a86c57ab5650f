"""Pick issue API tests."""
import pytest
from datetime import datetime, timedelta, timezone
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import InventoryStatus, ItemStatus, TaskPriority
from app.models.inventory import Inventory
from app.models.item import Item
from app.models.pick_issue import PickIssue, Task


@pytest.fixture
def stock(db_session: AsyncSession):
    async def add(*rows):
        db_session.add(Item(order_id="ORD-1", item_code="SKU-1", name="Yogurt", quantity=1))
        db_session.add_all([Inventory(sku="SKU-1", **row) for row in rows])
        await db_session.commit()
    return add


def issue(issue_type: str, bin_id: str = "BIN-1") -> dict:
    return {"order_id": "ORD-1", "sku": "SKU-1", "bin_id": bin_id, "issue_type": issue_type}


async def fetch(db_session: AsyncSession, model, *where):
    db_session.expunge_all()
    result = await db_session.execute(select(model).where(*where))
    return result.scalars().all()


@pytest.mark.asyncio
async def test_damaged_item_uses_fullest_alternate_bin(
    client: AsyncClient, db_session: AsyncSession, auth_headers: dict, stock
):
    await stock(
        dict(bin_id="BIN-1", quantity=5),
        dict(bin_id="BIN-2", quantity=2),
        dict(bin_id="BIN-3", quantity=8),
    )

    response = await client.post(
        "/api/picks/report-issue", json=issue("ITEM_DAMAGED"), headers=auth_headers
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["next_action"] == "ALTERNATE_BIN"
    assert data["bin_id"] == "BIN-3"
    assert data["pick_issue_id"]

    [damaged] = await fetch(db_session, Inventory, Inventory.bin_id == "BIN-1")
    assert damaged.status == InventoryStatus.DAMAGED
    assert damaged.quantity == 4

    [line] = await fetch(db_session, Item, Item.order_id == "ORD-1")
    assert line.status == ItemStatus.REASSIGNED
    assert line.location == "BIN-3"


@pytest.mark.asyncio
async def test_missing_item_without_stock_is_skipped(
    client: AsyncClient, db_session: AsyncSession, auth_headers: dict, stock
):
    await stock(dict(bin_id="BIN-1", quantity=3))

    response = await client.post(
        "/api/picks/report-issue", json=issue("ITEM_MISSING"), headers=auth_headers
    )

    data = response.json()["data"]
    assert data["next_action"] == "SKIP_ITEM"
    assert data["bin_id"] is None

    [task] = await fetch(db_session, Task, Task.order_id == "ORD-1")
    assert task.priority == TaskPriority.HIGH
    assert task.title == "Bin Audit Required: BIN-1"

    [line] = await fetch(db_session, Item, Item.order_id == "ORD-1")
    assert line.status == ItemStatus.SHORT


@pytest.mark.asyncio
async def test_wrong_item_opens_urgent_task(
    client: AsyncClient, db_session: AsyncSession, auth_headers: dict, stock
):
    await stock(dict(bin_id="BIN-1", quantity=3), dict(bin_id="BIN-4", quantity=1))

    response = await client.post(
        "/api/picks/report-issue", json=issue("WRONG_ITEM"), headers=auth_headers
    )

    assert response.json()["data"]["bin_id"] == "BIN-4"
    [task] = await fetch(db_session, Task, Task.order_id == "ORD-1")
    assert task.priority == TaskPriority.URGENT


@pytest.mark.asyncio
async def test_expired_item_prefers_earliest_fresh_batch(
    client: AsyncClient, db_session: AsyncSession, auth_headers: dict, stock
):
    now = datetime.now(timezone.utc)
    await stock(
        dict(bin_id="BIN-1", quantity=3, expiry_date=now - timedelta(days=1)),
        dict(bin_id="BIN-2", quantity=9, expiry_date=now - timedelta(days=2)),
        dict(bin_id="BIN-3", quantity=1, expiry_date=now + timedelta(days=30)),
        dict(bin_id="BIN-4", quantity=1, expiry_date=now + timedelta(days=5)),
        dict(bin_id="BIN-5", quantity=7),
    )

    response = await client.post(
        "/api/picks/report-issue", json=issue("ITEM_EXPIRED"), headers=auth_headers
    )

    assert response.json()["data"]["bin_id"] == "BIN-4"
    [expired] = await fetch(db_session, Inventory, Inventory.bin_id == "BIN-1")
    assert expired.status == InventoryStatus.EXPIRED
    assert expired.quantity == 3


@pytest.mark.asyncio
async def test_unknown_issue_type(client: AsyncClient, auth_headers: dict, stock):
    await stock(dict(bin_id="BIN-1", quantity=1))

    response = await client.post(
        "/api/picks/report-issue", json=issue("ITEM_STOLEN"), headers=auth_headers
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid issue type"


@pytest.mark.asyncio
async def test_unknown_order_item(client: AsyncClient, auth_headers: dict):
    response = await client.post(
        "/api/picks/report-issue", json=issue("ITEM_MISSING"), headers=auth_headers
    )

    assert response.status_code == 404
    assert response.json()["error"] == "Order item not found"


@pytest.mark.asyncio
async def test_device_timestamp_is_stored(
    client: AsyncClient, db_session: AsyncSession, auth_headers: dict, stock
):
    await stock(dict(bin_id="BIN-1", quantity=3))
    payload = {**issue("ITEM_MISSING"), "timestamp": "2026-03-01T15:30:00+05:30"}

    response = await client.post("/api/picks/report-issue", json=payload, headers=auth_headers)

    assert response.status_code == 200
    [reported] = await fetch(db_session, PickIssue, PickIssue.order_id == "ORD-1")
    assert reported.reported_at.replace(tzinfo=None) == datetime(2026, 3, 1, 10, 0)
