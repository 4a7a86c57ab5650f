"""Order line API tests."""
import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import ItemStatus
from app.models.item import Item


@pytest_asyncio.fixture
async def lines(db_session: AsyncSession) -> list:
    items = [
        Item(order_id="ORD-1", item_code="SKU-1", name="Milk 1L", location="A1-01"),
        Item(order_id="ORD-1", item_code="SKU-2", name="Bread", status=ItemStatus.SCANNED),
        Item(order_id="ORD-2", item_code="SKU-1", name="Milk 1L"),
    ]
    db_session.add_all(items)
    await db_session.commit()
    return items


@pytest.mark.asyncio
async def test_get_order_items(client: AsyncClient, auth_headers: dict, lines: list):
    response = await client.get("/api/items/order/ORD-1", headers=auth_headers)

    assert response.status_code == 200
    codes = sorted(i["item_code"] for i in response.json()["data"])
    assert codes == ["SKU-1", "SKU-2"]


@pytest.mark.asyncio
async def test_get_order_items_by_status(client: AsyncClient, auth_headers: dict, lines: list):
    response = await client.get(
        "/api/items/order/ORD-1", params={"status": "scanned"}, headers=auth_headers
    )

    assert [i["item_code"] for i in response.json()["data"]] == ["SKU-2"]


@pytest.mark.asyncio
async def test_scan_item_marks_line_scanned(client: AsyncClient, auth_headers: dict, lines: list):
    response = await client.post(
        "/api/items/scan",
        json={"order_id": "ORD-2", "item_code": "SKU-1"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == lines[2].id
    assert data["status"] == "scanned"
    assert data["scanned_at"] is not None


@pytest.mark.asyncio
async def test_scan_unknown_item(client: AsyncClient, auth_headers: dict, lines: list):
    response = await client.post(
        "/api/items/scan",
        json={"order_id": "ORD-1", "item_code": "SKU-9"},
        headers=auth_headers,
    )

    assert response.status_code == 404
    assert response.json()["error"] == "Item not found"


@pytest.mark.asyncio
async def test_scan_requires_order_and_code(client: AsyncClient, auth_headers: dict):
    response = await client.post("/api/items/scan", json={"order_id": "ORD-1"}, headers=auth_headers)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_mark_item_not_found(client: AsyncClient, auth_headers: dict, lines: list):
    response = await client.put(
        f"/api/items/{lines[0].id}/not-found",
        json={"notes": "Shelf empty"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "not_found"
    assert data["notes"] == "Shelf empty"


@pytest.mark.asyncio
async def test_update_item_keeps_omitted_fields(client: AsyncClient, auth_headers: dict, lines: list):
    response = await client.put(
        f"/api/items/{lines[0].id}", json={"status": "picked"}, headers=auth_headers
    )

    data = response.json()["data"]
    assert data["status"] == "picked"
    assert data["location"] == "A1-01"


@pytest.mark.asyncio
async def test_update_missing_item(client: AsyncClient, auth_headers: dict):
    response = await client.put("/api/items/nope", json={"status": "found"}, headers=auth_headers)

    assert response.status_code == 404
    assert response.json()["error"] == "Item not found with id of nope"
