"""Live order API tests."""
import pytest
from httpx import AsyncClient


ORDER = {
    "order_id": "ORD-5001",
    "zone": "Zone B",
    "item_count": 2,
    "target_time": 15,
    "items": [
        {"item_code": "SKU-1", "name": "Bread", "quantity": 1, "category": "Grocery"},
        {"item_code": "SKU-2", "name": "Chips", "quantity": 3, "category": "Snacks"},
    ],
}


@pytest.mark.asyncio
async def test_create_and_get_order(client: AsyncClient, auth_headers: dict):
    response = await client.post("/api/orders", json=ORDER, headers=auth_headers)

    assert response.status_code == 201
    created = response.json()["data"]
    assert created["status"] == "received"
    assert created["started_at"] is not None

    response = await client.get("/api/orders/ORD-5001", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["order"]["order_id"] == "ORD-5001"
    assert {i["item_code"] for i in data["items"]} == {"SKU-1", "SKU-2"}


@pytest.mark.asyncio
async def test_duplicate_order_conflicts(client: AsyncClient, auth_headers: dict):
    await client.post("/api/orders", json=ORDER, headers=auth_headers)

    response = await client.post("/api/orders", json=ORDER, headers=auth_headers)

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_zero_item_count_rejected(client: AsyncClient, auth_headers: dict):
    response = await client.post(
        "/api/orders", json={**ORDER, "item_count": 0}, headers=auth_headers
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_missing_order_not_found(client: AsyncClient, auth_headers: dict):
    response = await client.get("/api/orders/NOPE", headers=auth_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_status_update_stamps_completion(client: AsyncClient, auth_headers: dict):
    await client.post("/api/orders", json=ORDER, headers=auth_headers)

    response = await client.put(
        "/api/orders/ORD-5001/status",
        json={"status": "picking", "bag_id": "BAG-001"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    picking = response.json()["data"]
    assert picking["status"] == "picking"
    assert picking["bag_id"] == "BAG-001"
    assert picking["completed_at"] is None

    response = await client.put(
        "/api/orders/ORD-5001/status", json={"status": "completed"}, headers=auth_headers
    )
    completed = response.json()["data"]
    assert completed["completed_at"] is not None
    assert completed["started_at"] == picking["started_at"]
    assert completed["bag_id"] == "BAG-001"


@pytest.mark.asyncio
async def test_list_orders_by_status(client: AsyncClient, auth_headers: dict):
    await client.post("/api/orders", json=ORDER, headers=auth_headers)
    await client.post(
        "/api/orders", json={**ORDER, "order_id": "ORD-5002", "items": []}, headers=auth_headers
    )
    await client.put(
        "/api/orders/ORD-5002/status", json={"status": "picking"}, headers=auth_headers
    )

    response = await client.get(
        "/api/orders", params={"status": "picking"}, headers=auth_headers
    )

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    assert body["data"][0]["order_id"] == "ORD-5002"
