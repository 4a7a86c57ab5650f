"""Rack API tests."""
import pytest
from httpx import AsyncClient
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.completed_order import CompletedOrder
from app.models.order import Order
from app.models.rack import Rack


async def open_order(client: AsyncClient, headers: dict, order_id: str = "ORD-7001"):
    response = await client.post(
        "/api/orders",
        json={"order_id": order_id, "zone": "Zone D", "item_count": 4, "target_time": 20},
        headers=headers,
    )
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_rack_scan_moves_order_once(client: AsyncClient, db_session: AsyncSession, auth_headers: dict):
    await open_order(client, auth_headers)
    await client.put(
        "/api/orders/ORD-7001/status", json={"bag_id": "BAG-001"}, headers=auth_headers
    )

    response = await client.post(
        "/api/racks/scan",
        json={"qr_code": "Rack-D1-Slot3 (John Doe)", "order_id": "ORD-7001", "rider_id": "R-9"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    rack = response.json()["data"]
    assert rack["rack_code"] == "Rack-D1-Slot3"
    assert rack["zone"] == "Zone D"
    assert rack["location"] == "D1-Slot3"
    assert rack["is_available"] is False
    assert rack["current_order_id"] == "ORD-7001"
    assert rack["rider_name"] == "John Doe"

    live = await db_session.execute(select(func.count(Order.id)).where(Order.order_id == "ORD-7001"))
    assert live.scalar() == 0

    result = await db_session.execute(
        select(CompletedOrder).where(CompletedOrder.order_id == "ORD-7001")
    )
    completed = result.scalars().all()
    assert len(completed) == 1
    assert completed[0].rack_location == "Rack-D1-Slot3"
    assert completed[0].rider_name == "John Doe"
    assert completed[0].rider_id == "R-9"
    assert completed[0].bag_id == "BAG-001"
    assert completed[0].item_count == 4
    assert completed[0].pick_time == 0


@pytest.mark.asyncio
async def test_explicit_pick_time_wins(client: AsyncClient, db_session: AsyncSession, auth_headers: dict):
    await open_order(client, auth_headers, "ORD-7002")

    await client.post(
        "/api/racks/scan",
        json={"qr_code": "Rack-A1-Slot1 (Ravi)", "order_id": "ORD-7002", "pick_time": 11},
        headers=auth_headers,
    )

    result = await db_session.execute(
        select(CompletedOrder.pick_time).where(CompletedOrder.order_id == "ORD-7002")
    )
    assert result.scalar() == 11


@pytest.mark.asyncio
async def test_occupied_rack_rejected(client: AsyncClient, auth_headers: dict):
    first = await client.post(
        "/api/racks/scan",
        json={"qr_code": "Rack-B2-Slot1 (Asha)", "order_id": "ORD-1"},
        headers=auth_headers,
    )
    assert first.status_code == 200

    response = await client.post(
        "/api/racks/scan",
        json={"qr_code": "Rack-B2-Slot1 (Asha)", "order_id": "ORD-2"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert "Currently assigned to order ORD-1" in response.json()["error"]


@pytest.mark.asyncio
async def test_malformed_rack_qr(client: AsyncClient, auth_headers: dict):
    response = await client.post(
        "/api/racks/scan",
        json={"qr_code": "Rack-D1-Slot3", "order_id": "ORD-1"},
        headers=auth_headers,
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_available_racks_by_zone(client: AsyncClient, db_session: AsyncSession, auth_headers: dict):
    db_session.add_all([
        Rack(rack_code="Rack-A1-Slot1", rack_identifier="A1", slot_number=1,
             location="A1-Slot1", zone="Zone A"),
        Rack(rack_code="Rack-A1-Slot2", rack_identifier="A1", slot_number=2,
             location="A1-Slot2", zone="Zone A", is_available=False),
        Rack(rack_code="Rack-C1-Slot1", rack_identifier="C1", slot_number=1,
             location="C1-Slot1", zone="Zone C"),
    ])
    await db_session.commit()

    response = await client.get(
        "/api/racks/available", params={"zone": "Zone A"}, headers=auth_headers
    )

    assert response.status_code == 200
    assert [r["rack_code"] for r in response.json()["data"]] == ["Rack-A1-Slot1"]


@pytest.mark.asyncio
async def test_get_rack(client: AsyncClient, auth_headers: dict):
    await client.post(
        "/api/racks/scan",
        json={"qr_code": "Rack-C3-Slot2 (Meena)", "order_id": "ORD-3"},
        headers=auth_headers,
    )

    response = await client.get("/api/racks/Rack-C3-Slot2", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"]["rider_name"] == "Meena"

    response = await client.get("/api/racks/Rack-Z9-Slot9", headers=auth_headers)
    assert response.status_code == 404
