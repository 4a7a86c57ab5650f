"""Scanned item API tests."""
import pytest
from datetime import datetime, timedelta, timezone
from httpx import AsyncClient

from app.core.enums import BarcodeType
from app.models.user import User
from app.schemas.scanned_item import ScannedItemCreate


@pytest.mark.asyncio
async def test_create_scanned_item(client: AsyncClient, auth_headers: dict, test_user: User):
    """A scan is recorded for the caller with scanned_at defaulted."""
    response = await client.post(
        "/api/scanned-items",
        json={
            "barcode_data": "8901234567890",
            "barcode_type": "ean13",
            "order_id": "ORD-1001",
            "device_id": "HHD-01",
            "metadata": {"item_name": "Milk 1L", "quantity": 2, "aisle": 4},
        },
        headers=auth_headers,
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["barcode_type"] == "ean13"
    assert data["user_id"] == test_user.id
    assert data["scanned_at"] is not None
    assert data["metadata"] == {"item_name": "Milk 1L", "quantity": 2, "aisle": 4}


@pytest.mark.asyncio
async def test_barcode_type_defaults_to_other(client: AsyncClient, auth_headers: dict):
    response = await client.post(
        "/api/scanned-items", json={"barcode_data": "XYZ"}, headers=auth_headers
    )

    assert response.status_code == 201
    assert response.json()["data"]["barcode_type"] == "other"


def test_seven_symbologies():
    assert {t.value for t in BarcodeType} == {
        "qr", "ean13", "ean8", "code128", "code39", "upc", "other"
    }


@pytest.mark.asyncio
async def test_unknown_symbology_rejected(client: AsyncClient, auth_headers: dict):
    response = await client.post(
        "/api/scanned-items",
        json={"barcode_data": "123", "barcode_type": "datamatrix"},
        headers=auth_headers,
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_nested_metadata_rejected(client: AsyncClient, auth_headers: dict):
    response = await client.post(
        "/api/scanned-items",
        json={"barcode_data": "123", "metadata": {"dims": {"w": 1}}},
        headers=auth_headers,
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_empty_barcode_rejected(client: AsyncClient, auth_headers: dict):
    response = await client.post(
        "/api/scanned-items", json={"barcode_data": ""}, headers=auth_headers
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_rescan_records_again_and_history_is_newest_first(client: AsyncClient, auth_headers: dict):
    for scanned_at in ("2026-01-01T10:00:00Z", "2026-01-01T11:00:00Z"):
        response = await client.post(
            "/api/scanned-items",
            json={"barcode_data": "SKU-42", "scanned_at": scanned_at},
            headers=auth_headers,
        )
        assert response.status_code == 201

    response = await client.get("/api/scanned-items/barcode/SKU-42", headers=auth_headers)

    assert response.status_code == 200
    history = response.json()["data"]
    assert len(history) == 2
    assert history[0]["scanned_at"].startswith("2026-01-01T11:00")


@pytest.mark.asyncio
async def test_list_filters_by_order(client: AsyncClient, auth_headers: dict):
    for order_id in ("ORD-A", "ORD-A", "ORD-B"):
        await client.post(
            "/api/scanned-items",
            json={"barcode_data": "111", "order_id": order_id},
            headers=auth_headers,
        )

    response = await client.get(
        "/api/scanned-items", params={"order_id": "ORD-A"}, headers=auth_headers
    )

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    assert body["count"] == 2
    assert all(item["order_id"] == "ORD-A" for item in body["data"])


@pytest.mark.asyncio
async def test_get_scanned_item_not_found(client: AsyncClient, auth_headers: dict):
    response = await client.get("/api/scanned-items/missing-id", headers=auth_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_offset_timestamps_stored_in_utc(client: AsyncClient, auth_headers: dict):
    """12:00+05:30 is 06:30Z, so the 08:00Z scan is the more recent one."""
    for barcode, scanned_at in [("EARLY", "2026-03-01T12:00:00+05:30"), ("LATE", "2026-03-01T08:00:00Z")]:
        response = await client.post(
            "/api/scanned-items",
            json={"barcode_data": barcode, "order_id": "ORD-TZ", "scanned_at": scanned_at},
            headers=auth_headers,
        )
        assert response.status_code == 201

    response = await client.get("/api/scanned-items", params={"order_id": "ORD-TZ"}, headers=auth_headers)

    data = response.json()["data"]
    assert [d["barcode_data"] for d in data] == ["LATE", "EARLY"]
    assert data[1]["scanned_at"].startswith("2026-03-01T06:30:00")


def test_scan_timestamp_converted_to_utc():
    scan = ScannedItemCreate(barcode_data="X", scanned_at="2026-03-01T12:00:00+05:30")

    assert scan.scanned_at == datetime(2026, 3, 1, 6, 30, tzinfo=timezone.utc)
    assert scan.scanned_at.utcoffset() == timedelta(0)
