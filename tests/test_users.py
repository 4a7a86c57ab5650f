"""User profile API tests."""
import pytest
import uuid
from httpx import AsyncClient

from app.core.security import create_access_token
from app.models.user import User


@pytest.mark.asyncio
async def test_get_profile(client: AsyncClient, auth_headers: dict):
    response = await client.get("/api/users/profile", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["mobile"] == "9876543210"
    assert "hashed_password" not in body["data"]


@pytest.mark.asyncio
async def test_partial_update_keeps_omitted_fields(client: AsyncClient, auth_headers: dict):
    """Updating only the device leaves the name as it was."""
    response = await client.put(
        "/api/users/profile",
        json={"name": "A", "device_id": "D1"},
        headers=auth_headers,
    )
    assert response.status_code == 200

    response = await client.put(
        "/api/users/profile",
        json={"device_id": "D2"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "A"
    assert data["device_id"] == "D2"


@pytest.mark.asyncio
async def test_profile_of_missing_user_is_not_found(client: AsyncClient, test_user: User):
    token = create_access_token(user_id=str(uuid.uuid4()), role="picker")

    response = await client.get(
        "/api/users/profile", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 404
    assert response.json()["success"] is False


@pytest.mark.asyncio
@pytest.mark.parametrize("method,path", [
    ("GET", "/api/users/profile"),
    ("PUT", "/api/users/profile"),
    ("GET", "/api/scanned-items"),
    ("POST", "/api/bags/scan"),
    ("POST", "/api/picks/report-issue"),
    ("GET", "/api/orders/completed"),
    ("POST", "/api/racks/scan"),
    ("POST", "/api/items/scan"),
    ("GET", "/api/tasks"),
])
async def test_protected_routes_require_token(client: AsyncClient, method: str, path: str):
    """The gate answers 401 before the body is even validated."""
    response = await client.request(method, path, json={})

    assert response.status_code == 401
    assert response.json()["status_code"] == 401


@pytest.mark.asyncio
async def test_garbage_token_is_rejected(client: AsyncClient):
    response = await client.get(
        "/api/users/profile", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid or expired token"


@pytest.mark.asyncio
async def test_unmatched_route(client: AsyncClient):
    response = await client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": "Not found - /api/does-not-exist",
        "status_code": 404,
    }


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
