"""
Profile API tests
"""
import pytest
from httpx import AsyncClient

from tests.conftest import USER_A, USER_B


@pytest.mark.asyncio
async def test_profile_created_on_first_access(client: AsyncClient):
    # 1. First read creates the profile from the token claims
    response = await client.get("/api/v1/profiles/me")
    assert response.status_code == 200
    profile = response.json()["data"]
    assert profile["id"] == USER_A
    assert profile["email"] == f"{USER_A[:8]}@example.com"
    assert profile["role"] == "user"

    # 2. Second read returns the same row
    response = await client.get("/api/v1/profiles/me")
    assert response.json()["data"]["created_at"] == profile["created_at"]


@pytest.mark.asyncio
async def test_update_profile(client: AsyncClient):
    response = await client.patch(
        "/api/v1/profiles/me",
        json={"full_name": "Ada Lovelace", "avatar_url": "https://example.com/ada.png"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Profile updated"
    assert body["data"]["full_name"] == "Ada Lovelace"
    assert body["data"]["avatar_url"] == "https://example.com/ada.png"


@pytest.mark.asyncio
async def test_role_cannot_be_self_assigned(client: AsyncClient):
    response = await client.patch("/api/v1/profiles/me", json={"role": "admin"})
    assert response.status_code == 200
    assert response.json()["data"]["role"] == "user"


@pytest.mark.asyncio
async def test_profiles_are_per_user(client: AsyncClient, other_client: AsyncClient):
    await client.patch("/api/v1/profiles/me", json={"full_name": "User A"})

    response = await other_client.get("/api/v1/profiles/me")
    assert response.json()["data"]["id"] == USER_B
    assert response.json()["data"]["full_name"] is None
