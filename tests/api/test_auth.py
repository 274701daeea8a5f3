"""
Authentication and envelope tests
"""
import pytest
from httpx import AsyncClient

from tests.conftest import USER_A, make_token


@pytest.mark.asyncio
async def test_health_is_public(anon_client: AsyncClient):
    response = await anon_client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["code"] == 200
    assert body["data"] == {"status": "healthy"}


@pytest.mark.asyncio
async def test_root_reports_version(anon_client: AsyncClient):
    response = await anon_client.get("/")
    assert response.status_code == 200
    assert response.json()["data"]["version"] == "0.1.0"


@pytest.mark.asyncio
async def test_missing_token_is_rejected(anon_client: AsyncClient):
    response = await anon_client.get("/api/v1/companies")
    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["code"] == 401
    assert body["message"] == "Missing bearer token"
    assert body["data"] is None


@pytest.mark.asyncio
async def test_malformed_token_is_rejected(anon_client: AsyncClient):
    response = await anon_client.get(
        "/api/v1/companies", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


@pytest.mark.asyncio
async def test_expired_token_is_rejected(anon_client: AsyncClient):
    token = make_token(USER_A, expires_in=-60)
    response = await anon_client.get(
        "/api/v1/companies", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Token has expired"


@pytest.mark.asyncio
async def test_token_signed_with_another_secret_is_rejected(anon_client: AsyncClient):
    token = make_token(USER_A, secret="some-other-secret-that-is-long-enough")
    response = await anon_client.get(
        "/api/v1/companies", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


@pytest.mark.asyncio
async def test_wrong_audience_is_rejected(anon_client: AsyncClient):
    token = make_token(USER_A, audience="anon")
    response = await anon_client.get(
        "/api/v1/dashboard", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_validation_error_envelope(client: AsyncClient):
    response = await client.post("/api/v1/companies", json={"name": ""})
    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Request validation failed"
    assert body["data"]["errors"]


@pytest.mark.asyncio
async def test_unknown_id_is_not_found(client: AsyncClient):
    response = await client.get("/api/v1/companies/does-not-exist")
    assert response.status_code == 404
    assert response.json()["message"] == "Company not found: does-not-exist"
