"""
Dashboard API tests
"""
from datetime import date

import pytest
from httpx import AsyncClient

from tests.conftest import DataFactory


@pytest.mark.asyncio
async def test_empty_dashboard(client: AsyncClient):
    response = await client.get("/api/v1/dashboard")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["stats"] == {
        "stories": 0,
        "cover_letters": 0,
        "skills_coverage": 0,
        "last_month_stories": 0,
        "last_month_cover_letters": 0,
        "skills_improvement": 0,
    }
    assert data["top_roles"] == []
    assert data["content_health"]["stories"] == {"count": 0, "status": "critical"}
    assert data["coverage_map"]["priority_gaps"] == ["Product Strategy"]
    assert len(data["coverage_map"]["competencies"]) == 10


@pytest.mark.asyncio
async def test_dashboard_counts(client: AsyncClient, factory: DataFactory, other_factory: DataFactory):
    company = await factory.create_company()
    pm = await factory.create_work_item(company_id=company["id"], title="Product Manager")
    await factory.create_work_item(company_id=company["id"], title="Product Manager")
    await factory.create_work_item(company_id=company["id"], title="Analyst")
    await factory.create_story(work_item_id=pm["id"], status="approved")
    await factory.create_story(work_item_id=pm["id"])
    await factory.create_cover_letter()

    # Someone else's rows never count
    await other_factory.create_story(status="approved")

    response = await client.get("/api/v1/dashboard")
    data = response.json()["data"]

    stats = data["stats"]
    assert stats["stories"] == 3
    assert stats["cover_letters"] == 1
    assert stats["skills_coverage"] == 8
    assert stats["last_month_stories"] == 3
    assert stats["last_month_cover_letters"] == 1
    assert stats["skills_improvement"] == 8

    top = data["top_roles"][0]
    assert top["title"] == "Product Manager"
    assert top["count"] == 2
    assert top["percentage"] == 67
    assert date.fromisoformat(top["last_applied"])
    assert data["top_roles"][1]["percentage"] == 33

    health = data["content_health"]
    assert health["stories"]["count"] == 3
    assert health["saved_sections"] == {"count": 1, "status": "critical"}
    assert health["cover_letters"]["count"] == 1
