"""
Work history API tests: companies, work items, stories and links

Verifies the models -> crud -> api layers together
"""
import pytest
from httpx import AsyncClient

from tests.conftest import DataFactory, USER_A


@pytest.mark.asyncio
async def test_company_crud_flow(client: AsyncClient, factory: DataFactory):
    # 1. Create
    company = await factory.create_company(name="Acme", tags=["fintech"])
    company_id = company["id"]
    assert company["user_id"] == USER_A

    # 2. Read one
    response = await client.get(f"/api/v1/companies/{company_id}")
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Acme"

    # 3. Read list
    response = await client.get("/api/v1/companies")
    assert response.status_code == 200
    assert response.json()["data"]["total"] == 1

    # 4. Update
    response = await client.patch(f"/api/v1/companies/{company_id}", json={"description": "Payments"})
    assert response.status_code == 200
    assert response.json()["data"]["description"] == "Payments"
    assert response.json()["data"]["tags"] == ["fintech"]

    # 5. Delete
    response = await client.delete(f"/api/v1/companies/{company_id}")
    assert response.status_code == 200
    response = await client.get(f"/api/v1/companies/{company_id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_user_id_in_body_is_ignored(client: AsyncClient):
    response = await client.post(
        "/api/v1/companies", json={"name": "Spoofed", "user_id": "someone-else"}
    )
    assert response.status_code == 200
    assert response.json()["data"]["user_id"] == USER_A


@pytest.mark.asyncio
async def test_work_item_dates_are_padded(factory: DataFactory):
    work_item = await factory.create_work_item(start_date="2019", end_date="2021-03")
    assert work_item["start_date"] == "2019-01-01"
    assert work_item["end_date"] == "2021-03-01"


@pytest.mark.asyncio
async def test_work_item_requires_owned_company(client: AsyncClient):
    response = await client.post(
        "/api/v1/work-items",
        json={"company_id": "missing", "title": "PM", "start_date": "2020-01-01"},
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Company not found: missing"


@pytest.mark.asyncio
async def test_work_item_filter_and_update(client: AsyncClient, factory: DataFactory):
    company = await factory.create_company()
    other_company = await factory.create_company()
    older = await factory.create_work_item(company_id=company["id"], start_date="2018-01-01")
    newer = await factory.create_work_item(company_id=company["id"], start_date="2021-01-01")
    await factory.create_work_item(company_id=other_company["id"])

    # 1. Filter by company, newest start first
    response = await client.get("/api/v1/work-items", params={"company_id": company["id"]})
    data = response.json()["data"]
    assert data["total"] == 2
    assert [item["id"] for item in data["items"]] == [newer["id"], older["id"]]

    # 2. Mark as current
    response = await client.patch(f"/api/v1/work-items/{older['id']}", json={"end_date": None})
    assert response.status_code == 200
    assert response.json()["data"]["end_date"] is None

    # 3. Move to a company that does not exist
    response = await client.patch(f"/api/v1/work-items/{older['id']}", json={"company_id": "nope"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_story_inherits_company(client: AsyncClient, factory: DataFactory):
    work_item = await factory.create_work_item()
    story = await factory.create_story(work_item_id=work_item["id"])

    assert story["company_id"] == work_item["company_id"]
    assert story["status"] == "draft"
    assert story["confidence"] == "medium"
    assert story["times_used"] == 0
    assert story["last_used"] is None


@pytest.mark.asyncio
async def test_story_status_filter(client: AsyncClient, factory: DataFactory):
    work_item = await factory.create_work_item()
    await factory.create_story(work_item_id=work_item["id"], status="approved")
    await factory.create_story(work_item_id=work_item["id"])

    response = await client.get("/api/v1/stories", params={"status": "approved"})
    data = response.json()["data"]
    assert data["total"] == 1
    assert data["items"][0]["status"] == "approved"

    response = await client.get("/api/v1/stories", params={"work_item_id": work_item["id"]})
    assert response.json()["data"]["total"] == 2


@pytest.mark.asyncio
async def test_invalid_story_status_is_rejected(client: AsyncClient, factory: DataFactory):
    work_item = await factory.create_work_item()
    response = await client.post(
        "/api/v1/stories",
        json={"work_item_id": work_item["id"], "title": "T", "content": "C", "status": "published"},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_story_use_counter(client: AsyncClient, factory: DataFactory):
    story = await factory.create_story()

    response = await client.post(f"/api/v1/stories/{story['id']}/use")
    assert response.status_code == 200
    assert response.json()["data"]["times_used"] == 1
    assert response.json()["data"]["last_used"] is not None

    response = await client.post(f"/api/v1/stories/{story['id']}/use")
    assert response.json()["data"]["times_used"] == 2


@pytest.mark.asyncio
async def test_link_crud_and_use_counter(client: AsyncClient, factory: DataFactory):
    link = await factory.create_link(label="Launch post")
    link_id = link["id"]
    assert link["times_used"] == 0

    response = await client.patch(f"/api/v1/links/{link_id}", json={"label": "Launch retrospective"})
    assert response.json()["data"]["label"] == "Launch retrospective"

    response = await client.post(f"/api/v1/links/{link_id}/use")
    assert response.json()["data"]["times_used"] == 1

    response = await client.delete(f"/api/v1/links/{link_id}")
    assert response.status_code == 200
    response = await client.get(f"/api/v1/links/{link_id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_link_requires_owned_work_item(client: AsyncClient):
    response = await client.post(
        "/api/v1/links",
        json={"work_item_id": "missing", "url": "https://example.com", "label": "x"},
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Work item not found: missing"


@pytest.mark.asyncio
async def test_work_history_aggregate(client: AsyncClient, factory: DataFactory):
    company = await factory.create_company(name="Acme")
    work_item = await factory.create_work_item(company_id=company["id"])
    await factory.create_story(work_item_id=work_item["id"])
    await factory.create_story(work_item_id=work_item["id"])
    await factory.create_link(work_item_id=work_item["id"])
    await factory.create_company(name="Empty Co")

    response = await client.get("/api/v1/work-history")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total_work_items"] == 1
    assert data["total_stories"] == 2
    assert data["total_links"] == 1

    # Companies come back by name
    assert [c["name"] for c in data["companies"]] == ["Acme", "Empty Co"]
    acme = data["companies"][0]
    assert len(acme["work_items"]) == 1
    assert len(acme["work_items"][0]["stories"]) == 2
    assert len(acme["work_items"][0]["links"]) == 1
    assert data["companies"][1]["work_items"] == []


@pytest.mark.asyncio
async def test_delete_work_item_cascades(client: AsyncClient, factory: DataFactory):
    work_item = await factory.create_work_item()
    story = await factory.create_story(work_item_id=work_item["id"])
    link = await factory.create_link(work_item_id=work_item["id"])

    response = await client.delete(f"/api/v1/work-items/{work_item['id']}")
    assert response.status_code == 200

    assert (await client.get(f"/api/v1/stories/{story['id']}")).status_code == 404
    assert (await client.get(f"/api/v1/links/{link['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_delete_company_cascades(client: AsyncClient, factory: DataFactory):
    company = await factory.create_company()
    work_item = await factory.create_work_item(company_id=company["id"])
    story = await factory.create_story(work_item_id=work_item["id"])
    link = await factory.create_link(work_item_id=work_item["id"])

    response = await client.delete(f"/api/v1/companies/{company['id']}")
    assert response.status_code == 200

    assert (await client.get(f"/api/v1/work-items/{work_item['id']}")).status_code == 404
    assert (await client.get(f"/api/v1/stories/{story['id']}")).status_code == 404
    assert (await client.get(f"/api/v1/links/{link['id']}")).status_code == 404

    response = await client.get("/api/v1/work-history")
    assert response.json()["data"]["total_work_items"] == 0


@pytest.mark.asyncio
async def test_moving_work_item_moves_its_stories(client: AsyncClient, factory: DataFactory):
    old_company = await factory.create_company(name="Old Co")
    new_company = await factory.create_company(name="New Co")
    work_item = await factory.create_work_item(company_id=old_company["id"])
    story = await factory.create_story(work_item_id=work_item["id"])

    response = await client.patch(
        f"/api/v1/work-items/{work_item['id']}", json={"company_id": new_company["id"]}
    )
    assert response.status_code == 200
    assert response.json()["data"]["company_id"] == new_company["id"]

    response = await client.get(f"/api/v1/stories/{story['id']}")
    assert response.json()["data"]["company_id"] == new_company["id"]

    # Removing the old company leaves the moved work history alone
    assert (await client.delete(f"/api/v1/companies/{old_company['id']}")).status_code == 200
    assert (await client.get(f"/api/v1/work-items/{work_item['id']}")).status_code == 200
    assert (await client.get(f"/api/v1/stories/{story['id']}")).status_code == 200
