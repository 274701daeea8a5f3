"""
Cross-user isolation tests

A row owned by someone else must behave exactly like a missing row.
"""
import pytest
from httpx import AsyncClient

from tests.conftest import DataFactory


@pytest.mark.asyncio
async def test_lists_only_show_own_rows(
    client: AsyncClient,
    other_client: AsyncClient,
    factory: DataFactory,
    other_factory: DataFactory,
):
    await factory.create_story()
    await other_factory.create_story()
    await other_factory.create_story()

    for path in ("/api/v1/companies", "/api/v1/work-items", "/api/v1/stories"):
        response = await client.get(path)
        assert response.json()["data"]["total"] == 1, path
        response = await other_client.get(path)
        assert response.json()["data"]["total"] == 2, path

    response = await client.get("/api/v1/work-history")
    assert response.json()["data"]["total_stories"] == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("path", [
    "/api/v1/companies/{company_id}",
    "/api/v1/work-items/{work_item_id}",
    "/api/v1/stories/{story_id}",
    "/api/v1/links/{link_id}",
])
async def test_foreign_rows_are_not_found(
    path: str,
    other_client: AsyncClient,
    factory: DataFactory,
):
    work_item = await factory.create_work_item()
    story = await factory.create_story(work_item_id=work_item["id"])
    link = await factory.create_link(work_item_id=work_item["id"])
    url = path.format(
        company_id=work_item["company_id"],
        work_item_id=work_item["id"],
        story_id=story["id"],
        link_id=link["id"],
    )

    assert (await other_client.get(url)).status_code == 404
    assert (await other_client.patch(url, json={"tags": ["hijacked"]})).status_code == 404
    assert (await other_client.delete(url)).status_code == 404


@pytest.mark.asyncio
async def test_foreign_rows_survive_mutation_attempts(
    client: AsyncClient,
    other_client: AsyncClient,
    factory: DataFactory,
):
    story = await factory.create_story()

    await other_client.post(f"/api/v1/stories/{story['id']}/use")
    await other_client.delete(f"/api/v1/stories/{story['id']}")

    response = await client.get(f"/api/v1/stories/{story['id']}")
    assert response.status_code == 200
    assert response.json()["data"]["times_used"] == 0


@pytest.mark.asyncio
async def test_cannot_attach_work_item_to_foreign_company(
    other_client: AsyncClient,
    factory: DataFactory,
):
    company = await factory.create_company()
    response = await other_client.post(
        "/api/v1/work-items",
        json={"company_id": company["id"], "title": "Intruder", "start_date": "2020-01-01"},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_cannot_attach_story_to_foreign_work_item(
    other_client: AsyncClient,
    factory: DataFactory,
):
    work_item = await factory.create_work_item()
    response = await other_client.post(
        "/api/v1/stories",
        json={"work_item_id": work_item["id"], "title": "Intruder", "content": "Nope"},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_cover_letters_are_private(other_client: AsyncClient, factory: DataFactory):
    letter = await factory.create_cover_letter()
    assert (await other_client.get(f"/api/v1/cover-letters/{letter['id']}")).status_code == 404
    assert (await other_client.get(f"/api/v1/templates/{letter['template_id']}")).status_code == 404
    assert (
        await other_client.get(f"/api/v1/job-descriptions/{letter['job_description_id']}")
    ).status_code == 404
