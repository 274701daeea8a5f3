"""
Job description, template and cover letter API tests
"""
import pytest
from httpx import AsyncClient

from tests.conftest import DataFactory


@pytest.mark.asyncio
async def test_job_description_crud_flow(client: AsyncClient, factory: DataFactory):
    # 1. Create
    jd = await factory.create_job_description(company="Globex", role="Staff PM")
    assert jd["extracted_requirements"] == ["5+ years PM", "B2B SaaS"]

    # 2. Update
    response = await client.patch(
        f"/api/v1/job-descriptions/{jd['id']}",
        json={"extracted_requirements": ["SQL"]},
    )
    assert response.status_code == 200
    assert response.json()["data"]["extracted_requirements"] == ["SQL"]
    assert response.json()["data"]["company"] == "Globex"

    # 3. List
    response = await client.get("/api/v1/job-descriptions")
    assert response.json()["data"]["total"] == 1

    # 4. Delete
    response = await client.delete(f"/api/v1/job-descriptions/{jd['id']}")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_cover_letter_crud_flow(client: AsyncClient, factory: DataFactory):
    # 1. Create
    letter = await factory.create_cover_letter()
    letter_id = letter["id"]
    assert letter["status"] == "draft"
    assert letter["llm_feedback"] == {}

    # 2. Review
    response = await client.patch(
        f"/api/v1/cover-letters/{letter_id}",
        json={"status": "reviewed", "llm_feedback": {"score": 82}},
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "reviewed"
    assert response.json()["data"]["llm_feedback"] == {"score": 82}

    # 3. Filter by status
    response = await client.get("/api/v1/cover-letters", params={"status": "reviewed"})
    assert response.json()["data"]["total"] == 1
    response = await client.get("/api/v1/cover-letters", params={"status": "finalized"})
    assert response.json()["data"]["total"] == 0

    # 4. Delete
    response = await client.delete(f"/api/v1/cover-letters/{letter_id}")
    assert response.status_code == 200
    response = await client.get(f"/api/v1/cover-letters/{letter_id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_cover_letter_requires_existing_references(client: AsyncClient, factory: DataFactory):
    jd = await factory.create_job_description()
    response = await client.post(
        "/api/v1/cover-letters",
        json={"template_id": "missing", "job_description_id": jd["id"]},
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Template not found: missing"


@pytest.mark.asyncio
async def test_cover_letter_cannot_use_foreign_template(
    client: AsyncClient,
    factory: DataFactory,
    other_factory: DataFactory,
):
    foreign_template = await other_factory.create_template()
    jd = await factory.create_job_description()

    response = await client.post(
        "/api/v1/cover-letters",
        json={"template_id": foreign_template["id"], "job_description_id": jd["id"]},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_template_in_use_cannot_be_deleted(client: AsyncClient, factory: DataFactory):
    template = await factory.create_template()
    letter = await factory.create_cover_letter(template_id=template["id"])

    response = await client.delete(f"/api/v1/templates/{template['id']}")
    assert response.status_code == 409
    assert response.json()["message"] == "Template is used by existing cover letters"

    # Free once the letter is gone
    await client.delete(f"/api/v1/cover-letters/{letter['id']}")
    response = await client.delete(f"/api/v1/templates/{template['id']}")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_job_description_in_use_cannot_be_deleted(client: AsyncClient, factory: DataFactory):
    jd = await factory.create_job_description()
    await factory.create_cover_letter(job_description_id=jd["id"])
    await factory.create_cover_letter(job_description_id=jd["id"])

    response = await client.delete(f"/api/v1/job-descriptions/{jd['id']}")
    assert response.status_code == 409
    assert response.json()["message"] == "Job description is used by 2 cover letter(s)"


@pytest.mark.asyncio
async def test_template_sections_update(client: AsyncClient, factory: DataFactory):
    template = await factory.create_template(name="Default")
    response = await client.patch(
        f"/api/v1/templates/{template['id']}",
        json={"sections": [{"type": "intro"}]},
    )
    assert response.status_code == 200
    assert response.json()["data"]["sections"] == [{"type": "intro"}]
    assert response.json()["data"]["name"] == "Default"
