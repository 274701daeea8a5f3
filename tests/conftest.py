"""
Test configuration

Fixtures: in-memory database, signed-in / anonymous HTTP clients and a test
data factory.
"""
import os
import tempfile
import time
from dataclasses import dataclass, field
from typing import AsyncGenerator, Optional

# Settings are read on import, so the environment is fixed up first
_TMP_DIR = tempfile.mkdtemp(prefix="narrata-tests-")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret-with-at-least-32-bytes!"
os.environ["FALLBACK_STORE_PATH"] = os.path.join(_TMP_DIR, "fallback_store.json")
os.environ["UPLOAD_DIR"] = os.path.join(_TMP_DIR, "uploads")
os.environ["LLM_API_KEY"] = ""
os.environ["PDL_API_KEY"] = ""
os.environ["GOOGLE_APPS_SCRIPT_URL"] = ""
os.environ["GOOGLE_SHEETS_ID"] = ""
os.environ["LINKEDIN_CLIENT_ID"] = ""
os.environ["LINKEDIN_CLIENT_SECRET"] = ""

import jwt  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402

from narrata import models  # noqa: E402,F401
from narrata.core.config import settings  # noqa: E402
from narrata.core.database import get_db  # noqa: E402
from narrata.main import create_app  # noqa: E402

USER_A = "11111111-1111-1111-1111-111111111111"
USER_B = "22222222-2222-2222-2222-222222222222"


def make_token(
    user_id: str,
    email: Optional[str] = None,
    expires_in: int = 3600,
    secret: Optional[str] = None,
    audience: str = "authenticated",
) -> str:
    """Sign an access token the way Supabase Auth does"""
    now = int(time.time())
    payload = {
        "sub": user_id,
        "email": email or f"{user_id[:8]}@example.com",
        "role": "authenticated",
        "aud": audience,
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(payload, secret or settings.supabase_jwt_secret, algorithm="HS256")


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


# ========== Test data factory ==========

@dataclass
class DataFactory:
    """
    Test data factory

    Creates rows through the API so every test exercises the same paths
    """
    client: AsyncClient
    _counter: int = field(default=0, repr=False)

    def _next_id(self) -> str:
        self._counter += 1
        return str(self._counter)

    async def create_company(self, **overrides) -> dict:
        suffix = self._next_id()
        data = {
            "name": f"Company {suffix}",
            "description": "A product company",
            "tags": ["saas"],
            **overrides
        }
        resp = await self.client.post("/api/v1/companies", json=data)
        assert resp.status_code == 200, f"create company failed: {resp.text}"
        return resp.json()["data"]

    async def create_work_item(self, company_id: Optional[str] = None, **overrides) -> dict:
        if company_id is None:
            company = await self.create_company()
            company_id = company["id"]

        suffix = self._next_id()
        data = {
            "company_id": company_id,
            "title": f"Product Manager {suffix}",
            "start_date": "2020-01",
            "end_date": "2022-06",
            "description": "Owned the growth roadmap",
            "tags": ["growth"],
            "achievements": ["Grew activation 20%"],
            **overrides
        }
        resp = await self.client.post("/api/v1/work-items", json=data)
        assert resp.status_code == 200, f"create work item failed: {resp.text}"
        return resp.json()["data"]

    async def create_story(self, work_item_id: Optional[str] = None, **overrides) -> dict:
        if work_item_id is None:
            work_item = await self.create_work_item()
            work_item_id = work_item["id"]

        suffix = self._next_id()
        data = {
            "work_item_id": work_item_id,
            "title": f"Story {suffix}",
            "content": "Led a cross-functional launch that increased revenue 15%.",
            "tags": ["leadership"],
            **overrides
        }
        resp = await self.client.post("/api/v1/stories", json=data)
        assert resp.status_code == 200, f"create story failed: {resp.text}"
        return resp.json()["data"]

    async def create_link(self, work_item_id: Optional[str] = None, **overrides) -> dict:
        if work_item_id is None:
            work_item = await self.create_work_item()
            work_item_id = work_item["id"]

        suffix = self._next_id()
        data = {
            "work_item_id": work_item_id,
            "url": f"https://example.com/case-study-{suffix}",
            "label": f"Case study {suffix}",
            **overrides
        }
        resp = await self.client.post("/api/v1/links", json=data)
        assert resp.status_code == 200, f"create link failed: {resp.text}"
        return resp.json()["data"]

    async def create_job_description(self, **overrides) -> dict:
        suffix = self._next_id()
        data = {
            "url": f"https://jobs.example.com/{suffix}",
            "content": "We are hiring a senior product manager to own onboarding.",
            "company": f"Hiring Co {suffix}",
            "role": "Senior Product Manager",
            "extracted_requirements": ["5+ years PM", "B2B SaaS"],
            **overrides
        }
        resp = await self.client.post("/api/v1/job-descriptions", json=data)
        assert resp.status_code == 200, f"create job description failed: {resp.text}"
        return resp.json()["data"]

    async def create_template(self, **overrides) -> dict:
        suffix = self._next_id()
        data = {
            "name": f"Template {suffix}",
            "sections": [{"type": "intro"}, {"type": "body"}, {"type": "closing"}],
            **overrides
        }
        resp = await self.client.post("/api/v1/templates", json=data)
        assert resp.status_code == 200, f"create template failed: {resp.text}"
        return resp.json()["data"]

    async def create_cover_letter(
        self,
        template_id: Optional[str] = None,
        job_description_id: Optional[str] = None,
        **overrides
    ) -> dict:
        if template_id is None:
            template_id = (await self.create_template())["id"]
        if job_description_id is None:
            job_description_id = (await self.create_job_description())["id"]

        data = {
            "template_id": template_id,
            "job_description_id": job_description_id,
            "sections": [{"type": "intro", "content": "Dear hiring team,"}],
            **overrides
        }
        resp = await self.client.post("/api/v1/cover-letters", json=data)
        assert resp.status_code == 200, f"create cover letter failed: {resp.text}"
        return resp.json()["data"]


# ========== Database ==========

@pytest_asyncio.fixture(scope="function")
async def engine():
    """Fresh in-memory database per test"""
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_factory(engine):
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


# ========== HTTP clients ==========

@pytest_asyncio.fixture(scope="function")
async def app(db_session: AsyncSession) -> AsyncGenerator[FastAPI, None]:
    """
    Application with get_db routed to the test session
    """
    application = create_app()

    async def override_get_db():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    application.dependency_overrides[get_db] = override_get_db
    yield application
    application.dependency_overrides.clear()


def _client(app: FastAPI, headers: Optional[dict] = None) -> AsyncClient:
    return AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=headers or {},
    )


@pytest_asyncio.fixture(scope="function")
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Client signed in as USER_A"""
    async with _client(app, auth_headers(USER_A)) as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def other_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Client signed in as USER_B"""
    async with _client(app, auth_headers(USER_B)) as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def anon_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Client without credentials"""
    async with _client(app) as ac:
        yield ac


@pytest_asyncio.fixture
async def factory(client: AsyncClient) -> DataFactory:
    """Data factory acting as USER_A"""
    return DataFactory(client=client)


@pytest_asyncio.fixture
async def other_factory(other_client: AsyncClient) -> DataFactory:
    """Data factory acting as USER_B"""
    return DataFactory(client=other_client)
