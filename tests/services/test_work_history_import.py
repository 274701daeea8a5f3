"""
Structured work history import tests
"""
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from narrata.crud import approved_content_crud, company_crud, work_item_crud
from narrata.services.work_history_import import (
    import_structured_data,
    resolve_company_name,
    resolve_end_date,
    resolve_title,
    role_achievements,
    tag_metrics,
)

USER = "import-user"


def test_resolve_title():
    assert resolve_title({"position": " Staff PM ", "title": "PM"}) == "Staff PM"
    assert resolve_title({"title": "PM"}) == "PM"
    assert resolve_title({"company": "Acme — Senior Engineer | Remote"}) == "Senior Engineer"
    assert resolve_title({"company": "Acme — Head of Product"}) == "Head of Product"
    assert resolve_title({"company": "Acme"}) is None
    assert resolve_title({"position": "   "}) is None


def test_resolve_end_date():
    assert resolve_end_date({"endDate": "2022-06"}) == "2022-06-01"
    assert resolve_end_date({"endDate": "Present"}) is None
    assert resolve_end_date({"endDate": "2022-06-01", "current": True}) is None
    assert resolve_end_date({}) is None


def test_tag_metrics():
    assert tag_metrics([{"value": "40%"}, {"value": "3", "parentType": "story"}, "junk"], "role") == [
        {"value": "40%", "parentType": "role"},
        {"value": "3", "parentType": "story"},
    ]
    assert tag_metrics(None, "role") == []


def test_role_achievements():
    assert role_achievements({"roleMetrics": [{"value": "8", "context": "engineers led"}, {}]}) == ["8 engineers led"]
    assert role_achievements({"achievements": ["Shipped v2", 3]}) == ["Shipped v2", "3"]
    assert role_achievements({}) == []


@pytest.mark.asyncio
async def test_import_creates_companies_items_and_stories(db_session: AsyncSession):
    structured = {
        "workHistory": [
            {
                "company": "Acme",
                "position": "Senior PM",
                "startDate": "2021-02",
                "current": True,
                "companyTags": ["fintech"],
                "roleTags": ["growth"],
                "stories": [
                    {"title": "Checkout", "content": "Rebuilt checkout", "metrics": [{"value": "12%"}]},
                    {"content": "x" * 150},
                    {"tags": ["empty"]},
                    "not a story",
                ],
            },
            {
                "company": "Acme",
                "title": "PM",
                "startDate": "2018",
                "endDate": "2021-01",
                "description": "Owned onboarding",
            },
            {"company": "No Title Inc"},
            "garbage",
        ]
    }

    summary = await import_structured_data(db_session, USER, structured, source_id=None)
    assert summary == {
        "companies_created": 1,
        "work_items_created": 2,
        "stories_created": 2,
        "stories_skipped": 2,
        "entries_skipped": 2,
    }

    companies = await company_crud.get_all(db_session, user_id=USER)
    assert [c.name for c in companies] == ["Acme"]
    assert companies[0].tags == ["fintech"]

    items = await work_item_crud.get_by_company(db_session, user_id=USER, company_id=companies[0].id)
    assert [(i.title, i.start_date, i.end_date) for i in items] == [
        ("Senior PM", "2021-02-01", None),
        ("PM", "2018-01-01", "2021-01-01"),
    ]
    assert items[0].tags == ["growth"]
    assert items[1].description == "Owned onboarding"

    stories = await approved_content_crud.get_multi(db_session, user_id=USER)
    titles = sorted(s.title for s in stories)
    assert titles == ["Checkout", "x" * 100]
    checkout = next(s for s in stories if s.title == "Checkout")
    assert checkout.metrics == [{"value": "12%", "parentType": "story"}]
    assert checkout.company_id == companies[0].id
    assert checkout.status == "draft"


@pytest.mark.asyncio
async def test_import_reuses_existing_company(db_session: AsyncSession):
    company = await company_crud.create(db_session, obj_in={"name": "Acme", "tags": ["old"]}, user_id=USER)

    summary = await import_structured_data(
        db_session,
        USER,
        {"workHistory": [{"company": "Acme", "title": "PM", "startDate": "2020"}]},
    )
    assert summary["companies_created"] == 0
    assert summary["work_items_created"] == 1

    refreshed = await company_crud.get(db_session, company.id, user_id=USER)
    # No companyTags: existing tags stay
    assert refreshed.tags == ["old"]


@pytest.mark.asyncio
async def test_import_without_work_history(db_session: AsyncSession):
    summary = await import_structured_data(db_session, USER, {"skills": ["SQL"]})
    assert summary["work_items_created"] == 0
    summary = await import_structured_data(db_session, USER, None)
    assert summary["companies_created"] == 0


@pytest.mark.asyncio
async def test_import_is_scoped_to_the_user(db_session: AsyncSession):
    await company_crud.create(db_session, obj_in={"name": "Acme"}, user_id="someone-else")

    summary = await import_structured_data(
        db_session,
        USER,
        {"workHistory": [{"company": "Acme", "title": "PM", "startDate": "2020"}]},
    )
    assert summary["companies_created"] == 1


def test_resolve_company_name():
    assert resolve_company_name({"company": " Acme "}) == "Acme"
    assert resolve_company_name({}) == "Unknown"
    assert resolve_company_name({"company": "  "}) == "Unknown"
    assert resolve_company_name({"company": 3}) == "3"
    assert resolve_company_name({"company": {"name": "Acme"}}) is None
    assert resolve_company_name({"company": ["Acme"]}) is None


@pytest.mark.asyncio
async def test_import_tolerates_loosely_typed_fields(db_session: AsyncSession):
    structured = {
        "workHistory": [
            {
                "company": "Acme",
                "position": "PM",
                "startDate": 2020,
                "endDate": 2022.0,
                "companyTags": "fintech",
                "roleTags": ["growth", 7, None],
                "stories": [{"title": 42, "content": {"text": "nested"}}],
            },
            {"company": {"name": "Globex"}, "position": "Engineer", "startDate": "2019"},
            {"company": "Initech", "position": "Analyst", "startDate": "Spring 2018", "endDate": "sometime"},
        ]
    }

    summary = await import_structured_data(db_session, USER, structured)
    assert summary["work_items_created"] == 2
    assert summary["entries_skipped"] == 1
    assert summary["stories_created"] == 1

    companies = await company_crud.get_all(db_session, user_id=USER)
    assert sorted(c.name for c in companies) == ["Acme", "Initech"]
    acme = next(c for c in companies if c.name == "Acme")
    assert acme.tags == []

    items = await work_item_crud.get_by_company(db_session, user_id=USER, company_id=acme.id)
    assert [(i.start_date, i.end_date, i.tags) for i in items] == [("2020-01-01", "2022-01-01", ["growth", "7"])]

    initech = next(c for c in companies if c.name == "Initech")
    items = await work_item_crud.get_by_company(db_session, user_id=USER, company_id=initech.id)
    assert [(i.start_date, i.end_date) for i in items] == [("", None)]

    stories = await approved_content_crud.get_multi(db_session, user_id=USER)
    assert [(s.title, s.content) for s in stories] == [("42", "")]


@pytest.mark.asyncio
async def test_import_ignores_non_object_payloads(db_session: AsyncSession):
    assert (await import_structured_data(db_session, USER, ["not", "a", "dict"]))["work_items_created"] == 0
    summary = await import_structured_data(db_session, USER, {"workHistory": [{"company": "Acme", "position": "PM", "stories": "none"}]})
    assert summary["work_items_created"] == 1
    assert summary["stories_created"] == 0
