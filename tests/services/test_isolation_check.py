"""
Row isolation checker tests
"""
import pytest
from sqlalchemy import func, select

from narrata.models.company import Company
from narrata.services.isolation_check import IsolationChecker


@pytest.mark.asyncio
async def test_all_checks_pass(session_factory):
    checker = IsolationChecker(session_factory, user_a="user-a", user_b="user-b")
    results = await checker.run_all()
    assert results == {
        "data_isolation": True,
        "direct_access": True,
        "crud_operations": True,
        "cross_user_mutation": True,
    }


@pytest.mark.asyncio
async def test_test_rows_are_removed(session_factory):
    checker = IsolationChecker(session_factory)
    await checker.run_all()

    async with session_factory() as db:
        remaining = (await db.execute(select(func.count()).select_from(Company))).scalar()
    assert remaining == 0


@pytest.mark.asyncio
async def test_generated_users_are_distinct(session_factory):
    checker = IsolationChecker(session_factory)
    assert checker.user_a != checker.user_b
    assert checker.user_a.startswith("isolation-check-")
