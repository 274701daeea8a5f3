"""
Row isolation check

Exercises the owner-scoped CRUD layer with two throwaway users and reports
whether each one only ever sees and changes its own rows.
"""
import uuid
from typing import Callable, Dict, List, Optional

from loguru import logger
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from narrata.crud import company_crud
from narrata.models.company import Company


class IsolationChecker:
    """
    Usage:
        checker = IsolationChecker(AsyncSessionLocal)
        results = await checker.run_all()
    """

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        user_a: Optional[str] = None,
        user_b: Optional[str] = None,
    ):
        self.session_factory = session_factory
        self.user_a = user_a or f"isolation-check-{uuid.uuid4()}"
        self.user_b = user_b or f"isolation-check-{uuid.uuid4()}"
        self._company_ids: Dict[str, str] = {}

    async def _setup(self, db: AsyncSession) -> None:
        for user_id in (self.user_a, self.user_b):
            company = await company_crud.create(
                db,
                obj_in={
                    "name": "RLS Test Company",
                    "description": "Testing row isolation",
                    "tags": ["test", "rls"],
                },
                user_id=user_id,
            )
            self._company_ids[user_id] = company.id
        await db.commit()

    async def _cleanup(self, db: AsyncSession) -> None:
        await db.execute(delete(Company).where(Company.user_id.in_([self.user_a, self.user_b])))
        await db.commit()

    async def check_data_isolation(self, db: AsyncSession) -> bool:
        """Each user's listing holds only their own rows"""
        for user_id in (self.user_a, self.user_b):
            rows: List[Company] = await company_crud.get_multi(db, user_id=user_id)
            if not rows or any(row.user_id != user_id for row in rows):
                return False
        return True

    async def check_direct_access(self, db: AsyncSession) -> bool:
        """Fetching the other user's row by id finds nothing"""
        other = await company_crud.get(db, self._company_ids[self.user_b], user_id=self.user_a)
        own = await company_crud.get(db, self._company_ids[self.user_a], user_id=self.user_a)
        return other is None and own is not None

    async def check_crud_operations(self, db: AsyncSession) -> bool:
        """Update and delete work on an owned row"""
        company = await company_crud.create(
            db,
            obj_in={"name": "CRUD Test Company", "description": "Testing CRUD operations", "tags": ["test", "crud"]},
            user_id=self.user_a,
        )
        updated = await company_crud.update(db, db_obj=company, obj_in={"name": "Updated CRUD Test Company"})
        if updated.name != "Updated CRUD Test Company":
            return False
        return await company_crud.delete(db, id=company.id, user_id=self.user_a)

    async def check_cross_user_mutation(self, db: AsyncSession) -> bool:
        """Update and delete through another user are no-ops"""
        target_id = self._company_ids[self.user_b]
        if await company_crud.get(db, target_id, user_id=self.user_a) is not None:
            return False
        if await company_crud.delete(db, id=target_id, user_id=self.user_a):
            return False
        await db.commit()

        survivor = await company_crud.get(db, target_id, user_id=self.user_b)
        return survivor is not None and survivor.name == "RLS Test Company"

    async def run_all(self) -> Dict[str, bool]:
        """Run every check; test rows are always removed"""
        results = {
            "data_isolation": False,
            "direct_access": False,
            "crud_operations": False,
            "cross_user_mutation": False,
        }
        async with self.session_factory() as db:
            try:
                await self._setup(db)
                results["data_isolation"] = await self.check_data_isolation(db)
                results["direct_access"] = await self.check_direct_access(db)
                results["crud_operations"] = await self.check_crud_operations(db)
                await db.commit()
                results["cross_user_mutation"] = await self.check_cross_user_mutation(db)
            finally:
                await db.rollback()
                await self._cleanup(db)

        logger.info("Isolation check results: {}", results)
        return results
