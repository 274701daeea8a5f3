"""
Company CRUD
"""
from typing import Optional, List
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from narrata.models.company import Company
from narrata.models.work_item import WorkItem
from narrata.models.approved_content import ApprovedContent
from narrata.models.external_link import ExternalLink
from .base import CRUDBase


class CRUDCompany(CRUDBase[Company]):
    """Company CRUD"""

    async def get_by_name(
        self,
        db: AsyncSession,
        name: str,
        *,
        user_id: str
    ) -> Optional[Company]:
        """Find an owned company by exact name"""
        result = await db.execute(
            self._owned(user_id).where(self.model.name == name).limit(1)
        )
        return result.scalar_one_or_none()

    async def get_all(self, db: AsyncSession, *, user_id: str) -> List[Company]:
        """Every owned company, by name"""
        result = await db.execute(self._owned(user_id).order_by(self.model.name))
        return list(result.scalars().all())

    async def delete(self, db: AsyncSession, *, id: str, user_id: str) -> bool:
        """Delete a company with its work items, stories and links"""
        company = await self.get(db, id, user_id=user_id)
        if not company:
            return False

        work_item_ids = select(WorkItem.id).where(
            WorkItem.company_id == id, WorkItem.user_id == user_id
        )
        await db.execute(delete(ApprovedContent).where(ApprovedContent.work_item_id.in_(work_item_ids)))
        await db.execute(delete(ExternalLink).where(ExternalLink.work_item_id.in_(work_item_ids)))
        await db.execute(delete(WorkItem).where(WorkItem.company_id == id, WorkItem.user_id == user_id))
        await db.delete(company)
        await db.flush()
        return True


company_crud = CRUDCompany(Company)
