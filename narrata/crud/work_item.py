"""
Work item CRUD
"""
from typing import Any, Dict, Optional, List
from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from narrata.models.work_item import WorkItem, WorkItemUpdate
from narrata.models.approved_content import ApprovedContent
from narrata.models.external_link import ExternalLink
from .base import CRUDBase


class CRUDWorkItem(CRUDBase[WorkItem]):
    """Work item CRUD"""

    async def get_by_company(
        self,
        db: AsyncSession,
        *,
        user_id: str,
        company_id: Optional[str] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[WorkItem]:
        """Owned work items, most recent start first"""
        return await self.get_multi(
            db,
            user_id=user_id,
            skip=skip,
            limit=limit,
            filters={"company_id": company_id},
            order_by=self.model.start_date.desc(),
        )

    async def get_by_source(
        self,
        db: AsyncSession,
        source_id: str,
        *,
        user_id: str
    ) -> List[WorkItem]:
        """Work items imported from one source"""
        result = await db.execute(
            self._owned(user_id).where(self.model.source_id == source_id)
        )
        return list(result.scalars().all())

    async def delete(self, db: AsyncSession, *, id: str, user_id: str) -> bool:
        """Delete a work item with its stories and links"""
        work_item = await self.get(db, id, user_id=user_id)
        if not work_item:
            return False

        await db.execute(delete(ApprovedContent).where(ApprovedContent.work_item_id == id))
        await db.execute(delete(ExternalLink).where(ExternalLink.work_item_id == id))
        await db.delete(work_item)
        await db.flush()
        return True

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: WorkItem,
        obj_in: WorkItemUpdate | Dict[str, Any]
    ) -> WorkItem:
        """Update a work item; its stories follow it to a new company"""
        previous_company_id = db_obj.company_id
        work_item = await super().update(db, db_obj=db_obj, obj_in=obj_in)
        if work_item.company_id != previous_company_id:
            await db.execute(
                update(ApprovedContent)
                .where(ApprovedContent.work_item_id == work_item.id)
                .values(company_id=work_item.company_id)
            )
            await db.flush()
        return work_item


work_item_crud = CRUDWorkItem(WorkItem)
