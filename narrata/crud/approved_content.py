"""
Approved content (story) CRUD
"""
from sqlalchemy.ext.asyncio import AsyncSession

from narrata.models.approved_content import ApprovedContent
from narrata.models.base import utcnow
from .base import CRUDBase


class CRUDApprovedContent(CRUDBase[ApprovedContent]):
    """Story CRUD"""

    async def mark_used(self, db: AsyncSession, *, db_obj: ApprovedContent) -> ApprovedContent:
        """Increment times_used and stamp last_used"""
        db_obj.times_used = (db_obj.times_used or 0) + 1
        db_obj.last_used = utcnow()
        db_obj.updated_at = utcnow()
        await db.flush()
        await db.refresh(db_obj)
        return db_obj


approved_content_crud = CRUDApprovedContent(ApprovedContent)
