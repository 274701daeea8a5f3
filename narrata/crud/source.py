"""
Source CRUD
"""
from typing import Optional, List
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from narrata.models.source import Source, ProcessingStatus, SourceType
from narrata.models.base import utcnow
from narrata.models.work_item import WorkItem
from narrata.models.approved_content import ApprovedContent
from .base import CRUDBase


class CRUDSource(CRUDBase[Source]):
    """Source CRUD"""

    async def get_completed_by_checksum(
        self,
        db: AsyncSession,
        checksum: str,
        *,
        user_id: str
    ) -> Optional[Source]:
        """Completed source with the same content (dedupe)"""
        result = await db.execute(
            self._owned(user_id)
            .where(
                self.model.file_checksum == checksum,
                self.model.processing_status == ProcessingStatus.COMPLETED.value,
            )
            .order_by(self.model.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_completed_resumes(self, db: AsyncSession, *, user_id: str) -> List[Source]:
        """Completed resume sources, oldest first"""
        result = await db.execute(
            self._owned(user_id)
            .where(
                self.model.source_type == SourceType.RESUME.value,
                self.model.processing_status == ProcessingStatus.COMPLETED.value,
            )
            .order_by(self.model.created_at)
        )
        return list(result.scalars().all())

    async def set_status(
        self,
        db: AsyncSession,
        *,
        db_obj: Source,
        status: ProcessingStatus,
        error: Optional[str] = None
    ) -> Source:
        """Move a source to a new processing status"""
        db_obj.processing_status = status.value
        db_obj.processing_error = error
        db_obj.updated_at = utcnow()
        await db.flush()
        return db_obj

    async def delete(self, db: AsyncSession, *, id: str, user_id: str) -> bool:
        """Delete a source; imported rows keep existing without lineage"""
        source = await self.get(db, id, user_id=user_id)
        if not source:
            return False

        await db.execute(
            update(WorkItem).where(WorkItem.source_id == id).values(source_id=None)
        )
        await db.execute(
            update(ApprovedContent).where(ApprovedContent.source_id == id).values(source_id=None)
        )
        await db.delete(source)
        await db.flush()
        return True


source_crud = CRUDSource(Source)
