"""
External link CRUD
"""
from sqlalchemy.ext.asyncio import AsyncSession

from narrata.models.external_link import ExternalLink
from narrata.models.base import utcnow
from .base import CRUDBase


class CRUDExternalLink(CRUDBase[ExternalLink]):
    """Link CRUD"""

    async def mark_used(self, db: AsyncSession, *, db_obj: ExternalLink) -> ExternalLink:
        """Increment times_used and stamp last_used"""
        db_obj.times_used = (db_obj.times_used or 0) + 1
        db_obj.last_used = utcnow()
        db_obj.updated_at = utcnow()
        await db.flush()
        await db.refresh(db_obj)
        return db_obj


external_link_crud = CRUDExternalLink(ExternalLink)
