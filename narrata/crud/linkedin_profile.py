"""
LinkedIn profile CRUD
"""
from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from narrata.models.linkedin_profile import LinkedInProfile
from narrata.models.base import utcnow


class CRUDLinkedInProfile:
    """One LinkedIn snapshot per user"""

    async def get_by_user(self, db: AsyncSession, user_id: str) -> Optional[LinkedInProfile]:
        result = await db.execute(
            select(LinkedInProfile).where(LinkedInProfile.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def upsert(self, db: AsyncSession, *, user_id: str, data: dict) -> LinkedInProfile:
        """Insert or replace the user's snapshot"""
        row = await self.get_by_user(db, user_id)
        if row is None:
            row = LinkedInProfile(user_id=user_id, **data)
            db.add(row)
        else:
            for field, value in data.items():
                setattr(row, field, value)
            row.updated_at = utcnow()
        await db.flush()
        await db.refresh(row)
        return row


linkedin_profile_crud = CRUDLinkedInProfile()
