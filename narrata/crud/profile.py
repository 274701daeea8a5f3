"""
Profile CRUD
"""
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from narrata.models.profile import Profile, ProfileRole, ProfileUpdate
from narrata.models.base import utcnow


class CRUDProfile:
    """Profile CRUD; the row id is the auth user id"""

    async def get(self, db: AsyncSession, user_id: str) -> Optional[Profile]:
        return await db.get(Profile, user_id)

    async def get_or_create(
        self,
        db: AsyncSession,
        *,
        user_id: str,
        email: Optional[str],
        full_name: Optional[str] = None,
        avatar_url: Optional[str] = None
    ) -> Profile:
        """Return the profile, creating it from token claims on first access"""
        profile = await self.get(db, user_id)
        if profile:
            return profile

        profile = Profile(
            id=user_id,
            email=email or "",
            full_name=full_name,
            avatar_url=avatar_url,
            role=ProfileRole.USER.value,
        )
        db.add(profile)
        await db.flush()
        await db.refresh(profile)
        logger.info("Created profile for user {}", user_id)
        return profile

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: Profile,
        obj_in: ProfileUpdate
    ) -> Profile:
        for field, value in obj_in.model_dump(exclude_unset=True).items():
            setattr(db_obj, field, value)
        db_obj.updated_at = utcnow()
        await db.flush()
        await db.refresh(db_obj)
        return db_obj


profile_crud = CRUDProfile()
