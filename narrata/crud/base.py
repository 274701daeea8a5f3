"""
CRUD base class

Every query on a user-owned table is scoped to the owner's user_id, so a row
belonging to someone else behaves exactly like a missing row.
"""
from typing import Generic, TypeVar, Type, Optional, List, Any, Dict
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from narrata.models.base import utcnow

ModelType = TypeVar("ModelType", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=SQLModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=SQLModel)


class CRUDBase(Generic[ModelType]):
    """
    Owner-scoped CRUD base

    Works directly on SQLModel objects
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    def _owned(self, user_id: str):
        return select(self.model).where(self.model.user_id == user_id)

    async def get(self, db: AsyncSession, id: str, *, user_id: str) -> Optional[ModelType]:
        """Fetch one owned row by id"""
        result = await db.execute(
            self._owned(user_id).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def get_multi(
        self,
        db: AsyncSession,
        *,
        user_id: str,
        skip: int = 0,
        limit: int = 100,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Any = None
    ) -> List[ModelType]:
        """Fetch owned rows (paged), optionally filtered by column equality"""
        query = self._owned(user_id)
        for field, value in (filters or {}).items():
            if value is not None:
                query = query.where(getattr(self.model, field) == value)
        if order_by is not None:
            query = query.order_by(order_by)
        else:
            query = query.order_by(self.model.created_at.desc())
        query = query.offset(skip).limit(limit)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def count(
        self,
        db: AsyncSession,
        *,
        user_id: str,
        filters: Optional[Dict[str, Any]] = None
    ) -> int:
        """Count owned rows"""
        query = select(func.count()).select_from(self.model).where(self.model.user_id == user_id)
        for field, value in (filters or {}).items():
            if value is not None:
                query = query.where(getattr(self.model, field) == value)
        result = await db.execute(query)
        return result.scalar() or 0

    async def create(
        self,
        db: AsyncSession,
        *,
        obj_in: CreateSchemaType | Dict[str, Any],
        user_id: str
    ) -> ModelType:
        """
        Create an owned row

        Accepts a schema or a dict; user_id always comes from the caller
        """
        if isinstance(obj_in, dict):
            data = dict(obj_in)
        else:
            data = obj_in.model_dump()
        data["user_id"] = user_id
        db_obj = self.model(**data)

        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: UpdateSchemaType | Dict[str, Any]
    ) -> ModelType:
        """
        Update a row

        Explicit nulls are applied only to nullable columns
        """
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        columns = self.model.__table__.c
        for field, value in update_data.items():
            if field in ("id", "user_id"):
                continue
            if value is None and not (field in columns and columns[field].nullable):
                continue
            setattr(db_obj, field, value)
        db_obj.updated_at = utcnow()

        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def delete(self, db: AsyncSession, *, id: str, user_id: str) -> bool:
        """Delete an owned row"""
        obj = await self.get(db, id, user_id=user_id)
        if obj:
            await db.delete(obj)
            await db.flush()
            return True
        return False
