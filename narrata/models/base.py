"""
SQLModel base classes

Shared fields and mixins
"""
import uuid
from datetime import datetime, timezone
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SQLModelBase(SQLModel):
    """
    Base config for every schema
    """
    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
        "str_strip_whitespace": True,
        "use_enum_values": True,
    }


class TimestampMixin(SQLModel):
    """Timestamp columns for table models"""
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        nullable=False,
        description="Created at"
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        nullable=False,
        description="Updated at"
    )


class IDMixin(SQLModel):
    """UUID primary key for table models"""
    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True,
        description="Primary key"
    )


class OwnedMixin(SQLModel):
    """Owner column; every user-owned row carries it"""
    user_id: str = Field(..., index=True, description="Owning auth user id")


class TimestampResponse(SQLModelBase):
    """Response base with id and timestamps"""
    id: str
    created_at: datetime
    updated_at: datetime
