"""
External link model
"""
from typing import Optional, List
from datetime import datetime
from sqlmodel import SQLModel, Field, Column, JSON
from sqlalchemy import Column as SAColumn, String, ForeignKey, DateTime

from .base import SQLModelBase, TimestampMixin, IDMixin, OwnedMixin, TimestampResponse


# ==================== Base fields ====================

class ExternalLinkBase(SQLModelBase):
    """Link fields"""
    url: str = Field(..., min_length=1, description="URL")
    label: str = Field(..., min_length=1, max_length=255, description="Label")
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON), description="Tags")


# ==================== Table model ====================

class ExternalLink(ExternalLinkBase, OwnedMixin, TimestampMixin, IDMixin, SQLModel, table=True):
    """External link table"""
    __tablename__ = "external_links"

    work_item_id: str = Field(
        sa_column=SAColumn(String, ForeignKey("work_items.id", ondelete="CASCADE"), index=True, nullable=False),
        description="Work item id"
    )
    times_used: int = Field(0, ge=0, description="Times used")
    last_used: Optional[datetime] = Field(None, sa_type=DateTime(timezone=True), description="Last used at")

    def __repr__(self) -> str:
        return f"<ExternalLink(id={self.id}, label={self.label})>"


# ==================== Request schemas ====================

class ExternalLinkCreate(ExternalLinkBase):
    """Create link"""
    work_item_id: str = Field(..., description="Work item id")


class ExternalLinkUpdate(SQLModelBase):
    """Update link; every field optional"""
    url: Optional[str] = Field(None, min_length=1)
    label: Optional[str] = Field(None, min_length=1, max_length=255)
    tags: Optional[List[str]] = None


# ==================== Response schemas ====================

class ExternalLinkResponse(TimestampResponse):
    """Link response"""
    user_id: str
    work_item_id: str
    url: str
    label: str
    tags: List[str] = []
    times_used: int
    last_used: Optional[datetime]
