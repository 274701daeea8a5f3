"""
Work item model

A role held at a company
"""
from typing import Optional, List
from pydantic import field_validator
from sqlmodel import SQLModel, Field, Column, JSON
from sqlalchemy import Column as SAColumn, String, ForeignKey

from narrata.utils.dates import normalize_date
from .base import SQLModelBase, TimestampMixin, IDMixin, OwnedMixin, TimestampResponse


# ==================== Base fields ====================

class WorkItemBase(SQLModelBase):
    """Work item fields"""
    title: str = Field(..., min_length=1, max_length=255, description="Role title")
    start_date: str = Field(..., max_length=10, description="Start date (YYYY-MM-DD)")
    end_date: Optional[str] = Field(None, max_length=10, description="End date; null while current")
    description: Optional[str] = Field(None, description="Description")
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON), description="Tags")
    achievements: List[str] = Field(default_factory=list, sa_column=Column(JSON), description="Achievements")
    metrics: List[dict] = Field(default_factory=list, sa_column=Column(JSON), description="Role metrics")


# ==================== Table model ====================

class WorkItem(WorkItemBase, OwnedMixin, TimestampMixin, IDMixin, SQLModel, table=True):
    """Work item table"""
    __tablename__ = "work_items"

    company_id: str = Field(
        sa_column=SAColumn(String, ForeignKey("companies.id", ondelete="CASCADE"), index=True, nullable=False),
        description="Company id"
    )
    source_id: Optional[str] = Field(
        default=None,
        sa_column=SAColumn(String, ForeignKey("sources.id", ondelete="SET NULL"), nullable=True),
        description="Source document id"
    )

    def __repr__(self) -> str:
        return f"<WorkItem(id={self.id}, title={self.title})>"


# ==================== Request schemas ====================

class WorkItemCreate(WorkItemBase):
    """Create work item"""
    company_id: str = Field(..., description="Company id")

    @field_validator("start_date", "end_date")
    @classmethod
    def pad_dates(cls, v):
        return normalize_date(v)


class WorkItemUpdate(SQLModelBase):
    """Update work item; every field optional"""
    company_id: Optional[str] = None
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    start_date: Optional[str] = Field(None, max_length=10)
    end_date: Optional[str] = Field(None, max_length=10)
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    achievements: Optional[List[str]] = None
    metrics: Optional[List[dict]] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def pad_dates(cls, v):
        return normalize_date(v)


# ==================== Response schemas ====================

class WorkItemResponse(TimestampResponse):
    """Work item response"""
    user_id: str
    company_id: str
    title: str
    start_date: str
    end_date: Optional[str]
    description: Optional[str]
    tags: List[str] = []
    achievements: List[str] = []
    metrics: List[dict] = []
    source_id: Optional[str] = None
