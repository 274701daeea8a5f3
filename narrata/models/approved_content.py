"""
Approved content model

Reusable stories attached to a work item
"""
from typing import Optional, List
from datetime import datetime
from enum import Enum
from sqlmodel import SQLModel, Field, Column, JSON
from sqlalchemy import Column as SAColumn, String, ForeignKey, DateTime

from .base import SQLModelBase, TimestampMixin, IDMixin, OwnedMixin, TimestampResponse


class ContentStatus(str, Enum):
    """Story review status"""
    DRAFT = "draft"
    APPROVED = "approved"
    NEEDS_REVIEW = "needs-review"


class Confidence(str, Enum):
    """Confidence level"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ==================== Base fields ====================

class ApprovedContentBase(SQLModelBase):
    """Story fields"""
    title: str = Field(..., min_length=1, max_length=255, description="Title")
    content: str = Field(..., min_length=1, description="Story text")
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON), description="Tags")
    metrics: List[dict] = Field(default_factory=list, sa_column=Column(JSON), description="Story metrics")


# ==================== Table model ====================

class ApprovedContent(ApprovedContentBase, OwnedMixin, TimestampMixin, IDMixin, SQLModel, table=True):
    """Approved content table"""
    __tablename__ = "approved_content"

    work_item_id: str = Field(
        sa_column=SAColumn(String, ForeignKey("work_items.id", ondelete="CASCADE"), index=True, nullable=False),
        description="Work item id"
    )
    company_id: Optional[str] = Field(
        default=None,
        sa_column=SAColumn(String, ForeignKey("companies.id", ondelete="CASCADE"), index=True, nullable=True),
        description="Company id (copied from the work item)"
    )
    source_id: Optional[str] = Field(
        default=None,
        sa_column=SAColumn(String, ForeignKey("sources.id", ondelete="SET NULL"), nullable=True),
        description="Source document id"
    )
    status: str = Field(ContentStatus.DRAFT.value, max_length=20, index=True, description="draft/approved/needs-review")
    confidence: str = Field(Confidence.MEDIUM.value, max_length=10, description="low/medium/high")
    times_used: int = Field(0, ge=0, description="Times used in a cover letter")
    last_used: Optional[datetime] = Field(None, sa_type=DateTime(timezone=True), description="Last used at")
    embedding: Optional[list] = Field(default=None, sa_column=Column(JSON), description="Embedding vector")

    def __repr__(self) -> str:
        return f"<ApprovedContent(id={self.id}, title={self.title})>"


# ==================== Request schemas ====================

class ApprovedContentCreate(ApprovedContentBase):
    """Create story"""
    work_item_id: str = Field(..., description="Work item id")
    status: ContentStatus = ContentStatus.DRAFT
    confidence: Confidence = Confidence.MEDIUM


class ApprovedContentUpdate(SQLModelBase):
    """Update story; every field optional"""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = Field(None, min_length=1)
    status: Optional[ContentStatus] = None
    confidence: Optional[Confidence] = None
    tags: Optional[List[str]] = None
    metrics: Optional[List[dict]] = None


# ==================== Response schemas ====================

class ApprovedContentResponse(TimestampResponse):
    """Story response"""
    user_id: str
    work_item_id: str
    company_id: Optional[str]
    title: str
    content: str
    status: str
    confidence: str
    tags: List[str] = []
    metrics: List[dict] = []
    times_used: int
    last_used: Optional[datetime]
    source_id: Optional[str] = None
