"""
Job description model
"""
from typing import Optional, List
from sqlmodel import SQLModel, Field, Column, JSON

from .base import SQLModelBase, TimestampMixin, IDMixin, OwnedMixin, TimestampResponse


class JobDescriptionBase(SQLModelBase):
    """Job description fields"""
    url: Optional[str] = Field(None, description="Posting URL")
    content: str = Field(..., min_length=1, description="Posting text")
    company: str = Field(..., min_length=1, max_length=255, description="Company name")
    role: str = Field(..., min_length=1, max_length=255, description="Role")
    extracted_requirements: List[str] = Field(
        default_factory=list, sa_column=Column(JSON), description="Extracted requirements"
    )


class JobDescription(JobDescriptionBase, OwnedMixin, TimestampMixin, IDMixin, SQLModel, table=True):
    """Job description table"""
    __tablename__ = "job_descriptions"

    def __repr__(self) -> str:
        return f"<JobDescription(id={self.id}, role={self.role})>"


class JobDescriptionCreate(JobDescriptionBase):
    """Create job description"""
    pass


class JobDescriptionUpdate(SQLModelBase):
    """Update job description"""
    url: Optional[str] = None
    content: Optional[str] = Field(None, min_length=1)
    company: Optional[str] = Field(None, min_length=1, max_length=255)
    role: Optional[str] = Field(None, min_length=1, max_length=255)
    extracted_requirements: Optional[List[str]] = None


class JobDescriptionResponse(TimestampResponse):
    """Job description response"""
    user_id: str
    url: Optional[str]
    content: str
    company: str
    role: str
    extracted_requirements: List[str] = []
