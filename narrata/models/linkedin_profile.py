"""
LinkedIn profile model

Last LinkedIn snapshot fetched for a user
"""
from typing import Optional, List, Any
from sqlmodel import SQLModel, Field, Column, JSON

from .base import TimestampMixin, IDMixin, TimestampResponse


class LinkedInProfile(TimestampMixin, IDMixin, SQLModel, table=True):
    """LinkedIn profile table"""
    __tablename__ = "linkedin_profiles"

    user_id: str = Field(..., unique=True, index=True, description="Owning auth user id")
    linkedin_id: str = Field(..., max_length=255, description="LinkedIn member id")
    profile_url: str = Field(..., description="Profile URL")
    about: Optional[str] = Field(None, description="About / headline")
    experience: Optional[List[Any]] = Field(default=None, sa_column=Column(JSON))
    education: Optional[List[Any]] = Field(default=None, sa_column=Column(JSON))
    skills: Optional[List[Any]] = Field(default=None, sa_column=Column(JSON))
    certifications: Optional[List[Any]] = Field(default=None, sa_column=Column(JSON))
    projects: Optional[List[Any]] = Field(default=None, sa_column=Column(JSON))
    raw_data: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    def __repr__(self) -> str:
        return f"<LinkedInProfile(id={self.id}, linkedin_id={self.linkedin_id})>"


class LinkedInProfileResponse(TimestampResponse):
    """LinkedIn profile response"""
    user_id: str
    linkedin_id: str
    profile_url: str
    about: Optional[str] = None
    experience: Optional[List[Any]] = None
    education: Optional[List[Any]] = None
    skills: Optional[List[Any]] = None
    certifications: Optional[List[Any]] = None
    projects: Optional[List[Any]] = None
