"""
Company model
"""
from typing import Optional, List
from sqlmodel import SQLModel, Field, Column, JSON

from .base import SQLModelBase, TimestampMixin, IDMixin, OwnedMixin, TimestampResponse


# ==================== Base fields ====================

class CompanyBase(SQLModelBase):
    """Company fields"""
    name: str = Field(..., min_length=1, max_length=255, index=True, description="Company name")
    logo_url: Optional[str] = Field(None, description="Logo URL")
    description: Optional[str] = Field(None, description="Description")
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON), description="Tags")


# ==================== Table model ====================

class Company(CompanyBase, OwnedMixin, TimestampMixin, IDMixin, SQLModel, table=True):
    """Company table"""
    __tablename__ = "companies"

    def __repr__(self) -> str:
        return f"<Company(id={self.id}, name={self.name})>"


# ==================== Request schemas ====================

class CompanyCreate(CompanyBase):
    """Create company"""
    pass


class CompanyUpdate(SQLModelBase):
    """Update company; every field optional"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    logo_url: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None


# ==================== Response schemas ====================

class CompanyResponse(TimestampResponse):
    """Company response"""
    user_id: str
    name: str
    logo_url: Optional[str]
    description: Optional[str]
    tags: List[str] = []
