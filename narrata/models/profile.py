"""
Profile model

One row per auth user; `id` is the auth user id
"""
from typing import Optional
from enum import Enum
from sqlmodel import SQLModel, Field

from .base import SQLModelBase, TimestampMixin, TimestampResponse


class ProfileRole(str, Enum):
    """Profile role"""
    USER = "user"
    ADMIN = "admin"


# ==================== Table model ====================

class Profile(TimestampMixin, SQLModel, table=True):
    """Profile table"""
    __tablename__ = "profiles"

    id: str = Field(..., primary_key=True, description="Auth user id")
    email: str = Field(..., max_length=255, index=True, description="Email")
    full_name: Optional[str] = Field(None, max_length=255, description="Full name")
    avatar_url: Optional[str] = Field(None, description="Avatar URL")
    role: str = Field(ProfileRole.USER.value, max_length=20, description="user/admin")
    organization_id: Optional[str] = Field(None, description="Organization id")

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, email={self.email})>"


# ==================== Request schemas ====================

class ProfileUpdate(SQLModelBase):
    """Update own profile"""
    full_name: Optional[str] = Field(None, max_length=255)
    avatar_url: Optional[str] = None


# ==================== Response schemas ====================

class ProfileResponse(TimestampResponse):
    """Profile response"""
    email: str
    full_name: Optional[str]
    avatar_url: Optional[str]
    role: str
    organization_id: Optional[str]
