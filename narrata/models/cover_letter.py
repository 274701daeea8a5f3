"""
Cover letter models

Templates describe the section layout; letters are drafted against a template
and a job description
"""
from typing import Optional, List, Any
from enum import Enum
from sqlmodel import SQLModel, Field, Column, JSON
from sqlalchemy import Column as SAColumn, String, ForeignKey

from .base import SQLModelBase, TimestampMixin, IDMixin, OwnedMixin, TimestampResponse


class CoverLetterStatus(str, Enum):
    """Cover letter status"""
    DRAFT = "draft"
    REVIEWED = "reviewed"
    FINALIZED = "finalized"


# ==================== Templates ====================

class CoverLetterTemplateBase(SQLModelBase):
    """Template fields"""
    name: str = Field(..., min_length=1, max_length=255, description="Template name")
    sections: List[Any] = Field(default_factory=list, sa_column=Column(JSON), description="Section definitions")


class CoverLetterTemplate(CoverLetterTemplateBase, OwnedMixin, TimestampMixin, IDMixin, SQLModel, table=True):
    """Cover letter template table"""
    __tablename__ = "cover_letter_templates"

    def __repr__(self) -> str:
        return f"<CoverLetterTemplate(id={self.id}, name={self.name})>"


class CoverLetterTemplateCreate(CoverLetterTemplateBase):
    """Create template"""
    pass


class CoverLetterTemplateUpdate(SQLModelBase):
    """Update template"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    sections: Optional[List[Any]] = None


class CoverLetterTemplateResponse(TimestampResponse):
    """Template response"""
    user_id: str
    name: str
    sections: List[Any] = []


# ==================== Cover letters ====================

class CoverLetter(OwnedMixin, TimestampMixin, IDMixin, SQLModel, table=True):
    """Cover letter table"""
    __tablename__ = "cover_letters"

    template_id: str = Field(
        sa_column=SAColumn(String, ForeignKey("cover_letter_templates.id"), index=True, nullable=False),
        description="Template id"
    )
    job_description_id: str = Field(
        sa_column=SAColumn(String, ForeignKey("job_descriptions.id"), index=True, nullable=False),
        description="Job description id"
    )
    sections: List[Any] = Field(default_factory=list, sa_column=Column(JSON), description="Drafted sections")
    llm_feedback: dict = Field(default_factory=dict, sa_column=Column(JSON), description="LLM review feedback")
    status: str = Field(CoverLetterStatus.DRAFT.value, max_length=20, index=True, description="draft/reviewed/finalized")

    def __repr__(self) -> str:
        return f"<CoverLetter(id={self.id}, status={self.status})>"


class CoverLetterCreate(SQLModelBase):
    """Create cover letter"""
    template_id: str = Field(..., description="Template id")
    job_description_id: str = Field(..., description="Job description id")
    sections: List[Any] = Field(default_factory=list)
    llm_feedback: dict = Field(default_factory=dict)
    status: CoverLetterStatus = CoverLetterStatus.DRAFT


class CoverLetterUpdate(SQLModelBase):
    """Update cover letter"""
    template_id: Optional[str] = None
    job_description_id: Optional[str] = None
    sections: Optional[List[Any]] = None
    llm_feedback: Optional[dict] = None
    status: Optional[CoverLetterStatus] = None


class CoverLetterResponse(TimestampResponse):
    """Cover letter response"""
    user_id: str
    template_id: str
    job_description_id: str
    sections: List[Any] = []
    llm_feedback: dict = {}
    status: str
