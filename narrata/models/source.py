"""
Source model

An uploaded (or pasted) resume or cover letter and its processing state
"""
from typing import Optional
from enum import Enum
from sqlmodel import SQLModel, Field, Column, JSON

from .base import TimestampMixin, IDMixin, OwnedMixin, TimestampResponse


class SourceType(str, Enum):
    """Kind of uploaded document"""
    RESUME = "resume"
    COVER_LETTER = "cover_letter"


class ProcessingStatus(str, Enum):
    """Processing status"""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class Source(OwnedMixin, TimestampMixin, IDMixin, SQLModel, table=True):
    """Source table"""
    __tablename__ = "sources"

    file_name: str = Field(..., max_length=255, description="Original file name")
    file_type: str = Field(..., max_length=255, description="MIME type")
    file_size: int = Field(0, ge=0, description="Size in bytes")
    file_checksum: str = Field(..., max_length=64, index=True, description="SHA-256 of the content")
    storage_path: str = Field(..., description="Storage object path")
    source_type: str = Field(SourceType.RESUME.value, max_length=20, description="resume/cover_letter")
    processing_status: str = Field(ProcessingStatus.PENDING.value, max_length=20, index=True, description="Processing status")
    raw_text: Optional[str] = Field(None, description="Extracted text")
    structured_data: Optional[dict] = Field(default=None, sa_column=Column(JSON), description="LLM structured data")
    processing_error: Optional[str] = Field(None, description="Failure reason")

    def __repr__(self) -> str:
        return f"<Source(id={self.id}, file_name={self.file_name})>"


class SourceResponse(TimestampResponse):
    """Source response"""
    user_id: str
    file_name: str
    file_type: str
    file_size: int
    file_checksum: str
    storage_path: str
    source_type: str
    processing_status: str
    raw_text: Optional[str] = None
    structured_data: Optional[dict] = None
    processing_error: Optional[str] = None


class SourceListResponse(TimestampResponse):
    """Source list item (no text payloads)"""
    file_name: str
    file_type: str
    file_size: int
    source_type: str
    processing_status: str
    processing_error: Optional[str] = None
