"""
Upload schemas
"""
from typing import Dict, Optional
from pydantic import Field

from narrata.models.source import SourceType, SourceListResponse
from .base import BaseSchema


class ManualTextRequest(BaseSchema):
    """Pasted resume / cover letter text"""
    text: str = Field(..., min_length=1, description="Document text")
    kind: SourceType = SourceType.RESUME


class UploadResponse(BaseSchema):
    source: SourceListResponse
    duplicate: bool = False
    deferred: bool = False
    imported: Dict[str, int] = Field(default_factory=dict)
    error: Optional[str] = None
    retryable: bool = False
