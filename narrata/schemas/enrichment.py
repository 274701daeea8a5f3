"""
People Data Labs enrichment schemas
"""
from typing import Any, Dict, Optional
from pydantic import Field, model_validator

from .base import BaseSchema


class EnrichPersonRequest(BaseSchema):
    """
    Either explicit person fields, or a full name plus resume data

    When resume_data is given the most recent job and LinkedIn username are
    derived from it.
    """
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company: Optional[str] = None
    linkedin_url: Optional[str] = None
    resume_data: Optional[Dict[str, Any]] = None

    @model_validator(mode="after")
    def require_something(self):
        if not any([self.name, self.first_name, self.last_name, self.company, self.linkedin_url]):
            raise ValueError("Provide at least a name, company or LinkedIn URL")
        return self


class EnrichPersonResponse(BaseSchema):
    likelihood: Optional[float] = None
    person: Dict[str, Any] = Field(default_factory=dict)
    structured_data: Dict[str, Any] = Field(default_factory=dict)
