"""
SQLModel models

Table models and their request/response schemas live side by side
"""
from .base import SQLModelBase, TimestampMixin
from .profile import Profile, ProfileRole, ProfileUpdate, ProfileResponse
from .company import Company, CompanyCreate, CompanyUpdate, CompanyResponse
from .source import Source, SourceType, ProcessingStatus, SourceResponse, SourceListResponse
from .work_item import WorkItem, WorkItemCreate, WorkItemUpdate, WorkItemResponse
from .approved_content import (
    ApprovedContent, ApprovedContentCreate, ApprovedContentUpdate, ApprovedContentResponse,
    ContentStatus, Confidence,
)
from .external_link import ExternalLink, ExternalLinkCreate, ExternalLinkUpdate, ExternalLinkResponse
from .job_description import (
    JobDescription, JobDescriptionCreate, JobDescriptionUpdate, JobDescriptionResponse,
)
from .cover_letter import (
    CoverLetterTemplate, CoverLetterTemplateCreate, CoverLetterTemplateUpdate, CoverLetterTemplateResponse,
    CoverLetter, CoverLetterCreate, CoverLetterUpdate, CoverLetterResponse, CoverLetterStatus,
)
from .linkedin_profile import LinkedInProfile, LinkedInProfileResponse

__all__ = [
    # Base
    "SQLModelBase",
    "TimestampMixin",
    # Profile
    "Profile",
    "ProfileRole",
    "ProfileUpdate",
    "ProfileResponse",
    # Company
    "Company",
    "CompanyCreate",
    "CompanyUpdate",
    "CompanyResponse",
    # Source
    "Source",
    "SourceType",
    "ProcessingStatus",
    "SourceResponse",
    "SourceListResponse",
    # Work item
    "WorkItem",
    "WorkItemCreate",
    "WorkItemUpdate",
    "WorkItemResponse",
    # Approved content
    "ApprovedContent",
    "ApprovedContentCreate",
    "ApprovedContentUpdate",
    "ApprovedContentResponse",
    "ContentStatus",
    "Confidence",
    # External link
    "ExternalLink",
    "ExternalLinkCreate",
    "ExternalLinkUpdate",
    "ExternalLinkResponse",
    # Job description
    "JobDescription",
    "JobDescriptionCreate",
    "JobDescriptionUpdate",
    "JobDescriptionResponse",
    # Cover letters
    "CoverLetterTemplate",
    "CoverLetterTemplateCreate",
    "CoverLetterTemplateUpdate",
    "CoverLetterTemplateResponse",
    "CoverLetter",
    "CoverLetterCreate",
    "CoverLetterUpdate",
    "CoverLetterResponse",
    "CoverLetterStatus",
    # LinkedIn
    "LinkedInProfile",
    "LinkedInProfileResponse",
]
