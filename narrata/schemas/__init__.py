"""
Pydantic schemas

Request/response models for payloads that are not tables
"""
from .base import BaseSchema
from .parsing import (
    ParsingResult,
    ParsedResume,
    ResumeParseResponse,
    ParsedLinkedIn,
    LinkedInParseRequest,
    LinkedInParseResponse,
    ProfileAccessibility,
)
from .linkedin import (
    ExchangeTokenRequest,
    TokenResponse,
    FetchDataRequest,
    LinkedInMemberData,
    AuthorizeUrlResponse,
)
from .feedback import ClickLocation, FeedbackData, BetaSignupData, RelayResult
from .enrichment import EnrichPersonRequest, EnrichPersonResponse
from .dashboard import DashboardData
from .work_history import WorkHistoryResponse, CompanyWorkHistory, WorkItemDetail
from .sources import ManualTextRequest, UploadResponse

__all__ = [
    "BaseSchema",
    # Parsing
    "ParsingResult",
    "ParsedResume",
    "ResumeParseResponse",
    "ParsedLinkedIn",
    "LinkedInParseRequest",
    "LinkedInParseResponse",
    "ProfileAccessibility",
    # LinkedIn OAuth
    "ExchangeTokenRequest",
    "TokenResponse",
    "FetchDataRequest",
    "LinkedInMemberData",
    "AuthorizeUrlResponse",
    # Feedback
    "ClickLocation",
    "FeedbackData",
    "BetaSignupData",
    "RelayResult",
    # Enrichment
    "EnrichPersonRequest",
    "EnrichPersonResponse",
    # Dashboard
    "DashboardData",
    # Work history
    "WorkHistoryResponse",
    "CompanyWorkHistory",
    "WorkItemDetail",
    # Sources
    "ManualTextRequest",
    "UploadResponse",
]
