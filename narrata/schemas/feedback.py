"""
Feedback and beta signup schemas
"""
from typing import Optional, Literal
from pydantic import Field

from .base import BaseSchema


class ClickLocation(BaseSchema):
    x: float
    y: float


class FeedbackData(BaseSchema):
    """In-app feedback submission"""
    screenshot: str = Field("", description="Base64 screenshot")
    click_location: ClickLocation
    sentiment: Literal["positive", "neutral", "negative"]
    category: Literal["bug", "suggestion", "praise"]
    message: str = Field(..., min_length=1, max_length=5000)
    email: Optional[str] = Field(None, max_length=255)
    page_url: str
    timestamp: str
    user_agent: str = ""


class BetaSignupData(BaseSchema):
    """Beta programme signup"""
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    source: Literal["welcome-modal", "feedback-form", "manual"]
    page_url: Optional[str] = None
    user_agent: Optional[str] = None
    timestamp: Optional[str] = None


class RelayResult(BaseSchema):
    """Where a submission ended up"""
    submitted: bool
    channel: Literal["apps_script", "sheets", "fallback"]
