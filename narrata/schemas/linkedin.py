"""
LinkedIn OAuth schemas
"""
from typing import Any, Dict, List, Optional
from pydantic import Field

from .base import BaseSchema


class ExchangeTokenRequest(BaseSchema):
    """Both fields are checked by the handler so a missing one is a 400"""
    code: Optional[str] = Field(None, description="Authorization code")
    redirect_uri: Optional[str] = Field(None, description="Redirect URI used for the authorize call")


class TokenResponse(BaseSchema):
    access_token: str
    expires_in: Optional[int] = None
    scope: Optional[str] = None


class FetchDataRequest(BaseSchema):
    access_token: Optional[str] = Field(None, description="LinkedIn access token")


class LinkedInMemberData(BaseSchema):
    profile: Dict[str, Any] = Field(default_factory=dict)
    positions: List[Any] = Field(default_factory=list)
    education: List[Any] = Field(default_factory=list)
    skills: List[Any] = Field(default_factory=list)


class AuthorizeUrlResponse(BaseSchema):
    url: str
