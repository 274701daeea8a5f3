"""
Parser result schemas
"""
from typing import List, Optional, Literal
from pydantic import Field

from .base import BaseSchema


class ParsingResult(BaseSchema):
    """Diagnostics shown after an import"""
    type: Literal["resume", "linkedin", "cover_letter"]
    success: bool = True
    confidence: Literal["high", "medium", "low"] = "high"
    summary: str
    details: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)


# ==================== Resume ====================

class ResumeRole(BaseSchema):
    company: str
    title: str
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    achievements: List[str] = Field(default_factory=list)
    team_size: Optional[int] = None
    technologies: List[str] = Field(default_factory=list)
    impact: Optional[str] = None


class ResumeEducation(BaseSchema):
    institution: str
    degree: str
    field: str
    graduation_year: Optional[str] = None


class ContactInfo(BaseSchema):
    name: str = ""
    email: Optional[str] = ""
    phone: Optional[str] = None
    location: Optional[str] = ""
    linkedin: Optional[str] = ""


class ParsedResume(BaseSchema):
    roles: List[ResumeRole] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    education: List[ResumeEducation] = Field(default_factory=list)
    contact: ContactInfo = Field(default_factory=ContactInfo)
    summary: str = ""
    total_achievements: int = 0
    has_quantifiable_results: bool = False
    has_case_studies: bool = False


class ResumeParseResponse(BaseSchema):
    data: ParsedResume
    result: ParsingResult


# ==================== LinkedIn ====================

class LinkedInProfileSummary(BaseSchema):
    name: str
    headline: str
    location: str
    industry: str
    summary: str
    profile_url: str


class LinkedInExperience(BaseSchema):
    company: str
    title: str
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    duration: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    company_size: Optional[str] = None
    company_industry: Optional[str] = None


class LinkedInSkill(BaseSchema):
    name: str
    endorsement_count: int = 0
    category: str


class LinkedInEducation(BaseSchema):
    institution: str
    degree: str
    field: str
    start_year: Optional[str] = None
    end_year: Optional[str] = None
    activities: Optional[List[str]] = None


class ParsedLinkedIn(BaseSchema):
    profile: LinkedInProfileSummary
    experience: List[LinkedInExperience] = Field(default_factory=list)
    skills: List[LinkedInSkill] = Field(default_factory=list)
    education: List[LinkedInEducation] = Field(default_factory=list)
    recommendations: int = 0
    connections: int = 0
    has_complete_dates: bool = False
    has_company_descriptions: bool = False
    has_endorsements: bool = False


class LinkedInParseRequest(BaseSchema):
    url: str = Field(..., min_length=1, description="LinkedIn profile URL")


class LinkedInParseResponse(BaseSchema):
    data: ParsedLinkedIn
    result: ParsingResult


class ProfileAccessibility(BaseSchema):
    accessible: bool
    reason: Optional[str] = None


# ==================== Cover letter ====================

Quality = Literal["high", "medium", "low"]


class CoverLetterSection(BaseSchema):
    type: Literal["intro", "experience", "closing", "signature", "other"]
    title: str
    content: str
    word_count: int
    has_stories: bool = False
    has_quantifiable_results: bool = False
    suggestions: List[str] = Field(default_factory=list)


class CoverLetterStory(BaseSchema):
    content: str
    company: Optional[str] = None
    has_quantifiable_results: bool = False
    quality: Quality = "low"


class ParsedCoverLetter(BaseSchema):
    sections: List[CoverLetterSection] = Field(default_factory=list)
    stories: List[CoverLetterStory] = Field(default_factory=list)
    case_studies: List[str] = Field(default_factory=list)
    external_links: List[str] = Field(default_factory=list)
    total_words: int = 0
    has_quantifiable_results: bool = False
    has_case_studies: bool = False
    has_external_links: bool = False
    quality: Quality = "low"


class CoverLetterParseRequest(BaseSchema):
    text: str = Field(..., description="Cover letter text")


class CoverLetterParseResponse(BaseSchema):
    data: ParsedCoverLetter
    result: ParsingResult
