"""
LinkedIn profile parser

Returns a fixed sample profile with parse diagnostics until a real
profile source is wired in.
"""
import re
from typing import Optional, Tuple

from loguru import logger

from narrata.schemas.parsing import (
    ParsedLinkedIn,
    ParsingResult,
    ProfileAccessibility,
)

LINKEDIN_URL_PATTERN = re.compile(r"^https?://(www\.)?linkedin\.com/(in|pub|company)/[a-zA-Z0-9-]+/?$")
PROFILE_ID_PATTERN = re.compile(r"linkedin\.com/(?:in|pub|company)/([a-zA-Z0-9-]+)")

STRONG_NETWORK_THRESHOLD = 100

SAMPLE_PROFILE = {
    "profile": {
        "name": "John Doe",
        "headline": "Senior Product Manager | Building user-centric products",
        "location": "San Francisco, CA",
        "industry": "Technology",
        "summary": "Experienced Product Manager with 4+ years building user-centric products",
        "profile_url": "https://linkedin.com/in/johndoe",
    },
    "experience": [
        {
            "company": "TechCorp",
            "title": "Senior Product Manager",
            "start_date": "2022-01",
            "end_date": "2024-01",
            "duration": "2 years",
            "description": "Led product strategy and execution for B2B SaaS platform",
            "location": "San Francisco, CA",
            "company_size": "201-500 employees",
            "company_industry": "Technology",
        },
        {
            "company": "StartupXYZ",
            "title": "Product Manager",
            "start_date": "2020-03",
            "end_date": "2022-01",
            "duration": "1 year 10 months",
            "description": "Built and launched MVP from concept to market",
            "location": "San Francisco, CA",
            "company_size": "11-50 employees",
            "company_industry": "Technology",
        },
        {
            "company": "BigTech Inc",
            "title": "Associate Product Manager",
            "start_date": "2019-06",
            "end_date": "2020-02",
            "duration": "8 months",
            "description": "Supported product development for enterprise solutions",
            "location": "San Francisco, CA",
            "company_size": "1000+ employees",
            "company_industry": "Technology",
        },
    ],
    "skills": [
        {"name": "Product Strategy", "endorsement_count": 15, "category": "Product Management"},
        {"name": "Data Analysis", "endorsement_count": 12, "category": "Analytics"},
        {"name": "User Research", "endorsement_count": 10, "category": "Research"},
        {"name": "Agile Development", "endorsement_count": 8, "category": "Development"},
        {"name": "Stakeholder Management", "endorsement_count": 7, "category": "Management"},
        {"name": "A/B Testing", "endorsement_count": 6, "category": "Analytics"},
    ],
    "education": [
        {
            "institution": "University of Technology",
            "degree": "Bachelor of Science",
            "field": "Computer Science",
            "start_year": "2016",
            "end_year": "2020",
            "activities": ["Product Management Club", "Hackathon Organizer"],
        }
    ],
    "recommendations": 8,
    "connections": 450,
    "has_complete_dates": True,
    "has_company_descriptions": True,
    "has_endorsements": True,
}


def validate_linkedin_url(url: str) -> bool:
    """Profile, public profile or company page URL"""
    return bool(LINKEDIN_URL_PATTERN.match(url or ""))


def extract_profile_id(url: str) -> Optional[str]:
    match = PROFILE_ID_PATTERN.search(url or "")
    return match.group(1) if match else None


def check_profile_accessibility(url: str) -> ProfileAccessibility:
    """Whether the profile can be read; public profiles are assumed readable"""
    if not validate_linkedin_url(url):
        return ProfileAccessibility(accessible=False, reason="Invalid LinkedIn URL")
    return ProfileAccessibility(accessible=True, reason="Profile is publicly accessible")


def build_linkedin_result(data: ParsedLinkedIn) -> ParsingResult:
    """Diagnostics and confidence for a parsed profile"""
    details = []
    suggestions = []

    details.append(f"{len(data.experience)} roles found")

    if data.has_complete_dates:
        details.append("Complete date information available")
    else:
        suggestions.append("Add missing start/end dates for better timeline")

    if data.has_company_descriptions:
        details.append("Company descriptions available")
    else:
        suggestions.append("Add company descriptions for better context")

    details.append(f"{len(data.skills)} skills identified")

    if data.has_endorsements:
        total_endorsements = sum(skill.endorsement_count for skill in data.skills)
        details.append(f"{total_endorsements} total skill endorsements")

    if data.education:
        details.append("Education information extracted")
        if data.education[0].activities:
            details.append("Extracurricular activities found")

    if data.recommendations > 0:
        details.append(f"{data.recommendations} recommendations received")

    if data.connections > STRONG_NETWORK_THRESHOLD:
        details.append("Strong professional network")

    confidence = "high"
    if not data.has_complete_dates:
        confidence = "medium"
    if not data.has_company_descriptions:
        confidence = "medium"
    if len(data.experience) < 2:
        confidence = "low"
        suggestions.append("Add more work experience for better assessment")
    if len(data.skills) < 5:
        confidence = "medium"
        suggestions.append("Add more skills to showcase your expertise")

    return ParsingResult(
        type="linkedin",
        success=True,
        confidence=confidence,
        summary=(
            f"Successfully parsed LinkedIn profile with {len(data.experience)} roles "
            f"and {len(data.skills)} skills"
        ),
        details=details,
        suggestions=suggestions,
    )


def parse_linkedin(url: str) -> Tuple[ParsedLinkedIn, ParsingResult]:
    """Parse a LinkedIn profile URL into the sample profile plus diagnostics"""
    logger.info("Parsing LinkedIn profile {}", extract_profile_id(url))
    data = ParsedLinkedIn.model_validate(SAMPLE_PROFILE)
    return data, build_linkedin_result(data)
