"""
Resume parser

Returns an empty resume structure with parse diagnostics; the real
extraction runs through the LLM analysis of uploaded sources.
"""
import re
from typing import List, Tuple

from loguru import logger

from narrata.schemas.parsing import ParsedResume, ParsingResult

CASE_STUDY_PATTERNS = [
    re.compile(r"case study:?\s*([^.!?]+)", re.IGNORECASE),
    re.compile(r"project:?\s*([^.!?]+)", re.IGNORECASE),
    re.compile(r"portfolio:?\s*([^.!?]+)", re.IGNORECASE),
]

QUANTIFIABLE_PATTERNS = [
    re.compile(r"(\d+%?\s*(?:increase|decrease|growth|reduction))", re.IGNORECASE),
    re.compile(r"(\$\d+[KMB]?\s*(?:revenue|budget|cost))", re.IGNORECASE),
    re.compile(r"(\d+\s*(?:users|customers|clients))", re.IGNORECASE),
    re.compile(r"(\d+\s*(?:months|weeks|days))", re.IGNORECASE),
]


def _full_matches(patterns: List[re.Pattern], text: str) -> List[str]:
    results = []
    for pattern in patterns:
        results.extend(m.group(0).strip() for m in pattern.finditer(text))
    return [r for r in results if r]


def extract_case_studies(text: str) -> List[str]:
    """Phrases introduced by "case study", "project" or "portfolio" """
    return _full_matches(CASE_STUDY_PATTERNS, text)


def extract_quantifiable_results(text: str) -> List[str]:
    """Numeric outcome phrases such as "40% growth" or "$2M revenue" """
    return _full_matches(QUANTIFIABLE_PATTERNS, text)


def build_resume_result(data: ParsedResume) -> ParsingResult:
    """Diagnostics and confidence for a parsed resume"""
    details: List[str] = []
    suggestions: List[str] = []

    details.append(f"{len(data.roles)} roles found")
    details.append(f"{data.total_achievements} achievements extracted")

    if data.has_quantifiable_results:
        details.append("Quantifiable results detected")
    else:
        suggestions.append("Add quantifiable results to strengthen achievements")

    details.append(f"{len(data.skills)} skills identified")

    if data.education:
        details.append("Education information extracted")

    if data.contact.email and data.contact.linkedin:
        details.append("Complete contact information found")
    else:
        suggestions.append("Add missing contact information")

    if data.has_case_studies:
        details.append("Case study mentions detected")

    confidence = "high"
    if len(data.roles) < 2:
        confidence = "medium"
        suggestions.append("Add more work experience for better assessment")
    if not data.has_quantifiable_results:
        confidence = "medium"
    if data.total_achievements < 3:
        confidence = "low"
        suggestions.append("Include more detailed achievements")

    return ParsingResult(
        type="resume",
        success=True,
        confidence=confidence,
        summary=(
            f"Successfully parsed resume with {len(data.roles)} roles "
            f"and {data.total_achievements} achievements"
        ),
        details=details,
        suggestions=suggestions,
    )


def parse_resume(file_name: str, content: bytes = b"") -> Tuple[ParsedResume, ParsingResult]:
    """
    Parse an uploaded resume

    The structure is left empty; the LLM source pipeline fills it.
    """
    logger.info("Parsing resume {} ({} bytes)", file_name, len(content))
    data = ParsedResume()
    return data, build_resume_result(data)
