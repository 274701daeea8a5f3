"""
Cover letter parser

Splits a letter into sections, pulls out achievement stories, case-study
mentions and links, and grades the result. Pure text heuristics, no LLM.
"""
import re
from typing import List, Optional, Tuple

from loguru import logger

from narrata.schemas.parsing import (
    CoverLetterSection,
    CoverLetterStory,
    ParsedCoverLetter,
    ParsingResult,
)
from narrata.services.resume_parser import CASE_STUDY_PATTERNS, extract_quantifiable_results

# First matching group wins
SECTION_PATTERNS = [
    ("intro", re.compile(r"^(?:introduction|dear|hello|hi)\b", re.IGNORECASE)),
    ("experience", re.compile(r"^(?:experience|background|qualifications|why)\b", re.IGNORECASE)),
    ("closing", re.compile(r"^(?:closing|conclusion|thank you|sincerely)\b", re.IGNORECASE)),
    ("signature", re.compile(r"^(?:best regards|yours truly|regards)\b", re.IGNORECASE)),
]

SECTION_TITLES = {
    "intro": "Introduction",
    "experience": "Experience & Qualifications",
    "closing": "Closing",
    "signature": "Signature",
}

ACTION_VERBS = r"led|managed|built|launched|developed|created|implemented|achieved|increased|reduced|grew|established"
SUPPORT_VERBS = r"responsible for|oversaw|coordinated|facilitated|drove|enabled|delivered|completed|successfully"

STORY_PATTERNS = [
    re.compile(rf"\b(?:{ACTION_VERBS})\b[^.!?]*[.!?]", re.IGNORECASE),
    re.compile(rf"\b(?:{SUPPORT_VERBS})\b[^.!?]*[.!?]", re.IGNORECASE),
]
ACTION_VERB_PATTERN = re.compile(rf"\b(?:{ACTION_VERBS})\b", re.IGNORECASE)
SUPPORT_VERB_PATTERN = re.compile(rf"\b(?:{SUPPORT_VERBS})\b", re.IGNORECASE)

# Capitalized word run after "at", "with" or "for"
COMPANY_PATTERN = re.compile(r"\b(?:[Aa]t|[Ww]ith|[Ff]or)\s+([A-Z][\w&]*(?:[ \t]+[A-Z][\w&]*)*)")

EXAMPLE_PATTERN = re.compile(r"example:?\s*([^.!?]+)", re.IGNORECASE)
URL_PATTERN = re.compile(r"https?://\S+")
PARAGRAPH_BREAK = re.compile(r"\n\s*\n")

MIN_STORY_LENGTH = 20
MIN_CASE_STUDY_LENGTH = 10
MAX_TITLE_LENGTH = 50


def word_count(text: str) -> int:
    return len(text.split())


def has_stories(text: str) -> bool:
    return bool(ACTION_VERB_PATTERN.search(text) or SUPPORT_VERB_PATTERN.search(text))


def has_quantifiable_results(text: str) -> bool:
    return bool(extract_quantifiable_results(text))


def section_type(paragraph: str) -> str:
    for kind, pattern in SECTION_PATTERNS:
        if pattern.match(paragraph):
            return kind
    return "other"


def section_title(kind: str, content: str) -> str:
    if kind in SECTION_TITLES:
        return SECTION_TITLES[kind]
    first_sentence = re.split(r"[.!?]", content)[0].strip()
    if len(first_sentence) > MAX_TITLE_LENGTH:
        return first_sentence[:MAX_TITLE_LENGTH] + "..."
    return first_sentence


def section_suggestions(content: str, kind: str) -> List[str]:
    suggestions = []
    if kind == "intro" and len(content) < 100:
        suggestions.append("Expand introduction with more context about your interest")
    if kind == "experience":
        if not has_stories(content):
            suggestions.append("Add specific examples of your achievements")
        if not has_quantifiable_results(content):
            suggestions.append("Include quantifiable results to strengthen your case")
    if kind == "closing" and len(content) < 50:
        suggestions.append("Add a stronger call to action")
    return suggestions


def segment_sections(text: str) -> List[CoverLetterSection]:
    """
    Group paragraphs into sections

    A paragraph opening with a known cue ("Dear", "Sincerely", ...) starts
    a section of that type; consecutive paragraphs of the same type merge.
    """
    paragraphs = [p.strip() for p in PARAGRAPH_BREAK.split(text) if p.strip()]
    if not paragraphs:
        return []

    sections: List[CoverLetterSection] = []
    current: Optional[CoverLetterSection] = None
    for paragraph in paragraphs:
        kind = section_type(paragraph)
        if current is not None and current.type == kind:
            current.content += "\n\n" + paragraph
            current.word_count += word_count(paragraph)
            current.has_stories = current.has_stories or has_stories(paragraph)
            current.has_quantifiable_results = (
                current.has_quantifiable_results or has_quantifiable_results(paragraph)
            )
            continue

        current = CoverLetterSection(
            type=kind,
            title=section_title(kind, paragraph),
            content=paragraph,
            word_count=word_count(paragraph),
            has_stories=has_stories(paragraph),
            has_quantifiable_results=has_quantifiable_results(paragraph),
            suggestions=section_suggestions(paragraph, kind),
        )
        sections.append(current)

    return sections


def story_quality(story: str) -> str:
    score = 0
    if len(story) > 100:
        score += 2
    elif len(story) > 50:
        score += 1
    if has_quantifiable_results(story):
        score += 3
    if ACTION_VERB_PATTERN.search(story):
        score += 2
    if COMPANY_PATTERN.search(story):
        score += 1

    if score >= 6:
        return "high"
    if score >= 3:
        return "medium"
    return "low"


def extract_stories(text: str) -> List[CoverLetterStory]:
    """Achievement sentences that open with an action verb"""
    stories = []
    for pattern in STORY_PATTERNS:
        for match in pattern.finditer(text):
            sentence = match.group(0).strip()
            if len(sentence) <= MIN_STORY_LENGTH:
                continue
            company = COMPANY_PATTERN.search(sentence)
            stories.append(CoverLetterStory(
                content=sentence,
                company=company.group(1).strip() if company else None,
                has_quantifiable_results=has_quantifiable_results(sentence),
                quality=story_quality(sentence),
            ))
    return stories


def extract_case_studies(text: str) -> List[str]:
    results = []
    for pattern in CASE_STUDY_PATTERNS + [EXAMPLE_PATTERN]:
        for match in pattern.finditer(text):
            mention = match.group(0).strip()
            if len(mention) > MIN_CASE_STUDY_LENGTH:
                results.append(mention)
    return results


def extract_external_links(text: str) -> List[str]:
    return URL_PATTERN.findall(text)


def overall_quality(sections: List[CoverLetterSection], stories: List[CoverLetterStory], total_words: int) -> str:
    score = 0
    if total_words > 300:
        score += 2
    elif total_words > 200:
        score += 1

    if len(sections) >= 3:
        score += 2
    elif len(sections) >= 2:
        score += 1

    if len(stories) >= 3:
        score += 2
    elif stories:
        score += 1

    high_quality = sum(1 for s in stories if s.quality == "high")
    if high_quality >= 2:
        score += 2
    elif high_quality:
        score += 1

    if score >= 7:
        return "high"
    if score >= 4:
        return "medium"
    return "low"


def build_cover_letter_result(data: ParsedCoverLetter) -> ParsingResult:
    """Diagnostics and confidence for a parsed cover letter"""
    details: List[str] = []
    suggestions: List[str] = []

    details.append(f"{len(data.sections)} sections identified")
    if len(data.sections) >= 3:
        details.append("Good section structure")
    else:
        suggestions.append("Consider organizing into clear sections (Intro, Experience, Closing)")

    details.append(f"{len(data.stories)} stories extracted")
    if len(data.stories) >= 2:
        details.append("Strong story content")
    else:
        suggestions.append("Add more specific examples of your achievements")

    if data.has_case_studies:
        details.append(f"{len(data.case_studies)} case studies detected")
    if data.has_external_links:
        details.append(f"{len(data.external_links)} external links found")

    if data.has_quantifiable_results:
        details.append("Quantifiable results detected")
    else:
        suggestions.append("Add quantifiable results to strengthen your achievements")

    details.append(f"Overall quality: {data.quality}")
    if data.quality == "low":
        suggestions.append("Consider adding more specific examples and quantifiable results")

    # Later rules override earlier ones
    confidence = data.quality
    if len(data.sections) < 2:
        confidence = "medium"
    if not data.stories:
        confidence = "low"

    return ParsingResult(
        type="cover_letter",
        success=True,
        confidence=confidence,
        summary=(
            f"Successfully parsed cover letter with {len(data.sections)} sections "
            f"and {len(data.stories)} stories"
        ),
        details=details,
        suggestions=suggestions,
    )


def parse_cover_letter(text: str) -> Tuple[ParsedCoverLetter, ParsingResult]:
    """
    Parse cover letter text

    Args:
        text: letter body; paragraphs separated by blank lines
    """
    sections = segment_sections(text)
    stories = extract_stories(text)
    case_studies = extract_case_studies(text)
    external_links = extract_external_links(text)
    total_words = word_count(text)

    data = ParsedCoverLetter(
        sections=sections,
        stories=stories,
        case_studies=case_studies,
        external_links=external_links,
        total_words=total_words,
        has_quantifiable_results=has_quantifiable_results(text),
        has_case_studies=bool(case_studies),
        has_external_links=bool(external_links),
        quality=overall_quality(sections, stories, total_words),
    )
    logger.info(
        "Parsed cover letter: {} sections, {} stories, quality {}",
        len(sections), len(stories), data.quality,
    )
    return data, build_cover_letter_result(data)
