"""
Work history import

Turns structured resume data (the LLM analysis output) into companies, work
items and stories owned by one user.
"""
import re
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from narrata.crud import company_crud, work_item_crud, approved_content_crud
from narrata.utils.dates import normalize_date, is_current_marker, is_iso_date

# "Acme Corp — Senior PM | Remote" -> "Senior PM"
COMPANY_LINE_TITLE = re.compile(r"—\s*(.+?)(?:\s*\||\s*$)")

STORY_TITLE_LENGTH = 100


@dataclass
class ImportSummary:
    """Rows created by one import"""
    companies_created: int = 0
    work_items_created: int = 0
    stories_created: int = 0
    stories_skipped: int = 0
    entries_skipped: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def _text(value: Any) -> Optional[str]:
    """Strings as-is, numbers as their string form, anything else None"""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _string_list(value: Any) -> List[str]:
    """Text items of a list; a bare string or other shape gives []"""
    if not isinstance(value, list):
        return []
    return [text for text in (_text(item) for item in value) if text]


def resolve_title(entry: Dict[str, Any]) -> Optional[str]:
    """Role title from position, title, or the company line"""
    title = _text(entry.get("position")) or _text(entry.get("title"))
    if title and title.strip():
        return title.strip()

    match = COMPANY_LINE_TITLE.search(_text(entry.get("company")) or "")
    if match and match.group(1).strip():
        return match.group(1).strip()
    return None


def resolve_company_name(entry: Dict[str, Any]) -> Optional[str]:
    """Company line, "Unknown" when absent; None when it is not text"""
    company = entry.get("company")
    if company is None:
        return "Unknown"
    name = _text(company)
    if name is None:
        return None
    return name.strip() or "Unknown"


def resolve_end_date(entry: Dict[str, Any]) -> Optional[str]:
    """None while the role is current or the date is unreadable"""
    end_date = entry.get("endDate")
    if entry.get("current") is True or is_current_marker(end_date):
        return None
    end_date = normalize_date(end_date)
    return end_date if is_iso_date(end_date) else None


def tag_metrics(metrics: Any, parent_type: str) -> List[dict]:
    """Copy metric dicts, defaulting parentType"""
    if not isinstance(metrics, list):
        return []
    tagged = []
    for metric in metrics:
        if isinstance(metric, dict):
            tagged.append({**metric, "parentType": metric.get("parentType") or parent_type})
    return tagged


def role_achievements(entry: Dict[str, Any]) -> List[str]:
    """Achievements from role metrics ("value context"), else the raw list"""
    metrics = entry.get("roleMetrics")
    if isinstance(metrics, list) and metrics:
        achievements = []
        for metric in metrics:
            if not isinstance(metric, dict):
                continue
            text = f"{_text(metric.get('value')) or ''} {_text(metric.get('context')) or ''}".strip()
            if text:
                achievements.append(text)
        return achievements
    achievements = entry.get("achievements")
    return [str(a) for a in achievements] if isinstance(achievements, list) else []


async def import_structured_data(
    db: AsyncSession,
    user_id: str,
    structured: Optional[Dict[str, Any]],
    source_id: Optional[str] = None,
) -> Dict[str, int]:
    """
    Import the workHistory of structured resume data

    Args:
        db: session; the caller commits
        user_id: owner of every created row
        structured: analysis output with a workHistory list
        source_id: source document the rows are traced back to

    Returns:
        companies_created, work_items_created, stories_created,
        stories_skipped, entries_skipped
    """
    summary = ImportSummary()
    work_history = structured.get("workHistory") if isinstance(structured, dict) else None
    if not isinstance(work_history, list):
        logger.info("No work history to import for user {}", user_id)
        return summary.to_dict()

    for entry in work_history:
        if not isinstance(entry, dict):
            summary.entries_skipped += 1
            continue

        company_name = resolve_company_name(entry)
        if company_name is None:
            logger.warning("Skipping work item: company is {}, not text", type(entry.get("company")).__name__)
            summary.entries_skipped += 1
            continue

        title = resolve_title(entry)
        if not title:
            logger.warning("Skipping work item for {}: missing position/title", company_name)
            summary.entries_skipped += 1
            continue

        company_tags = _string_list(entry.get("companyTags"))
        company = await company_crud.get_by_name(db, company_name, user_id=user_id)
        if company:
            if company_tags:
                await company_crud.update(db, db_obj=company, obj_in={"tags": company_tags})
        else:
            company = await company_crud.create(
                db,
                obj_in={
                    "name": company_name,
                    "description": _text(entry.get("description")) or "",
                    "tags": company_tags,
                },
                user_id=user_id,
            )
            summary.companies_created += 1

        start_date = normalize_date(entry.get("startDate"))
        work_item = await work_item_crud.create(
            db,
            obj_in={
                "company_id": company.id,
                "title": title,
                "start_date": start_date if is_iso_date(start_date) else "",
                "end_date": resolve_end_date(entry),
                "description": _text(entry.get("roleSummary")) or _text(entry.get("description")) or "",
                "achievements": role_achievements(entry),
                "tags": _string_list(entry.get("roleTags")) or _string_list(entry.get("tags")),
                "metrics": tag_metrics(entry.get("roleMetrics"), "role"),
                "source_id": source_id,
            },
            user_id=user_id,
        )
        summary.work_items_created += 1

        stories = entry.get("stories")
        for story in stories if isinstance(stories, list) else []:
            if not isinstance(story, dict):
                summary.stories_skipped += 1
                continue
            content = _text(story.get("content")) or ""
            title = _text(story.get("title")) or content[:STORY_TITLE_LENGTH]
            if not title:
                summary.stories_skipped += 1
                continue
            await approved_content_crud.create(
                db,
                obj_in={
                    "work_item_id": work_item.id,
                    "company_id": company.id,
                    "title": title,
                    "content": content,
                    "tags": _string_list(story.get("tags")),
                    "metrics": tag_metrics(story.get("metrics"), "story"),
                    "source_id": source_id,
                },
                user_id=user_id,
            )
            summary.stories_created += 1

    logger.info(
        "Work history import for user {}: {} companies, {} work items, {} stories ({} skipped)",
        user_id,
        summary.companies_created,
        summary.work_items_created,
        summary.stories_created,
        summary.stories_skipped,
    )
    return summary.to_dict()
