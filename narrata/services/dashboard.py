"""
Dashboard read model

Counts and health indicators over the caller's work history and cover
letters. Story strength and resume gaps are fixed placeholders until an
assessment model backs them.
"""
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Dict, List

from loguru import logger
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from narrata.models.approved_content import ApprovedContent, ContentStatus
from narrata.models.base import utcnow
from narrata.models.cover_letter import CoverLetter
from narrata.models.work_item import WorkItem
from narrata.schemas.dashboard import (
    CompetencyCoverage,
    CompetencyStrength,
    ContentHealth,
    CoverageMap,
    DashboardData,
    DashboardStats,
    HealthItem,
    ResumeGap,
    StoryStrength,
    TopRole,
)

RECENT_DAYS = 30
TOP_ROLES_LIMIT = 5
COVERAGE_PER_APPROVED = 8.33
HEALTHY_THRESHOLD = 10
WARNING_THRESHOLD = 5

COMPETENCIES = [
    "product-strategy",
    "user-research",
    "data-analysis",
    "stakeholder-management",
    "team-leadership",
    "technical-understanding",
    "business-acumen",
    "execution",
    "communication",
    "prioritization",
]

STORY_STRENGTH = StoryStrength(
    overall=75,
    competencies=[
        CompetencyStrength(name="Leadership", strength=80, evidence=["Led team of 5 engineers", "Managed product roadmap"]),
        CompetencyStrength(name="Technical Skills", strength=70, evidence=["Built scalable systems", "Implemented CI/CD"]),
        CompetencyStrength(name="Product Management", strength=85, evidence=["Launched 3 products", "Increased user engagement"]),
    ],
)

RESUME_GAPS = [
    ResumeGap(
        competency="Product Strategy",
        gap=25,
        priority="high",
        suggestions=["Add strategic planning examples", "Include market analysis stories"],
    ),
    ResumeGap(
        competency="Data Analysis",
        gap=15,
        priority="medium",
        suggestions=["Include metrics-driven decisions", "Add A/B testing examples"],
    ),
    ResumeGap(
        competency="Stakeholder Management",
        gap=10,
        priority="low",
        suggestions=["Add cross-functional collaboration stories"],
    ),
]


def health_status(count: int) -> str:
    if count >= HEALTHY_THRESHOLD:
        return "healthy"
    if count >= WARNING_THRESHOLD:
        return "warning"
    return "critical"


def skills_coverage(approved_count: int) -> int:
    return min(100, round(approved_count * COVERAGE_PER_APPROVED))


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive timestamps"""
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def rank_roles(work_items: List[WorkItem]) -> List[TopRole]:
    """Top work item titles by count, with share and most recent date"""
    counts: Counter = Counter()
    latest: Dict[str, datetime] = {}
    for item in work_items:
        title = item.title or "Unknown Role"
        counts[title] += 1
        created_at = as_utc(item.created_at)
        if title not in latest or created_at > latest[title]:
            latest[title] = created_at

    total = sum(counts.values())
    return [
        TopRole(
            title=title,
            count=count,
            percentage=round(count / total * 100),
            last_applied=latest[title].date().isoformat(),
        )
        for title, count in counts.most_common(TOP_ROLES_LIMIT)
    ]


def build_coverage_map(strength: StoryStrength, gaps: List[ResumeGap]) -> CoverageMap:
    by_name = {c.name: c for c in strength.competencies}
    competencies = []
    for name in COMPETENCIES:
        matched = by_name.get(name)
        competencies.append(
            CompetencyCoverage(
                competency=name,
                coverage=matched.strength if matched else 0,
                strength=matched.strength if matched else 0,
                evidence=list(matched.evidence) if matched else [],
            )
        )
    overall = round(sum(c.coverage for c in competencies) / len(competencies)) if competencies else 0
    return CoverageMap(
        competencies=competencies,
        overall_coverage=overall,
        priority_gaps=[g.competency for g in gaps if g.priority == "high"],
    )


class DashboardService:
    """Builds the dashboard for one user"""

    def __init__(self, db: AsyncSession, user_id: str):
        self.db = db
        self.user_id = user_id

    async def _count(self, model, *conditions) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(model).where(model.user_id == self.user_id, *conditions)
        )
        return result.scalar() or 0

    async def get_stats(self) -> DashboardStats:
        since = utcnow() - timedelta(days=RECENT_DAYS)
        approved = ApprovedContent.status == ContentStatus.APPROVED.value

        approved_count = await self._count(ApprovedContent, approved)
        recent_approved = await self._count(ApprovedContent, approved, ApprovedContent.created_at >= since)
        return DashboardStats(
            stories=await self._count(WorkItem),
            cover_letters=await self._count(CoverLetter),
            skills_coverage=skills_coverage(approved_count),
            last_month_stories=await self._count(WorkItem, WorkItem.created_at >= since),
            last_month_cover_letters=await self._count(CoverLetter, CoverLetter.created_at >= since),
            skills_improvement=skills_coverage(recent_approved),
        )

    async def get_top_roles(self) -> List[TopRole]:
        result = await self.db.execute(select(WorkItem).where(WorkItem.user_id == self.user_id))
        return rank_roles(list(result.scalars().all()))

    async def get_content_health(self) -> ContentHealth:
        stories = await self._count(WorkItem)
        saved = await self._count(ApprovedContent, ApprovedContent.status == ContentStatus.APPROVED.value)
        letters = await self._count(CoverLetter)
        return ContentHealth(
            stories=HealthItem(count=stories, status=health_status(stories)),
            saved_sections=HealthItem(count=saved, status=health_status(saved)),
            cover_letters=HealthItem(count=letters, status=health_status(letters)),
        )

    async def get_dashboard(self) -> DashboardData:
        stats = await self.get_stats()
        logger.info("Dashboard for user {}: {} stories, {} cover letters", self.user_id, stats.stories, stats.cover_letters)
        return DashboardData(
            stats=stats,
            top_roles=await self.get_top_roles(),
            content_health=await self.get_content_health(),
            story_strength=STORY_STRENGTH,
            resume_gaps=RESUME_GAPS,
            coverage_map=build_coverage_map(STORY_STRENGTH, RESUME_GAPS),
        )
