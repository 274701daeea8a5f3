"""
Dashboard schemas
"""
from typing import List, Literal

from .base import BaseSchema

HealthStatus = Literal["healthy", "warning", "critical"]


class DashboardStats(BaseSchema):
    stories: int = 0
    cover_letters: int = 0
    skills_coverage: int = 0
    last_month_stories: int = 0
    last_month_cover_letters: int = 0
    skills_improvement: int = 0


class TopRole(BaseSchema):
    title: str
    count: int
    percentage: int
    last_applied: str


class HealthItem(BaseSchema):
    count: int
    status: HealthStatus


class ContentHealth(BaseSchema):
    stories: HealthItem
    saved_sections: HealthItem
    cover_letters: HealthItem


class CompetencyStrength(BaseSchema):
    name: str
    strength: int
    evidence: List[str] = []


class StoryStrength(BaseSchema):
    overall: int
    competencies: List[CompetencyStrength] = []


class ResumeGap(BaseSchema):
    competency: str
    gap: int
    priority: Literal["high", "medium", "low"]
    suggestions: List[str] = []


class CompetencyCoverage(BaseSchema):
    competency: str
    coverage: int
    strength: int
    evidence: List[str] = []


class CoverageMap(BaseSchema):
    competencies: List[CompetencyCoverage] = []
    overall_coverage: int = 0
    priority_gaps: List[str] = []


class DashboardData(BaseSchema):
    """GET /dashboard payload"""
    stats: DashboardStats
    top_roles: List[TopRole] = []
    content_health: ContentHealth
    story_strength: StoryStrength
    resume_gaps: List[ResumeGap] = []
    coverage_map: CoverageMap
