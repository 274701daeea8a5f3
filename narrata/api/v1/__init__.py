"""
API v1 routers
"""
from . import (
    profiles,
    companies,
    work_items,
    stories,
    links,
    work_history,
    job_descriptions,
    templates,
    cover_letters,
    sources,
    parsing,
    linkedin,
    feedback,
    enrichment,
    dashboard,
)

__all__ = [
    "profiles",
    "companies",
    "work_items",
    "stories",
    "links",
    "work_history",
    "job_descriptions",
    "templates",
    "cover_letters",
    "sources",
    "parsing",
    "linkedin",
    "feedback",
    "enrichment",
    "dashboard",
]
