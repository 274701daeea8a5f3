"""
API routes
"""
from fastapi import APIRouter

from .v1 import (
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

api_router = APIRouter()

api_router.include_router(profiles.router, prefix="/profiles", tags=["Profiles"])
api_router.include_router(companies.router, prefix="/companies", tags=["Work history"])
api_router.include_router(work_items.router, prefix="/work-items", tags=["Work history"])
api_router.include_router(stories.router, prefix="/stories", tags=["Work history"])
api_router.include_router(links.router, prefix="/links", tags=["Work history"])
api_router.include_router(work_history.router, prefix="/work-history", tags=["Work history"])
api_router.include_router(job_descriptions.router, prefix="/job-descriptions", tags=["Cover letters"])
api_router.include_router(templates.router, prefix="/templates", tags=["Cover letters"])
api_router.include_router(cover_letters.router, prefix="/cover-letters", tags=["Cover letters"])
api_router.include_router(sources.router, prefix="/sources", tags=["Uploads"])
api_router.include_router(parsing.router, prefix="/parsing", tags=["Parsing"])
api_router.include_router(linkedin.router, prefix="/linkedin", tags=["LinkedIn"])
api_router.include_router(feedback.router, prefix="/feedback", tags=["Feedback"])
api_router.include_router(enrichment.router, prefix="/enrichment", tags=["Enrichment"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
