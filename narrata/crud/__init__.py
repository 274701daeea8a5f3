"""
CRUD module
"""
from .base import CRUDBase
from .profile import profile_crud
from .company import company_crud
from .work_item import work_item_crud
from .approved_content import approved_content_crud
from .external_link import external_link_crud
from .job_description import job_description_crud
from .cover_letter import cover_letter_template_crud, cover_letter_crud
from .source import source_crud
from .linkedin_profile import linkedin_profile_crud

__all__ = [
    "CRUDBase",
    "profile_crud",
    "company_crud",
    "work_item_crud",
    "approved_content_crud",
    "external_link_crud",
    "job_description_crud",
    "cover_letter_template_crud",
    "cover_letter_crud",
    "source_crud",
    "linkedin_profile_crud",
]
