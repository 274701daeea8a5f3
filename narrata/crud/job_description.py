"""
Job description CRUD
"""
from narrata.models.job_description import JobDescription
from .base import CRUDBase


class CRUDJobDescription(CRUDBase[JobDescription]):
    """Job description CRUD"""
    pass


job_description_crud = CRUDJobDescription(JobDescription)
