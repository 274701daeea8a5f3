"""
Work history aggregate schemas
"""
from typing import List

from narrata.models.company import CompanyResponse
from narrata.models.work_item import WorkItemResponse
from narrata.models.approved_content import ApprovedContentResponse
from narrata.models.external_link import ExternalLinkResponse
from .base import BaseSchema


class WorkItemDetail(WorkItemResponse):
    """Work item with its stories and links"""
    stories: List[ApprovedContentResponse] = []
    links: List[ExternalLinkResponse] = []


class CompanyWorkHistory(CompanyResponse):
    """Company with its work items"""
    work_items: List[WorkItemDetail] = []


class WorkHistoryResponse(BaseSchema):
    companies: List[CompanyWorkHistory] = []
    total_work_items: int = 0
    total_stories: int = 0
    total_links: int = 0
