"""
Work history aggregate route

Companies with their work items, and each work item with its stories and links
"""
from collections import defaultdict

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from narrata.core.database import get_db
from narrata.core.response import success_response, ResponseModel
from narrata.core.security import CurrentUser, get_current_user
from narrata.crud import company_crud
from narrata.models.approved_content import ApprovedContent, ApprovedContentResponse
from narrata.models.company import CompanyResponse
from narrata.models.external_link import ExternalLink, ExternalLinkResponse
from narrata.models.work_item import WorkItem, WorkItemResponse
from narrata.schemas.work_history import WorkHistoryResponse, CompanyWorkHistory, WorkItemDetail

router = APIRouter()


@router.get("", summary="Get work history", response_model=ResponseModel[WorkHistoryResponse])
async def get_work_history(
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    companies = await company_crud.get_all(db, user_id=user.id)
    work_items = (await db.execute(
        select(WorkItem).where(WorkItem.user_id == user.id).order_by(WorkItem.start_date.desc())
    )).scalars().all()
    stories = (await db.execute(
        select(ApprovedContent).where(ApprovedContent.user_id == user.id).order_by(ApprovedContent.created_at)
    )).scalars().all()
    links = (await db.execute(
        select(ExternalLink).where(ExternalLink.user_id == user.id).order_by(ExternalLink.created_at)
    )).scalars().all()

    stories_by_item = defaultdict(list)
    for story in stories:
        stories_by_item[story.work_item_id].append(story)
    links_by_item = defaultdict(list)
    for link in links:
        links_by_item[link.work_item_id].append(link)
    items_by_company = defaultdict(list)
    for item in work_items:
        items_by_company[item.company_id].append(WorkItemDetail(
            **WorkItemResponse.model_validate(item).model_dump(),
            stories=[ApprovedContentResponse.model_validate(s) for s in stories_by_item[item.id]],
            links=[ExternalLinkResponse.model_validate(link) for link in links_by_item[item.id]],
        ))

    result = WorkHistoryResponse(
        companies=[
            CompanyWorkHistory(
                **CompanyResponse.model_validate(company).model_dump(),
                work_items=items_by_company[company.id],
            )
            for company in companies
        ],
        total_work_items=len(work_items),
        total_stories=len(stories),
        total_links=len(links),
    )
    return success_response(data=result.model_dump())
