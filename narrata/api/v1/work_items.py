"""
Work item API routes
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from narrata.core.database import get_db
from narrata.core.response import (
    success_response,
    paged_response,
    ResponseModel,
    PagedResponseModel,
    MessageResponse,
)
from narrata.core.exceptions import NotFoundException
from narrata.core.security import CurrentUser, get_current_user
from narrata.crud import company_crud, work_item_crud
from narrata.models.work_item import WorkItemCreate, WorkItemUpdate, WorkItemResponse

router = APIRouter()


@router.get("", summary="List work items", response_model=PagedResponseModel[WorkItemResponse])
async def get_work_items(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(50, ge=1, le=200, description="Page size"),
    company_id: Optional[str] = Query(None, description="Filter by company"),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    List work items, most recent start date first
    """
    skip = (page - 1) * page_size
    work_items = await work_item_crud.get_by_company(
        db, user_id=user.id, company_id=company_id, skip=skip, limit=page_size
    )
    total = await work_item_crud.count(db, user_id=user.id, filters={"company_id": company_id})
    return paged_response(work_items, total, page, page_size, schema=WorkItemResponse)


@router.post("", summary="Create work item", response_model=ResponseModel[WorkItemResponse])
async def create_work_item(
    data: WorkItemCreate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Create a work item under one of the caller's companies
    """
    company = await company_crud.get(db, data.company_id, user_id=user.id)
    if not company:
        raise NotFoundException(f"Company not found: {data.company_id}")

    work_item = await work_item_crud.create(db, obj_in=data, user_id=user.id)
    return success_response(
        data=WorkItemResponse.model_validate(work_item).model_dump(),
        message="Work item created"
    )


@router.get("/{work_item_id}", summary="Get work item", response_model=ResponseModel[WorkItemResponse])
async def get_work_item(
    work_item_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    work_item = await work_item_crud.get(db, work_item_id, user_id=user.id)
    if not work_item:
        raise NotFoundException(f"Work item not found: {work_item_id}")
    return success_response(data=WorkItemResponse.model_validate(work_item).model_dump())


@router.patch("/{work_item_id}", summary="Update work item", response_model=ResponseModel[WorkItemResponse])
async def update_work_item(
    work_item_id: str,
    data: WorkItemUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    work_item = await work_item_crud.get(db, work_item_id, user_id=user.id)
    if not work_item:
        raise NotFoundException(f"Work item not found: {work_item_id}")

    if data.company_id and data.company_id != work_item.company_id:
        company = await company_crud.get(db, data.company_id, user_id=user.id)
        if not company:
            raise NotFoundException(f"Company not found: {data.company_id}")

    work_item = await work_item_crud.update(db, db_obj=work_item, obj_in=data)
    return success_response(
        data=WorkItemResponse.model_validate(work_item).model_dump(),
        message="Work item updated"
    )


@router.delete("/{work_item_id}", summary="Delete work item", response_model=MessageResponse)
async def delete_work_item(
    work_item_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Delete a work item with its stories and links
    """
    deleted = await work_item_crud.delete(db, id=work_item_id, user_id=user.id)
    if not deleted:
        raise NotFoundException(f"Work item not found: {work_item_id}")
    return success_response(message="Work item deleted")
