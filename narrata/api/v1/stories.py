"""
Approved content (story) API routes
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
from narrata.crud import approved_content_crud, work_item_crud
from narrata.models.approved_content import (
    ApprovedContentCreate,
    ApprovedContentUpdate,
    ApprovedContentResponse,
    ContentStatus,
)

router = APIRouter()


@router.get("", summary="List stories", response_model=PagedResponseModel[ApprovedContentResponse])
async def get_stories(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(50, ge=1, le=200, description="Page size"),
    work_item_id: Optional[str] = Query(None, description="Filter by work item"),
    status: Optional[ContentStatus] = Query(None, description="Filter by status"),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    skip = (page - 1) * page_size
    filters = {
        "work_item_id": work_item_id,
        "status": status.value if status else None,
    }
    stories = await approved_content_crud.get_multi(
        db, user_id=user.id, skip=skip, limit=page_size, filters=filters
    )
    total = await approved_content_crud.count(db, user_id=user.id, filters=filters)
    return paged_response(stories, total, page, page_size, schema=ApprovedContentResponse)


@router.post("", summary="Create story", response_model=ResponseModel[ApprovedContentResponse])
async def create_story(
    data: ApprovedContentCreate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Create a story under one of the caller's work items; company_id is copied from it
    """
    work_item = await work_item_crud.get(db, data.work_item_id, user_id=user.id)
    if not work_item:
        raise NotFoundException(f"Work item not found: {data.work_item_id}")

    obj_in = data.model_dump()
    obj_in["company_id"] = work_item.company_id
    story = await approved_content_crud.create(db, obj_in=obj_in, user_id=user.id)
    return success_response(
        data=ApprovedContentResponse.model_validate(story).model_dump(),
        message="Story created"
    )


@router.get("/{story_id}", summary="Get story", response_model=ResponseModel[ApprovedContentResponse])
async def get_story(
    story_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    story = await approved_content_crud.get(db, story_id, user_id=user.id)
    if not story:
        raise NotFoundException(f"Story not found: {story_id}")
    return success_response(data=ApprovedContentResponse.model_validate(story).model_dump())


@router.patch("/{story_id}", summary="Update story", response_model=ResponseModel[ApprovedContentResponse])
async def update_story(
    story_id: str,
    data: ApprovedContentUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    story = await approved_content_crud.get(db, story_id, user_id=user.id)
    if not story:
        raise NotFoundException(f"Story not found: {story_id}")

    story = await approved_content_crud.update(db, db_obj=story, obj_in=data)
    return success_response(
        data=ApprovedContentResponse.model_validate(story).model_dump(),
        message="Story updated"
    )


@router.delete("/{story_id}", summary="Delete story", response_model=MessageResponse)
async def delete_story(
    story_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    deleted = await approved_content_crud.delete(db, id=story_id, user_id=user.id)
    if not deleted:
        raise NotFoundException(f"Story not found: {story_id}")
    return success_response(message="Story deleted")


@router.post("/{story_id}/use", summary="Record story use", response_model=ResponseModel[ApprovedContentResponse])
async def use_story(
    story_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Increment times_used and stamp last_used
    """
    story = await approved_content_crud.get(db, story_id, user_id=user.id)
    if not story:
        raise NotFoundException(f"Story not found: {story_id}")

    story = await approved_content_crud.mark_used(db, db_obj=story)
    return success_response(data=ApprovedContentResponse.model_validate(story).model_dump())
