"""
External link API routes
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
from narrata.crud import external_link_crud, work_item_crud
from narrata.models.external_link import ExternalLinkCreate, ExternalLinkUpdate, ExternalLinkResponse

router = APIRouter()


@router.get("", summary="List links", response_model=PagedResponseModel[ExternalLinkResponse])
async def get_links(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(50, ge=1, le=200, description="Page size"),
    work_item_id: Optional[str] = Query(None, description="Filter by work item"),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    skip = (page - 1) * page_size
    filters = {"work_item_id": work_item_id}
    links = await external_link_crud.get_multi(
        db, user_id=user.id, skip=skip, limit=page_size, filters=filters
    )
    total = await external_link_crud.count(db, user_id=user.id, filters=filters)
    return paged_response(links, total, page, page_size, schema=ExternalLinkResponse)


@router.post("", summary="Create link", response_model=ResponseModel[ExternalLinkResponse])
async def create_link(
    data: ExternalLinkCreate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    work_item = await work_item_crud.get(db, data.work_item_id, user_id=user.id)
    if not work_item:
        raise NotFoundException(f"Work item not found: {data.work_item_id}")

    link = await external_link_crud.create(db, obj_in=data, user_id=user.id)
    return success_response(
        data=ExternalLinkResponse.model_validate(link).model_dump(),
        message="Link created"
    )


@router.get("/{link_id}", summary="Get link", response_model=ResponseModel[ExternalLinkResponse])
async def get_link(
    link_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    link = await external_link_crud.get(db, link_id, user_id=user.id)
    if not link:
        raise NotFoundException(f"Link not found: {link_id}")
    return success_response(data=ExternalLinkResponse.model_validate(link).model_dump())


@router.patch("/{link_id}", summary="Update link", response_model=ResponseModel[ExternalLinkResponse])
async def update_link(
    link_id: str,
    data: ExternalLinkUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    link = await external_link_crud.get(db, link_id, user_id=user.id)
    if not link:
        raise NotFoundException(f"Link not found: {link_id}")

    link = await external_link_crud.update(db, db_obj=link, obj_in=data)
    return success_response(
        data=ExternalLinkResponse.model_validate(link).model_dump(),
        message="Link updated"
    )


@router.delete("/{link_id}", summary="Delete link", response_model=MessageResponse)
async def delete_link(
    link_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    deleted = await external_link_crud.delete(db, id=link_id, user_id=user.id)
    if not deleted:
        raise NotFoundException(f"Link not found: {link_id}")
    return success_response(message="Link deleted")


@router.post("/{link_id}/use", summary="Record link use", response_model=ResponseModel[ExternalLinkResponse])
async def use_link(
    link_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    link = await external_link_crud.get(db, link_id, user_id=user.id)
    if not link:
        raise NotFoundException(f"Link not found: {link_id}")

    link = await external_link_crud.mark_used(db, db_obj=link)
    return success_response(data=ExternalLinkResponse.model_validate(link).model_dump())
