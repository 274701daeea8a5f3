"""
Cover letter template API routes
"""
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
from narrata.core.exceptions import NotFoundException, ConflictException
from narrata.core.security import CurrentUser, get_current_user
from narrata.crud import cover_letter_template_crud
from narrata.models.cover_letter import (
    CoverLetterTemplateCreate,
    CoverLetterTemplateUpdate,
    CoverLetterTemplateResponse,
)

router = APIRouter()


@router.get("", summary="List templates", response_model=PagedResponseModel[CoverLetterTemplateResponse])
async def get_templates(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(20, ge=1, le=100, description="Page size"),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    skip = (page - 1) * page_size
    templates = await cover_letter_template_crud.get_multi(db, user_id=user.id, skip=skip, limit=page_size)
    total = await cover_letter_template_crud.count(db, user_id=user.id)
    return paged_response(templates, total, page, page_size, schema=CoverLetterTemplateResponse)


@router.post("", summary="Create template", response_model=ResponseModel[CoverLetterTemplateResponse])
async def create_template(
    data: CoverLetterTemplateCreate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    template = await cover_letter_template_crud.create(db, obj_in=data, user_id=user.id)
    return success_response(
        data=CoverLetterTemplateResponse.model_validate(template).model_dump(),
        message="Template created"
    )


@router.get("/{template_id}", summary="Get template", response_model=ResponseModel[CoverLetterTemplateResponse])
async def get_template(
    template_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    template = await cover_letter_template_crud.get(db, template_id, user_id=user.id)
    if not template:
        raise NotFoundException(f"Template not found: {template_id}")
    return success_response(data=CoverLetterTemplateResponse.model_validate(template).model_dump())


@router.patch("/{template_id}", summary="Update template", response_model=ResponseModel[CoverLetterTemplateResponse])
async def update_template(
    template_id: str,
    data: CoverLetterTemplateUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    template = await cover_letter_template_crud.get(db, template_id, user_id=user.id)
    if not template:
        raise NotFoundException(f"Template not found: {template_id}")

    template = await cover_letter_template_crud.update(db, db_obj=template, obj_in=data)
    return success_response(
        data=CoverLetterTemplateResponse.model_validate(template).model_dump(),
        message="Template updated"
    )


@router.delete("/{template_id}", summary="Delete template", response_model=MessageResponse)
async def delete_template(
    template_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    template = await cover_letter_template_crud.get(db, template_id, user_id=user.id)
    if not template:
        raise NotFoundException(f"Template not found: {template_id}")
    if await cover_letter_template_crud.is_in_use(db, template_id):
        raise ConflictException("Template is used by existing cover letters")

    await cover_letter_template_crud.delete(db, id=template_id, user_id=user.id)
    return success_response(message="Template deleted")
