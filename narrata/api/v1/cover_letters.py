"""
Cover letter API routes
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
from narrata.crud import cover_letter_crud, cover_letter_template_crud, job_description_crud
from narrata.models.cover_letter import (
    CoverLetterCreate,
    CoverLetterUpdate,
    CoverLetterResponse,
    CoverLetterStatus,
)

router = APIRouter()


async def _check_references(
    db: AsyncSession,
    user_id: str,
    template_id: Optional[str],
    job_description_id: Optional[str],
) -> None:
    """Referenced template and job description must belong to the caller"""
    if template_id and not await cover_letter_template_crud.get(db, template_id, user_id=user_id):
        raise NotFoundException(f"Template not found: {template_id}")
    if job_description_id and not await job_description_crud.get(db, job_description_id, user_id=user_id):
        raise NotFoundException(f"Job description not found: {job_description_id}")


@router.get("", summary="List cover letters", response_model=PagedResponseModel[CoverLetterResponse])
async def get_cover_letters(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(20, ge=1, le=100, description="Page size"),
    status: Optional[CoverLetterStatus] = Query(None, description="Filter by status"),
    job_description_id: Optional[str] = Query(None, description="Filter by job description"),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    skip = (page - 1) * page_size
    filters = {
        "status": status.value if status else None,
        "job_description_id": job_description_id,
    }
    letters = await cover_letter_crud.get_multi(db, user_id=user.id, skip=skip, limit=page_size, filters=filters)
    total = await cover_letter_crud.count(db, user_id=user.id, filters=filters)
    return paged_response(letters, total, page, page_size, schema=CoverLetterResponse)


@router.post("", summary="Create cover letter", response_model=ResponseModel[CoverLetterResponse])
async def create_cover_letter(
    data: CoverLetterCreate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await _check_references(db, user.id, data.template_id, data.job_description_id)
    letter = await cover_letter_crud.create(db, obj_in=data, user_id=user.id)
    return success_response(
        data=CoverLetterResponse.model_validate(letter).model_dump(),
        message="Cover letter created"
    )


@router.get("/{cover_letter_id}", summary="Get cover letter", response_model=ResponseModel[CoverLetterResponse])
async def get_cover_letter(
    cover_letter_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    letter = await cover_letter_crud.get(db, cover_letter_id, user_id=user.id)
    if not letter:
        raise NotFoundException(f"Cover letter not found: {cover_letter_id}")
    return success_response(data=CoverLetterResponse.model_validate(letter).model_dump())


@router.patch("/{cover_letter_id}", summary="Update cover letter", response_model=ResponseModel[CoverLetterResponse])
async def update_cover_letter(
    cover_letter_id: str,
    data: CoverLetterUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    letter = await cover_letter_crud.get(db, cover_letter_id, user_id=user.id)
    if not letter:
        raise NotFoundException(f"Cover letter not found: {cover_letter_id}")

    await _check_references(db, user.id, data.template_id, data.job_description_id)
    letter = await cover_letter_crud.update(db, db_obj=letter, obj_in=data)
    return success_response(
        data=CoverLetterResponse.model_validate(letter).model_dump(),
        message="Cover letter updated"
    )


@router.delete("/{cover_letter_id}", summary="Delete cover letter", response_model=MessageResponse)
async def delete_cover_letter(
    cover_letter_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    deleted = await cover_letter_crud.delete(db, id=cover_letter_id, user_id=user.id)
    if not deleted:
        raise NotFoundException(f"Cover letter not found: {cover_letter_id}")
    return success_response(message="Cover letter deleted")
