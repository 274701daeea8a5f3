"""
Job description API routes
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
from narrata.crud import job_description_crud, cover_letter_crud
from narrata.models.job_description import (
    JobDescriptionCreate,
    JobDescriptionUpdate,
    JobDescriptionResponse,
)

router = APIRouter()


@router.get("", summary="List job descriptions", response_model=PagedResponseModel[JobDescriptionResponse])
async def get_job_descriptions(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(20, ge=1, le=100, description="Page size"),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    skip = (page - 1) * page_size
    rows = await job_description_crud.get_multi(db, user_id=user.id, skip=skip, limit=page_size)
    total = await job_description_crud.count(db, user_id=user.id)
    return paged_response(rows, total, page, page_size, schema=JobDescriptionResponse)


@router.post("", summary="Create job description", response_model=ResponseModel[JobDescriptionResponse])
async def create_job_description(
    data: JobDescriptionCreate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    job_description = await job_description_crud.create(db, obj_in=data, user_id=user.id)
    return success_response(
        data=JobDescriptionResponse.model_validate(job_description).model_dump(),
        message="Job description created"
    )


@router.get("/{job_description_id}", summary="Get job description", response_model=ResponseModel[JobDescriptionResponse])
async def get_job_description(
    job_description_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    job_description = await job_description_crud.get(db, job_description_id, user_id=user.id)
    if not job_description:
        raise NotFoundException(f"Job description not found: {job_description_id}")
    return success_response(data=JobDescriptionResponse.model_validate(job_description).model_dump())


@router.patch("/{job_description_id}", summary="Update job description", response_model=ResponseModel[JobDescriptionResponse])
async def update_job_description(
    job_description_id: str,
    data: JobDescriptionUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    job_description = await job_description_crud.get(db, job_description_id, user_id=user.id)
    if not job_description:
        raise NotFoundException(f"Job description not found: {job_description_id}")

    job_description = await job_description_crud.update(db, db_obj=job_description, obj_in=data)
    return success_response(
        data=JobDescriptionResponse.model_validate(job_description).model_dump(),
        message="Job description updated"
    )


@router.delete("/{job_description_id}", summary="Delete job description", response_model=MessageResponse)
async def delete_job_description(
    job_description_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Delete a job description no cover letter refers to
    """
    job_description = await job_description_crud.get(db, job_description_id, user_id=user.id)
    if not job_description:
        raise NotFoundException(f"Job description not found: {job_description_id}")

    in_use = await cover_letter_crud.count_by_job_description(db, job_description_id)
    if in_use:
        raise ConflictException(f"Job description is used by {in_use} cover letter(s)")

    await job_description_crud.delete(db, id=job_description_id, user_id=user.id)
    return success_response(message="Job description deleted")
