"""
Company API routes
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
from narrata.core.exceptions import NotFoundException
from narrata.core.security import CurrentUser, get_current_user
from narrata.crud import company_crud
from narrata.models.company import CompanyCreate, CompanyUpdate, CompanyResponse

router = APIRouter()


@router.get("", summary="List companies", response_model=PagedResponseModel[CompanyResponse])
async def get_companies(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(20, ge=1, le=100, description="Page size"),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    List the caller's companies, newest first
    """
    skip = (page - 1) * page_size
    companies = await company_crud.get_multi(db, user_id=user.id, skip=skip, limit=page_size)
    total = await company_crud.count(db, user_id=user.id)
    return paged_response(companies, total, page, page_size, schema=CompanyResponse)


@router.post("", summary="Create company", response_model=ResponseModel[CompanyResponse])
async def create_company(
    data: CompanyCreate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    company = await company_crud.create(db, obj_in=data, user_id=user.id)
    return success_response(
        data=CompanyResponse.model_validate(company).model_dump(),
        message="Company created"
    )


@router.get("/{company_id}", summary="Get company", response_model=ResponseModel[CompanyResponse])
async def get_company(
    company_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    company = await company_crud.get(db, company_id, user_id=user.id)
    if not company:
        raise NotFoundException(f"Company not found: {company_id}")
    return success_response(data=CompanyResponse.model_validate(company).model_dump())


@router.patch("/{company_id}", summary="Update company", response_model=ResponseModel[CompanyResponse])
async def update_company(
    company_id: str,
    data: CompanyUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    company = await company_crud.get(db, company_id, user_id=user.id)
    if not company:
        raise NotFoundException(f"Company not found: {company_id}")

    company = await company_crud.update(db, db_obj=company, obj_in=data)
    return success_response(
        data=CompanyResponse.model_validate(company).model_dump(),
        message="Company updated"
    )


@router.delete("/{company_id}", summary="Delete company", response_model=MessageResponse)
async def delete_company(
    company_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Delete a company together with its work items, stories and links
    """
    deleted = await company_crud.delete(db, id=company_id, user_id=user.id)
    if not deleted:
        raise NotFoundException(f"Company not found: {company_id}")
    return success_response(message="Company deleted")
