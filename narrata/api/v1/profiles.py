"""
Profile API routes
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from narrata.core.database import get_db
from narrata.core.response import success_response, ResponseModel
from narrata.core.security import CurrentUser, get_current_user
from narrata.crud import profile_crud
from narrata.models.profile import ProfileUpdate, ProfileResponse

router = APIRouter()


@router.get("/me", summary="Get my profile", response_model=ResponseModel[ProfileResponse])
async def get_my_profile(
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Return the caller's profile, creating it from token claims on first access
    """
    profile = await profile_crud.get_or_create(db, user_id=user.id, email=user.email)
    return success_response(data=ProfileResponse.model_validate(profile).model_dump())


@router.patch("/me", summary="Update my profile", response_model=ResponseModel[ProfileResponse])
async def update_my_profile(
    data: ProfileUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    profile = await profile_crud.get_or_create(db, user_id=user.id, email=user.email)
    profile = await profile_crud.update(db, db_obj=profile, obj_in=data)
    return success_response(
        data=ProfileResponse.model_validate(profile).model_dump(),
        message="Profile updated"
    )
