"""
Dashboard route
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from narrata.core.database import get_db
from narrata.core.response import success_response, ResponseModel
from narrata.core.security import CurrentUser, get_current_user
from narrata.schemas.dashboard import DashboardData
from narrata.services.dashboard import DashboardService

router = APIRouter()


@router.get("", summary="Get dashboard", response_model=ResponseModel[DashboardData])
async def get_dashboard(
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    data = await DashboardService(db, user.id).get_dashboard()
    return success_response(data=data.model_dump())
