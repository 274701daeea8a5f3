"""
LinkedIn OAuth relay routes

Keeps the client secret server-side: the browser sends the authorization
code here and receives the access token back.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from narrata.core.database import get_db
from narrata.core.response import success_response, ResponseModel
from narrata.core.security import CurrentUser, get_current_user
from narrata.crud import linkedin_profile_crud
from narrata.schemas.linkedin import (
    ExchangeTokenRequest,
    TokenResponse,
    FetchDataRequest,
    LinkedInMemberData,
    AuthorizeUrlResponse,
)
from narrata.services.linkedin_client import LinkedInClient, get_linkedin_client, to_linkedin_profile_row

router = APIRouter()


@router.get("/authorize-url", summary="Build the authorization URL", response_model=ResponseModel[AuthorizeUrlResponse])
async def authorize_url(
    redirect_uri: str = Query(..., description="OAuth redirect URI"),
    state: str = Query(..., description="Opaque CSRF state"),
    scope: Optional[str] = Query(None, description="Space separated scopes"),
    client: LinkedInClient = Depends(get_linkedin_client),
):
    url = client.build_authorize_url(redirect_uri, state, scope)
    return success_response(data={"url": url})


@router.post("/exchange-token", summary="Exchange an authorization code", response_model=ResponseModel[TokenResponse])
async def exchange_token(
    request: ExchangeTokenRequest,
    client: LinkedInClient = Depends(get_linkedin_client),
):
    """
    Exchange the authorization code for an access token
    """
    token = await client.exchange_token(request.code, request.redirect_uri)
    return success_response(data=token)


@router.post("/fetch-data", summary="Fetch LinkedIn member data", response_model=ResponseModel[LinkedInMemberData])
async def fetch_data(
    request: FetchDataRequest,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    client: LinkedInClient = Depends(get_linkedin_client),
):
    """
    Fetch profile, positions, education and skills, and store the snapshot
    """
    data = await client.fetch_member_data(request.access_token)
    await linkedin_profile_crud.upsert(db, user_id=user.id, data=to_linkedin_profile_row(data))
    logger.info("LinkedIn snapshot stored for user {}", user.id)
    return success_response(data=data)
