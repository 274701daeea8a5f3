"""
Feedback and beta signup routes

Submissions are public; reading or clearing the fallback store needs admin.
"""
from typing import Any, List

from fastapi import APIRouter, Depends

from narrata.core.config import settings
from narrata.core.response import success_response, ResponseModel, DictResponse, MessageResponse
from narrata.core.security import CurrentUser, require_admin
from narrata.schemas.feedback import FeedbackData, BetaSignupData, RelayResult
from narrata.services.feedback_relay import (
    AppsScriptRelay,
    BaseRelay,
    GoogleSheetsRelay,
    get_beta_signup_relay,
    get_feedback_relay,
)

router = APIRouter()


@router.post("", summary="Submit feedback", response_model=ResponseModel[RelayResult])
async def submit_feedback(
    feedback: FeedbackData,
    relay: BaseRelay = Depends(get_feedback_relay),
):
    """
    Forward feedback to the configured channel, falling back to local storage
    """
    result = await relay.submit_feedback(feedback)
    return success_response(data=result.model_dump(), message="Feedback received")


@router.post("/beta-signup", summary="Sign up for the beta", response_model=ResponseModel[RelayResult])
async def beta_signup(
    signup: BetaSignupData,
    relay: AppsScriptRelay = Depends(get_beta_signup_relay),
):
    result = await relay.submit_beta_signup(signup)
    return success_response(data=result.model_dump(), message="Signup received")


@router.get("/status", summary="Relay configuration", response_model=DictResponse)
async def relay_status():
    return success_response(data={
        "channel": settings.feedback_channel,
        "apps_script_configured": AppsScriptRelay().is_configured(),
        "sheets_configured": GoogleSheetsRelay().is_configured(),
    })


@router.get("/stored", summary="List stored feedback", response_model=ResponseModel[List[Any]])
async def get_stored_feedback(
    admin: CurrentUser = Depends(require_admin),
    relay: BaseRelay = Depends(get_feedback_relay),
):
    return success_response(data=await relay.get_stored_feedback())


@router.delete("/stored", summary="Clear stored feedback", response_model=MessageResponse)
async def clear_stored_feedback(
    admin: CurrentUser = Depends(require_admin),
    relay: BaseRelay = Depends(get_feedback_relay),
):
    await relay.clear_stored_feedback()
    return success_response(message="Stored feedback cleared")


@router.get("/beta-signups", summary="List stored beta signups", response_model=ResponseModel[List[Any]])
async def get_stored_beta_signups(
    admin: CurrentUser = Depends(require_admin),
    relay: AppsScriptRelay = Depends(get_beta_signup_relay),
):
    return success_response(data=await relay.get_stored_beta_signups())


@router.delete("/beta-signups", summary="Clear stored beta signups", response_model=MessageResponse)
async def clear_stored_beta_signups(
    admin: CurrentUser = Depends(require_admin),
    relay: AppsScriptRelay = Depends(get_beta_signup_relay),
):
    await relay.clear_stored_beta_signups()
    return success_response(message="Stored beta signups cleared")
