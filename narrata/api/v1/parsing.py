"""
Resume / LinkedIn / cover letter parsing API routes

Quick parsers that return a structure plus confidence diagnostics
"""
from fastapi import APIRouter, Depends, File, Query, UploadFile

from narrata.core.response import success_response, ResponseModel
from narrata.core.exceptions import BadRequestException
from narrata.core.security import CurrentUser, get_current_user
from narrata.schemas.parsing import (
    ResumeParseResponse,
    LinkedInParseRequest,
    LinkedInParseResponse,
    ProfileAccessibility,
    CoverLetterParseRequest,
    CoverLetterParseResponse,
)
from narrata.services.resume_parser import parse_resume
from narrata.services.cover_letter_parser import parse_cover_letter
from narrata.services.linkedin_parser import (
    parse_linkedin,
    validate_linkedin_url,
    check_profile_accessibility,
)

router = APIRouter()


@router.post("/resume", summary="Parse a resume", response_model=ResponseModel[ResumeParseResponse])
async def parse_resume_file(
    file: UploadFile = File(..., description="Resume file"),
    user: CurrentUser = Depends(get_current_user),
):
    content = await file.read()
    data, result = parse_resume(file.filename or "resume", content)
    return success_response(data=ResumeParseResponse(data=data, result=result).model_dump())


@router.post("/linkedin", summary="Parse a LinkedIn profile", response_model=ResponseModel[LinkedInParseResponse])
async def parse_linkedin_profile(
    request: LinkedInParseRequest,
    user: CurrentUser = Depends(get_current_user),
):
    if not validate_linkedin_url(request.url):
        raise BadRequestException("Invalid LinkedIn URL")

    data, result = parse_linkedin(request.url)
    return success_response(data=LinkedInParseResponse(data=data, result=result).model_dump())


@router.get("/linkedin/accessibility", summary="Check profile accessibility", response_model=ResponseModel[ProfileAccessibility])
async def linkedin_accessibility(
    url: str = Query(..., description="LinkedIn profile URL"),
    user: CurrentUser = Depends(get_current_user),
):
    return success_response(data=check_profile_accessibility(url).model_dump())


@router.post("/cover-letter", summary="Parse a cover letter", response_model=ResponseModel[CoverLetterParseResponse])
async def parse_cover_letter_text(
    request: CoverLetterParseRequest,
    user: CurrentUser = Depends(get_current_user),
):
    if not request.text:
        raise BadRequestException("Cover letter text is required")

    data, result = parse_cover_letter(request.text)
    return success_response(data=CoverLetterParseResponse(data=data, result=result).model_dump())
