"""
People Data Labs enrichment route
"""
from fastapi import APIRouter, Depends

from narrata.core.response import success_response, ResponseModel
from narrata.core.exceptions import BadRequestException, ExternalServiceException
from narrata.core.security import CurrentUser, get_current_user
from narrata.schemas.enrichment import EnrichPersonRequest, EnrichPersonResponse
from narrata.services.people_data_labs import (
    PeopleDataLabsClient,
    convert_to_structured_data,
    get_pdl_client,
)

router = APIRouter()


@router.post("/person", summary="Enrich a person", response_model=ResponseModel[EnrichPersonResponse])
async def enrich_person(
    request: EnrichPersonRequest,
    user: CurrentUser = Depends(get_current_user),
    client: PeopleDataLabsClient = Depends(get_pdl_client),
):
    """
    Look a person up in People Data Labs and convert the match to work history

    With resume_data, the latest job and the LinkedIn username are derived
    from it; otherwise the explicit fields are used.
    """
    if request.resume_data is not None:
        result = await client.enrich_from_resume_data(
            request.name, request.resume_data, request.linkedin_url
        )
    else:
        params = request.model_dump(include={"name", "first_name", "last_name", "company"}, exclude_none=True)
        if request.linkedin_url:
            params["profile"] = [request.linkedin_url]
        result = await client.enrich_person(params)

    if not result.success:
        if not result.retryable:
            raise BadRequestException(result.error, data={"retryable": result.retryable})
        raise ExternalServiceException(result.error, data={"retryable": result.retryable})

    person = result.data or {}
    payload = EnrichPersonResponse(
        likelihood=result.likelihood,
        person=person,
        structured_data=convert_to_structured_data(person),
    )
    return success_response(data=payload.model_dump())
