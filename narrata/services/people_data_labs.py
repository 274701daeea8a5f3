"""
People Data Labs person enrichment

Looks a person up by name, company and LinkedIn handle and converts the match
into the structured resume shape used by the work history import.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx
from loguru import logger
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    retry_if_result,
    stop_after_attempt,
    wait_incrementing,
)

from narrata.core.config import settings
from narrata.utils.dates import normalize_date
from narrata.utils.linkedin import extract_linkedin_username

PDL_API_URL = "https://api.peopledatalabs.com/v5/person/enrich"
RETRY_DELAY = 1.0


@dataclass
class EnrichmentResult:
    success: bool
    data: Optional[Dict[str, Any]] = None
    likelihood: Optional[float] = None
    error: Optional[str] = None
    retryable: bool = False


def _is_network_error(exc: BaseException) -> bool:
    return isinstance(exc, httpx.TransportError) and not isinstance(exc, httpx.TimeoutException)


def _log_retry(state: RetryCallState) -> None:
    if state.outcome.failed:
        logger.warning("PDL network error, retry {}: {}", state.attempt_number, state.outcome.exception())
    else:
        logger.warning("PDL rate limited, retry {}", state.attempt_number)


def build_query_params(params: Dict[str, Any]) -> Dict[str, str]:
    """Map enrichment params onto PDL query parameters"""
    query: Dict[str, str] = {}
    for key in ("name", "first_name", "last_name", "company"):
        if params.get(key):
            query[key] = params[key]
    if params.get("linkedin"):
        query["lid"] = params["linkedin"]
    profile = params.get("profile")
    if profile:
        query["profile"] = profile[0] if isinstance(profile, list) else profile
    return query


class PeopleDataLabsClient:
    """PDL enrichment client with retry on rate limiting and network errors"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_delay: float = RETRY_DELAY,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.pdl_api_key
        self.timeout = timeout or settings.pdl_timeout
        self.max_retries = max_retries if max_retries is not None else settings.pdl_max_retries
        self.retry_delay = retry_delay
        self._transport = transport

    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def enrich_person(self, params: Dict[str, Any]) -> EnrichmentResult:
        """
        Enrich one person

        Args:
            params: name, first_name, last_name, company, linkedin, profile
        """
        if not self.is_configured():
            return EnrichmentResult(
                success=False,
                error="People Data Labs API is not configured. Please add PDL_API_KEY to your environment.",
                retryable=False,
            )

        query = build_query_params(params)
        if not query:
            return EnrichmentResult(
                success=False,
                error="No valid enrichment parameters provided",
                retryable=False,
            )

        try:
            return await self._request_with_retry(query)
        except Exception as exc:
            logger.error("PDL enrichment error: {}", exc)
            return EnrichmentResult(
                success=False,
                error=str(exc) or "Person enrichment failed",
                retryable=True,
            )

    def _retrying(self) -> AsyncRetrying:
        """Rate limiting and network errors are retried with a linear backoff; timeouts are not"""
        return AsyncRetrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=wait_incrementing(start=self.retry_delay, increment=self.retry_delay),
            retry=(
                retry_if_exception(_is_network_error)
                | retry_if_result(lambda response: response.status_code == 429)
            ),
            before_sleep=_log_retry,
            # Out of attempts: hand back the last 429, or raise the last network error
            retry_error_callback=lambda state: state.outcome.result(),
        )

    async def _request_with_retry(self, query: Dict[str, str]) -> EnrichmentResult:
        headers = {"X-Api-Key": self.api_key, "Accept": "application/json"}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await self._retrying()(client.get, PDL_API_URL, params=query, headers=headers)
            except httpx.TimeoutException:
                logger.warning("PDL request timed out")
                return EnrichmentResult(success=False, error="Request timed out", retryable=True)

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if not response.is_success:
            error = (body.get("error") or {}).get("message") if isinstance(body.get("error"), dict) else None
            return EnrichmentResult(
                success=False,
                error=error or f"HTTP {response.status_code}: {response.reason_phrase}",
                retryable=response.status_code >= 500 or response.status_code == 429,
            )

        if not body.get("data"):
            return EnrichmentResult(
                success=False,
                error="No person data found matching the provided criteria",
                retryable=False,
            )

        logger.info("PDL match found, likelihood={}", body.get("likelihood"))
        return EnrichmentResult(success=True, data=body["data"], likelihood=body.get("likelihood"))

    async def enrich_from_resume_data(
        self,
        full_name: Optional[str],
        resume_data: Optional[Dict[str, Any]],
        linkedin_url: Optional[str] = None,
    ) -> EnrichmentResult:
        """Enrich using the signed-in name, the latest job and a LinkedIn URL"""
        params: Dict[str, Any] = {}

        if full_name:
            params["name"] = full_name
            parts = full_name.split()
            if len(parts) >= 2:
                params["first_name"] = parts[0]
                params["last_name"] = " ".join(parts[1:])

        work_history = (resume_data or {}).get("workHistory") or []
        if work_history:
            latest = sorted(
                work_history,
                key=lambda job: (bool(job.get("current")), job.get("startDate") or ""),
                reverse=True,
            )[0]
            if latest.get("company"):
                params["company"] = latest["company"]

        if linkedin_url:
            username = extract_linkedin_username(linkedin_url)
            if username:
                params["linkedin"] = username
                params["profile"] = [f"linkedin.com/in/{username}"]

        return await self.enrich_person(params)


def _date(value: Optional[str]) -> str:
    return normalize_date(value) or ""


def convert_work_history(experiences: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    work_history = []
    for index, exp in enumerate(experiences):
        company_info = exp.get("company") or {}
        title_info = exp.get("title") or {}
        company = company_info.get("name") or ""
        title = title_info.get("name") or ""

        location_info = company_info.get("location") or {}
        location = ", ".join(
            part for part in (
                location_info.get("locality"),
                location_info.get("region"),
                location_info.get("country"),
            ) if part
        )

        description_parts = []
        if exp.get("summary"):
            description_parts.append(exp["summary"])
        if title_info.get("role"):
            description_parts.append(f"Role: {title_info['role']}")
        if title_info.get("sub_role"):
            description_parts.append(f"Specialty: {title_info['sub_role']}")
        if company_info.get("industry"):
            description_parts.append(f"Industry: {company_info['industry']}")
        if company_info.get("size"):
            description_parts.append(f"Company Size: {company_info['size']}")
        description = " | ".join(description_parts) or f"{title} at {company}"

        achievements = []
        if title_info.get("levels"):
            achievements.append(f"Level: {', '.join(title_info['levels'])}")
        if exp.get("is_primary"):
            achievements.append("Current/Primary Role")

        work_history.append({
            "id": f"pdl_work_{index}",
            "company": company,
            "title": title,
            "startDate": _date(exp.get("start_date")),
            "endDate": _date(exp.get("end_date")) if exp.get("end_date") else None,
            "description": description,
            "achievements": achievements,
            "location": location,
            "current": not exp.get("end_date") and exp.get("is_primary") is True,
        })
    return work_history


def convert_education(educations: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    result = []
    for index, edu in enumerate(educations):
        school = edu.get("school") or {}
        result.append({
            "id": f"pdl_edu_{index}",
            "institution": school.get("name") or "",
            "degree": (edu.get("degrees") or [""])[0],
            "fieldOfStudy": (edu.get("majors") or edu.get("minors") or [""])[0],
            "startDate": _date(edu.get("start_date")),
            "endDate": _date(edu.get("end_date")) if edu.get("end_date") else None,
            "gpa": edu.get("gpa"),
            "location": (school.get("location") or {}).get("name") or "",
        })
    return result


def convert_certifications(certifications: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [
        {
            "id": f"pdl_cert_{index}",
            "name": cert.get("name") or "",
            "issuer": cert.get("organization") or "",
            "issueDate": _date(cert.get("start_date")),
            "expiryDate": _date(cert.get("end_date")) if cert.get("end_date") else None,
        }
        for index, cert in enumerate(certifications)
    ]


def convert_to_structured_data(person: Dict[str, Any]) -> Dict[str, Any]:
    """PDL person record -> structured resume data"""
    return {
        "workHistory": convert_work_history(person.get("experience") or []),
        "education": convert_education(person.get("education") or []),
        "skills": person.get("skills") or [],
        "achievements": [],
        "contactInfo": {
            "email": person.get("email"),
            "phone": (person.get("phone_numbers") or [None])[0],
            "location": person.get("location_name"),
            "linkedin": person.get("linkedin_url"),
            "website": (person.get("websites") or [None])[0],
        },
        "summary": person.get("summary") or person.get("headline"),
        "certifications": convert_certifications(person.get("certifications") or []),
        "projects": [],
    }


def get_pdl_client() -> PeopleDataLabsClient:
    """PeopleDataLabsClient dependency"""
    return PeopleDataLabsClient()
