"""
LinkedIn OAuth relay

Exchanges authorization codes for access tokens and fetches member data with
them. The client secret stays on the server.
"""
import asyncio
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import httpx
from loguru import logger

from narrata.core.config import settings
from narrata.core.exceptions import AppException, BadRequestException, ExternalServiceException

TOKEN_URL = "https://www.linkedin.com/oauth/v2/accessToken"
AUTHORIZE_URL = "https://www.linkedin.com/oauth/v2/authorization"
API_BASE = "https://api.linkedin.com/v2"


class LinkedInClient:
    """LinkedIn OAuth and member data client"""

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client_id = client_id if client_id is not None else settings.linkedin_client_id
        self.client_secret = client_secret if client_secret is not None else settings.linkedin_client_secret
        self.timeout = timeout or settings.linkedin_timeout
        self._transport = transport

    def is_configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    def build_authorize_url(
        self,
        redirect_uri: str,
        state: str,
        scope: Optional[str] = None,
    ) -> str:
        """Authorization URL the browser is sent to"""
        if not self.client_id:
            raise AppException("LinkedIn Client ID not configured", code=500)
        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": redirect_uri,
            "scope": scope or settings.linkedin_scopes,
            "state": state,
        }
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    async def exchange_token(self, code: Optional[str], redirect_uri: Optional[str]) -> Dict[str, Any]:
        """
        Exchange an authorization code for an access token

        Returns:
            {access_token, expires_in, scope}
        """
        if not code or not redirect_uri:
            raise BadRequestException("Missing code or redirect_uri")
        if not self.is_configured():
            raise AppException("LinkedIn OAuth not configured", code=500)

        form = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": redirect_uri,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
        }

        async with self._client() as client:
            try:
                response = await client.post(
                    TOKEN_URL,
                    data=form,
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                logger.error(
                    "LinkedIn token exchange failed: status={}, response={}",
                    exc.response.status_code,
                    exc.response.text[:500],
                )
                raise BadRequestException("Failed to exchange authorization code for access token")
            except httpx.HTTPError as exc:
                logger.error("LinkedIn token exchange error: {}", exc)
                raise AppException("Internal server error", code=500)

        token_data = response.json()
        logger.info("LinkedIn token exchanged, expires_in={}", token_data.get("expires_in"))
        return {
            "access_token": token_data.get("access_token"),
            "expires_in": token_data.get("expires_in"),
            "scope": token_data.get("scope"),
        }

    async def _get_elements(self, client: httpx.AsyncClient, path: str, headers: dict) -> List[Any]:
        """Fetch a list endpoint; any failure yields an empty list"""
        try:
            response = await client.get(f"{API_BASE}{path}", headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("LinkedIn {} fetch failed: {}", path, exc)
            return []
        if not response.is_success:
            logger.warning("LinkedIn {} returned {}", path, response.status_code)
            return []
        try:
            return response.json().get("elements") or []
        except ValueError:
            return []

    async def fetch_member_data(self, access_token: Optional[str]) -> Dict[str, Any]:
        """
        Fetch profile, positions, education and skills

        Tries the member data portability snapshot first; on 403 falls back to
        the basic profile plus per-section calls.
        """
        if not access_token:
            raise BadRequestException("Access token is required")

        headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        }

        async with self._client() as client:
            try:
                response = await client.get(f"{API_BASE}/memberSnapshot", headers=headers)
                if response.status_code == 403:
                    logger.info("memberSnapshot forbidden, falling back to /me")
                    response = await client.get(f"{API_BASE}/me", headers=headers)
            except httpx.HTTPError as exc:
                logger.error("LinkedIn profile fetch error: {}", exc)
                raise ExternalServiceException("LinkedIn profile fetch failed", data={"details": str(exc)})

            if not response.is_success:
                raise ExternalServiceException(
                    f"Profile fetch failed: {response.status_code} {response.reason_phrase}",
                    code=response.status_code,
                    data={"details": response.text[:2000]},
                )

            member_data = response.json()

            if member_data.get("profile") or member_data.get("positions") or member_data.get("experience"):
                result = {
                    "profile": member_data.get("profile") or member_data,
                    "positions": member_data.get("positions") or member_data.get("experience") or [],
                    "education": member_data.get("education") or [],
                    "skills": member_data.get("skills") or [],
                }
            else:
                positions, education, skills = await asyncio.gather(
                    self._get_elements(client, "/me/positions", headers),
                    self._get_elements(client, "/me/educations", headers),
                    self._get_elements(client, "/me/skills", headers),
                )
                result = {
                    "profile": member_data,
                    "positions": positions,
                    "education": education,
                    "skills": skills,
                }

        logger.info(
            "LinkedIn data fetched: positions={}, education={}, skills={}",
            len(result["positions"]),
            len(result["education"]),
            len(result["skills"]),
        )
        return result


def to_linkedin_profile_row(data: Dict[str, Any]) -> Dict[str, Any]:
    """Map fetched member data onto linkedin_profiles columns"""
    profile = data.get("profile") or {}
    linkedin_id = str(profile.get("id") or profile.get("sub") or "")
    vanity = profile.get("vanityName")
    first = profile.get("localizedFirstName") or ""
    headline = profile.get("headline")
    last = profile.get("localizedLastName") or ""

    positions = [
        {
            "title": p.get("title") or "",
            "company_name": p.get("companyName") or "",
            "start_date": p.get("startDate") or "",
            "end_date": p.get("endDate"),
            "description": p.get("summary") or "",
        }
        for p in data.get("positions") or [] if isinstance(p, dict)
    ]
    education = [
        {
            "school_name": e.get("schoolName") or "",
            "degree_name": e.get("degreeName") or "",
            "field_of_study": e.get("fieldOfStudy") or "",
            "start_date": e.get("startDate") or "",
            "end_date": e.get("endDate"),
        }
        for e in data.get("education") or [] if isinstance(e, dict)
    ]
    skills = [
        {
            "name": s.get("skillName") or s.get("name") or "",
            "endorsement_count": s.get("numEndorsements") or 0,
        }
        for s in data.get("skills") or [] if isinstance(s, dict)
    ]

    return {
        "linkedin_id": linkedin_id,
        "profile_url": f"https://www.linkedin.com/in/{vanity}" if vanity else "",
        "about": (headline if isinstance(headline, str) else None) or " ".join(x for x in (first, last) if x) or None,
        "experience": positions,
        "education": education,
        "skills": skills,
        "raw_data": data,
    }


def get_linkedin_client() -> LinkedInClient:
    """LinkedInClient dependency"""
    return LinkedInClient()
