"""
Feedback and beta signup relays

Forwards submissions to a Google Apps Script web app or a Google Sheet and
keeps them in the local fallback store whenever the remote channel is
unconfigured or fails.
"""
import asyncio
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from narrata.core.config import settings
from narrata.core.local_store import (
    BETA_SIGNUP_COLLECTION,
    FEEDBACK_COLLECTION,
    LocalStore,
    local_store,
)
from narrata.schemas.feedback import BetaSignupData, FeedbackData, RelayResult

SHEETS_API_URL = "https://sheets.googleapis.com/v4/spreadsheets"

SENTIMENT_LABELS = {
    "positive": "Positive",
    "neutral": "Neutral",
    "negative": "Negative",
}

NO_EMAIL = "No email provided"


def feedback_form_fields(feedback: FeedbackData) -> Dict[str, str]:
    """Form fields the Apps Script expects for a feedback row"""
    return {
        "timestamp": feedback.timestamp,
        "pageUrl": feedback.page_url,
        "message": feedback.message,
        "email": feedback.email or NO_EMAIL,
        "clickLocation": json.dumps(feedback.click_location.model_dump()),
        "userAgent": feedback.user_agent,
        "category": feedback.category,
        "sentiment": SENTIMENT_LABELS.get(feedback.sentiment, feedback.sentiment),
    }


def beta_signup_form_fields(signup: BetaSignupData) -> Dict[str, str]:
    """Form fields the Apps Script expects for a beta signup row"""
    return {
        "timestamp": signup.timestamp or datetime.now(timezone.utc).isoformat(),
        "email": signup.email,
        "source": signup.source,
        "pageUrl": signup.page_url or "",
        "userAgent": signup.user_agent or "",
        "submissionType": "beta-signup",
    }


def feedback_sheet_row(feedback: FeedbackData) -> List[str]:
    """One sheet row: timestamp, page, category, sentiment, message, email, click, agent"""
    return [
        feedback.timestamp,
        feedback.page_url,
        feedback.category,
        feedback.sentiment,
        feedback.message,
        feedback.email or NO_EMAIL,
        f"{feedback.click_location.x:g}, {feedback.click_location.y:g}",
        feedback.user_agent,
    ]


class BaseRelay:
    """Shared fallback handling"""

    channel = "fallback"

    def __init__(
        self,
        store: Optional[LocalStore] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.store = store or local_store
        self.timeout = timeout or settings.relay_timeout
        self._transport = transport

    def is_configured(self) -> bool:
        raise NotImplementedError

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
            follow_redirects=True,
        )

    async def _in_thread(self, func, *args):
        # File I/O and the store lock stay off the event loop
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    async def _fallback(self, collection: str, payload: Dict[str, Any]) -> RelayResult:
        await self._in_thread(self.store.append, collection, payload)
        return RelayResult(submitted=True, channel="fallback")

    async def get_stored_feedback(self) -> List[Any]:
        return await self._in_thread(self.store.list, FEEDBACK_COLLECTION)

    async def clear_stored_feedback(self) -> None:
        await self._in_thread(self.store.clear, FEEDBACK_COLLECTION)

    async def get_stored_beta_signups(self) -> List[Any]:
        return await self._in_thread(self.store.list, BETA_SIGNUP_COLLECTION)

    async def clear_stored_beta_signups(self) -> None:
        await self._in_thread(self.store.clear, BETA_SIGNUP_COLLECTION)


class AppsScriptRelay(BaseRelay):
    """Posts form-encoded submissions to a Google Apps Script web app"""

    channel = "apps_script"

    def __init__(self, script_url: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.script_url = script_url if script_url is not None else settings.google_apps_script_url

    def is_configured(self) -> bool:
        return bool(self.script_url)

    async def _post(self, fields: Dict[str, str]) -> bool:
        """True when the script accepted the submission"""
        async with self._client() as client:
            try:
                response = await client.post(self.script_url, data=fields)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                logger.error(
                    "Apps Script submission failed: status={}, response={}",
                    exc.response.status_code,
                    exc.response.text[:500],
                )
                return False
            except httpx.HTTPError as exc:
                logger.error("Apps Script submission error: {}", exc)
                return False

        try:
            body = response.json()
        except ValueError:
            return True
        if isinstance(body, dict) and body.get("success") is False:
            logger.error("Apps Script rejected submission: {}", body.get("message") or body.get("error"))
            return False
        return True

    async def submit_feedback(self, feedback: FeedbackData) -> RelayResult:
        payload = feedback.model_dump()
        if not self.is_configured():
            logger.warning("Google Apps Script URL not configured. Using fallback storage.")
            return await self._fallback(FEEDBACK_COLLECTION, payload)

        if await self._post(feedback_form_fields(feedback)):
            logger.info("Feedback submitted via Apps Script ({})", feedback.category)
            return RelayResult(submitted=True, channel=self.channel)
        return await self._fallback(FEEDBACK_COLLECTION, payload)

    async def submit_beta_signup(self, signup: BetaSignupData) -> RelayResult:
        payload = signup.model_dump()
        if not self.is_configured():
            logger.warning("Google Apps Script URL not configured. Using fallback storage.")
            return await self._fallback(BETA_SIGNUP_COLLECTION, payload)

        if await self._post(beta_signup_form_fields(signup)):
            logger.info("Beta signup submitted via Apps Script (source={})", signup.source)
            return RelayResult(submitted=True, channel=self.channel)
        return await self._fallback(BETA_SIGNUP_COLLECTION, payload)


class GoogleSheetsRelay(BaseRelay):
    """Appends feedback rows through the Google Sheets values API"""

    channel = "sheets"

    def __init__(
        self,
        spreadsheet_id: Optional[str] = None,
        sheet_range: Optional[str] = None,
        api_key: Optional[str] = None,
        **kwargs
    ):
        super().__init__(**kwargs)
        self.spreadsheet_id = spreadsheet_id if spreadsheet_id is not None else settings.google_sheets_id
        self.sheet_range = sheet_range or settings.google_sheets_range
        self.api_key = api_key if api_key is not None else settings.google_sheets_api_key

    def is_configured(self) -> bool:
        return bool(self.spreadsheet_id and self.api_key)

    def append_url(self) -> str:
        return f"{SHEETS_API_URL}/{self.spreadsheet_id}/values/{self.sheet_range}:append"

    async def submit_feedback(self, feedback: FeedbackData) -> RelayResult:
        payload = feedback.model_dump()
        if not self.is_configured():
            logger.warning("Google Sheets not configured. Using fallback storage.")
            return await self._fallback(FEEDBACK_COLLECTION, payload)

        async with self._client() as client:
            try:
                response = await client.post(
                    self.append_url(),
                    params={"valueInputOption": "USER_ENTERED", "key": self.api_key},
                    json={"values": [feedback_sheet_row(feedback)]},
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                logger.error(
                    "Google Sheets append failed: status={}, response={}",
                    exc.response.status_code,
                    exc.response.text[:500],
                )
                return await self._fallback(FEEDBACK_COLLECTION, payload)
            except httpx.HTTPError as exc:
                logger.error("Google Sheets append error: {}", exc)
                return await self._fallback(FEEDBACK_COLLECTION, payload)

        logger.info("Feedback appended to Google Sheets ({})", feedback.category)
        return RelayResult(submitted=True, channel=self.channel)

    async def submit_beta_signup(self, signup: BetaSignupData) -> RelayResult:
        """Sheets only carries feedback rows; signups go to the fallback store"""
        return await self._fallback(BETA_SIGNUP_COLLECTION, signup.model_dump())


def get_feedback_relay() -> BaseRelay:
    """Relay selected by FEEDBACK_CHANNEL"""
    if settings.feedback_channel == "sheets":
        return GoogleSheetsRelay()
    return AppsScriptRelay()


def get_beta_signup_relay() -> AppsScriptRelay:
    return AppsScriptRelay()
