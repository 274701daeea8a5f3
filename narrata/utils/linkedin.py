"""
LinkedIn URL and identity helpers
"""
import re
from typing import Any, Optional

from loguru import logger

_PROFILE_URL = re.compile(r"(?:https?://)?(?:www\.)?linkedin\.com/in/([a-zA-Z0-9_-]+)/?")
_BARE_USERNAME = re.compile(r"^[a-zA-Z0-9_-]+$")


def extract_linkedin_username(url: Optional[str]) -> Optional[str]:
    """
    LinkedIn username from a profile URL or a bare username

    Accepts https://www.linkedin.com/in/name, linkedin.com/in/name/ and
    www.linkedin.com/in/name. Returns None when nothing usable is found.
    """
    if not url or not isinstance(url, str):
        return None

    clean_url = url.strip().lower()
    match = _PROFILE_URL.search(clean_url)
    if match:
        return match.group(1)

    if _BARE_USERNAME.match(clean_url) and "." not in clean_url:
        return clean_url
    return None


def build_linkedin_url(username: str) -> str:
    """Canonical profile URL for a username"""
    if not username or not username.strip():
        raise ValueError("LinkedIn username is required")
    return f"https://www.linkedin.com/in/{username.strip().lower()}"


def is_valid_linkedin_url(url: Optional[str]) -> bool:
    return extract_linkedin_username(url) is not None


def normalize_linkedin_url(url: Optional[str]) -> Optional[str]:
    """Canonical form of any accepted URL, or None"""
    username = extract_linkedin_username(url)
    if not username:
        return None
    return build_linkedin_url(username)


def extract_linkedin_id_from_identity(identity_data: Any) -> Optional[str]:
    """LinkedIn member id from OAuth identity data (`id`, then `sub`)"""
    if not identity_data or not isinstance(identity_data, dict):
        return None
    linkedin_id = identity_data.get("id") or identity_data.get("sub")
    if linkedin_id is None:
        logger.debug("Identity data carries neither id nor sub")
    return linkedin_id or None
