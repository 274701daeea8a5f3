"""
Date helpers

Work history dates are ISO strings (YYYY-MM-DD); partial dates are padded.
"""
import re
from typing import Any, Optional

CURRENT_MARKERS = {"present", "current", "now"}

_YEAR = re.compile(r"^\d{4}$")
_YEAR_MONTH = re.compile(r"^\d{4}-\d{2}$")
_FULL = re.compile(r"^\d{4}-\d{2}-\d{2}")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def normalize_date(value: Any) -> Optional[str]:
    """
    Normalize a partial date

    "2020" -> "2020-01-01", "2020-05" -> "2020-05-01", "2020-05-17T..." ->
    "2020-05-17". A bare year may also arrive as a number. Other strings are
    returned unchanged; other types give None.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(int(value))
    if not isinstance(value, str) or not value.strip():
        return None
    value = value.strip()
    if _YEAR.match(value):
        return f"{value}-01-01"
    if _YEAR_MONTH.match(value):
        return f"{value}-01"
    if _FULL.match(value):
        return value[:10]
    return value


def is_iso_date(value: Optional[str]) -> bool:
    return isinstance(value, str) and bool(_ISO_DATE.match(value))


def is_current_marker(value: Any) -> bool:
    """True for "Present", "Current" and similar end-date markers"""
    return isinstance(value, str) and value.strip().lower() in CURRENT_MARKERS
