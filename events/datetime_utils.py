# events/datetime_utils.py
"""
Datetime helpers for exports and certificates.

Stored timestamps are ISO 8601 strings (browser-tool records end in "Z").
"""
from datetime import date, datetime
from typing import Optional

from django.utils import timezone


def parse_iso(iso_string: str) -> Optional[datetime]:
    """
    Parse ISO 8601 datetime string.

    Returns None if parsing fails.
    """
    if not iso_string:
        return None
    try:
        return datetime.fromisoformat(iso_string.replace('Z', '+00:00'))
    except (ValueError, AttributeError):
        return None


def local_date_string(iso_string: str) -> str:
    """
    Calendar date (YYYY-MM-DD) of a stored timestamp in the configured
    time zone. Unparsable input is returned unchanged.
    """
    dt = parse_iso(iso_string)
    if dt is None:
        return iso_string or ""
    if timezone.is_aware(dt):
        dt = timezone.localtime(dt)
    return dt.date().isoformat()


def format_for_display(value: Optional[date], format_str: str = "%b %d, %Y") -> str:
    """
    Human-readable date, e.g. "Jan 01, 2026".
    """
    if value is None:
        return ""
    return value.strftime(format_str)
