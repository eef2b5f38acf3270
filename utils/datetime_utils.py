# utils/datetime_utils.py
from datetime import datetime, timezone
from typing import Optional

def utc_now() -> datetime:
    """
    Get current UTC time with timezone info.

    Returns:
        datetime: Current time in UTC with timezone
    """
    return datetime.now(timezone.utc)

def ensure_tz_aware(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure a datetime is timezone-aware by adding UTC if needed.

    Args:
        dt: Datetime to check

    Returns:
        Timezone-aware datetime or None if input was None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt

def format_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Format a datetime as ISO 8601 string.

    Args:
        dt: Datetime to format

    Returns:
        str: Formatted string or None if input was None
    """
    if dt is None:
        return None

    return ensure_tz_aware(dt).isoformat()

def iso_timestamp() -> str:
    """Current UTC time as an ISO 8601 string, used in error bodies."""
    return format_iso(utc_now())
