"""ISO-8601 timestamp helpers."""

from datetime import date, datetime, timezone
from typing import Optional, Union


def parse_timestamp(value: Optional[Union[str, datetime]]) -> Optional[datetime]:
    """Parse an ISO-8601 string (a trailing 'Z' is accepted) into a datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def format_timestamp(value: Optional[Union[datetime, date]]) -> Optional[str]:
    """Format a datetime as ISO-8601, using 'Z' for UTC."""
    if value is None:
        return None
    if not isinstance(value, datetime):
        return value.isoformat()
    if value.tzinfo is not None and value.utcoffset() == timezone.utc.utcoffset(None):
        return value.replace(tzinfo=None).isoformat() + "Z"
    return value.isoformat()
