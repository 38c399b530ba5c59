"""Simple validation utilities."""

import re
import unicodedata
from typing import Any, Dict, Iterable, List, Tuple
from urllib.parse import urlparse

from ..exceptions import InvalidArgumentError


METRIC_INTERVALS = ("hour", "day", "week", "month")
CONTENT_STATUSES = ("draft", "published", "archived")


def require_non_empty(value: Any, field_name: str) -> str:
    """Return a stripped string, raising InvalidArgumentError when it is empty."""
    if value is None or not str(value).strip():
        raise InvalidArgumentError(f"{field_name} must not be empty")
    return str(value).strip()


def require_choice(value: str, choices: Iterable[str], field_name: str) -> str:
    """Ensure value is one of the allowed choices."""
    choices = tuple(choices)
    if value not in choices:
        raise InvalidArgumentError(f"{field_name} must be one of {', '.join(choices)}; got {value!r}")
    return value


def validate_pagination(page: int, limit: int, max_limit: int = 100) -> Tuple[int, int]:
    """Validate page/limit query values."""
    if page < 1:
        raise InvalidArgumentError("page must be at least 1")
    if limit < 1 or limit > max_limit:
        raise InvalidArgumentError(f"limit must be between 1 and {max_limit}")
    return page, limit


def validate_webhook_url(url: str) -> str:
    """Webhook endpoints must be absolute http(s) URLs."""
    url = require_non_empty(url, "url")
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidArgumentError(f"Webhook URL must be an absolute http(s) URL, got {url!r}")
    return url


def slugify(text: str) -> str:
    """Turn a title into a URL slug."""
    normalized = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", normalized.lower()).strip("-")
    return slug or "untitled"


def parse_key_value_pairs(pairs: Iterable[str]) -> Dict[str, str]:
    """Parse CLI style key=value arguments."""
    result = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise InvalidArgumentError(f"Expected key=value, got {pair!r}")
        key, value = pair.split("=", 1)
        key = key.strip()
        if not key:
            raise InvalidArgumentError(f"Empty key in {pair!r}")
        result[key] = value
    return result


def validate_required_settings(api_key: str, base_url: str) -> List[str]:
    """Collect missing-setting messages without raising."""
    errors = []
    
    if not api_key:
        errors.append("TIATION_API_KEY is required")
    
    if not base_url:
        errors.append("TIATION_BASE_URL is required")
    
    return errors
