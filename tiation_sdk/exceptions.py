"""Exception hierarchy raised by the Tiation SDK."""

from typing import Any, Dict, Mapping, Optional


class TiationError(Exception):
    """Base class for all SDK errors."""


class ConfigurationError(TiationError, ValueError):
    """Raised when client settings are missing or invalid."""


class InvalidArgumentError(TiationError, ValueError):
    """Raised when a method is called with an invalid argument."""


class WebhookPayloadError(TiationError):
    """Raised when a webhook payload cannot be decoded."""


class TransportError(TiationError):
    """Raised when the API cannot be reached (connection failure, timeout)."""
    
    def __init__(self, message: str, original: Optional[Exception] = None):
        super().__init__(message)
        self.original = original


class ApiError(TiationError):
    """Raised when the API answers with an error status."""
    
    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
    
    def __str__(self) -> str:
        prefix = f"[{self.status_code}]" if self.status_code is not None else ""
        if self.code:
            prefix = f"{prefix}[{self.code}]"
        return f"{prefix} {self.message}".strip()


class AuthenticationError(ApiError):
    """Invalid or missing API key (401/403)."""


class NotFoundError(ApiError):
    """Requested resource does not exist (404)."""


class ValidationError(ApiError):
    """Request was rejected as malformed (400/422)."""


class RateLimitError(ApiError):
    """Too many requests (429)."""
    
    def __init__(self, message: str, retry_after: Optional[float] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(ApiError):
    """API failed internally (5xx)."""


def _parse_retry_after(headers: Mapping[str, str], payload: Dict[str, Any]) -> Optional[float]:
    raw = None
    for key, value in (headers or {}).items():
        if key.lower() == "retry-after":
            raw = value
            break
    if raw is None:
        raw = payload.get("retry_after")
    if raw is None:
        return None
    try:
        return max(0.0, float(raw))
    except (TypeError, ValueError):
        # HTTP-date form is not supported
        return None


def error_from_response(
    status_code: int,
    payload: Any = None,
    headers: Optional[Mapping[str, str]] = None,
    reason: str = ""
) -> ApiError:
    """Build the matching ApiError subclass for an error response."""
    body = payload if isinstance(payload, dict) else {}
    error_body = body.get("error") if isinstance(body.get("error"), dict) else body
    
    message = error_body.get("message") or reason or f"HTTP {status_code}"
    code = error_body.get("code")
    details = error_body.get("details") or {}
    kwargs = {"code": code, "status_code": status_code, "details": details}
    
    if status_code == 429:
        retry_source = error_body if "retry_after" in error_body else body
        return RateLimitError(message, retry_after=_parse_retry_after(headers or {}, retry_source), **kwargs)
    if status_code in (401, 403):
        return AuthenticationError(message, **kwargs)
    if status_code == 404:
        return NotFoundError(message, **kwargs)
    if status_code in (400, 422):
        return ValidationError(message, **kwargs)
    if status_code >= 500:
        return ServerError(message, **kwargs)
    return ApiError(message, **kwargs)
