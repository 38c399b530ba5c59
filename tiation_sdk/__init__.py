"""Tiation SDK

Python client for the Tiation platform API: analytics, automation
workflows, CMS content and webhooks.
"""

__version__ = "1.0.0"
__author__ = "Tiation Team"

from .client import TiationClient
from .config.settings import Settings
from .exceptions import (
    ApiError,
    AuthenticationError,
    ConfigurationError,
    InvalidArgumentError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TiationError,
    TransportError,
    ValidationError,
    WebhookPayloadError,
)

__all__ = [
    "TiationClient",
    "Settings",
    "TiationError",
    "ConfigurationError",
    "InvalidArgumentError",
    "ApiError",
    "AuthenticationError",
    "NotFoundError",
    "ValidationError",
    "RateLimitError",
    "ServerError",
    "TransportError",
    "WebhookPayloadError",
]
