"""API service namespaces and HTTP transport."""

from .http_client import HttpClient
from .analytics import AnalyticsService
from .automation import AutomationService
from .cms import CmsService
from .webhooks import WebhookService

__all__ = ["HttpClient", "AnalyticsService", "AutomationService", "CmsService", "WebhookService"]
