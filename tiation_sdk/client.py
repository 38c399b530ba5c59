"""Top-level Tiation API client."""

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, Iterable, Optional, Union

import requests

from .config.settings import Settings
from .core.batch_processor import BatchProcessor
from .core.event_bus import EventBus
from .exceptions import InvalidArgumentError
from .models.batch import BatchOperation, BatchResult
from .services.analytics import AnalyticsService
from .services.automation import AutomationService
from .services.cms import CmsService
from .services.http_client import HttpClient
from .services.webhooks import WebhookService

logger = logging.getLogger(__name__)


class TiationClient:
    """Entry point for the Tiation API.
    
    Explicit arguments override values read from the environment
    (``TIATION_API_KEY``, ``TIATION_BASE_URL``, ``TIATION_TIMEOUT``, ...).
    
    Example::
    
        with TiationClient(api_key="sk_live_...") as client:
            client.analytics.track("signup", {"plan": "pro"})
            sub = client.subscribe("workflow.completed", handle_completion)
    """
    
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
        env_file: Optional[str] = None
    ):
        """Initialize the client and its service namespaces."""
        settings = settings or Settings.from_env(env_file)
        overrides = {
            key: value for key, value in
            (("api_key", api_key), ("base_url", base_url), ("timeout", timeout))
            if value is not None
        }
        if overrides:
            settings = replace(settings, **overrides)
        settings.validate()
        self.settings = settings
        
        self.http = HttpClient(settings, session=session)
        self.events = EventBus()
        self.batch_processor = BatchProcessor(self.http, batch_size=settings.batch_size)
        
        self.analytics = AnalyticsService(self.http)
        self.automation = AutomationService(self.http)
        self.cms = CmsService(self.http)
        self.webhooks = WebhookService(self.http, self.events)
        
        logger.debug(f"Tiation client ready for {settings.base_url}")
    
    def subscribe(self, event_type: str, callback: Callable[[Any], None]) -> str:
        """Subscribe to events dispatched through this client."""
        return self.events.subscribe(event_type, callback)
    
    def unsubscribe(self, subscription_id: str) -> bool:
        return self.events.unsubscribe(subscription_id)
    
    def batch(
        self,
        operations: Iterable[Union[BatchOperation, Dict[str, Any]]],
        progress_callback: Optional[Callable[[int, int], None]] = None
    ) -> BatchResult:
        """Run many API operations through the batch endpoint.
        
        Dict operations use the keys ``method``, ``path`` and optionally
        ``body``, ``params`` and ``id``.
        """
        normalized = []
        for operation in operations:
            if isinstance(operation, dict):
                missing = [key for key in ("method", "path") if not operation.get(key)]
                if missing:
                    raise InvalidArgumentError(f"Batch operation missing {', '.join(missing)}")
                kwargs = {
                    "method": operation["method"],
                    "path": operation["path"],
                    "body": operation.get("body"),
                    "params": operation.get("params"),
                }
                if operation.get("id"):
                    kwargs["operation_id"] = operation["id"]
                operation = BatchOperation(**kwargs)
            normalized.append(operation)
        
        logger.info(f"Running batch of {len(normalized)} operations")
        return self.batch_processor.process(normalized, progress_callback=progress_callback)
    
    def get_usage_statistics(self) -> Dict[str, Any]:
        """Combined request, batch and event statistics."""
        return {
            "http": self.http.get_usage_statistics(),
            "batch": self.batch_processor.get_processing_statistics(),
            "events": self.events.get_statistics(),
        }
    
    def clear_cache(self) -> int:
        return self.http.cache.clear_cache()
    
    def close(self) -> None:
        """Release the HTTP session and drop all subscriptions."""
        self.events.clear()
        self.http.close()
    
    def __enter__(self) -> "TiationClient":
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
