"""Webhook service: endpoint registration and incoming event dispatch."""

import json
import logging
from typing import Any, Dict, List, Union

from ..core.event_bus import EventBus
from ..exceptions import InvalidArgumentError, WebhookPayloadError
from ..models.webhook import WebhookEndpoint, WebhookEvent
from ..utils.validators import require_non_empty, validate_webhook_url
from .responses import decode_model, decode_page

logger = logging.getLogger(__name__)


class WebhookService:
    """Manage webhook endpoints and route received events to subscribers.
    
    Payloads are trusted as given: delivery signatures are not checked here.
    """
    
    def __init__(self, http, event_bus: EventBus):
        self.http = http
        self.event_bus = event_bus
    
    def list_endpoints(self) -> List[WebhookEndpoint]:
        response = self.http.get("/webhooks")
        if isinstance(response, list):
            response = {"data": response}
        return decode_page(WebhookEndpoint.from_dict, response).items
    
    def create_endpoint(self, url: str, events: List[str]) -> WebhookEndpoint:
        url = validate_webhook_url(url)
        events = [require_non_empty(event, "event") for event in events or []]
        if not events:
            raise InvalidArgumentError("At least one event type is required")
        logger.info(f"Registering webhook endpoint {url} for {', '.join(events)}")
        response = self.http.post("/webhooks", json_body={"url": url, "events": events})
        return decode_model(WebhookEndpoint.from_dict, response)
    
    def delete_endpoint(self, endpoint_id: str) -> None:
        endpoint_id = require_non_empty(endpoint_id, "endpoint_id")
        self.http.delete(f"/webhooks/{endpoint_id}")
    
    def parse_event(self, payload: Union[str, bytes, Dict[str, Any]]) -> WebhookEvent:
        """Decode a webhook request body into a WebhookEvent."""
        if isinstance(payload, bytes):
            try:
                payload = payload.decode("utf-8")
            except UnicodeDecodeError as e:
                raise WebhookPayloadError(f"Webhook payload is not valid UTF-8: {e}")
        if isinstance(payload, str):
            try:
                payload = json.loads(payload)
            except json.JSONDecodeError as e:
                raise WebhookPayloadError(f"Webhook payload is not valid JSON: {e}")
        if not isinstance(payload, dict):
            raise WebhookPayloadError("Webhook payload must be a JSON object")
        
        missing = [key for key in ("id", "type") if not payload.get(key)]
        if missing:
            raise WebhookPayloadError(f"Webhook payload missing fields: {', '.join(missing)}")
        
        try:
            return WebhookEvent.from_dict(payload)
        except (TypeError, ValueError) as e:
            raise WebhookPayloadError(f"Invalid webhook payload: {e}")
    
    def dispatch(self, payload: Union[str, bytes, Dict[str, Any]]) -> int:
        """Parse a payload and publish it to subscribers of its event type."""
        event = self.parse_event(payload)
        delivered = self.event_bus.publish(event.type, event)
        logger.debug(f"Dispatched webhook event {event.id} ({event.type}) to {delivered} subscribers")
        return delivered
