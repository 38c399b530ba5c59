"""In-process publish/subscribe for SDK events."""

import logging
import threading
import uuid
from collections import OrderedDict
from typing import Any, Callable, Dict, Optional, Tuple

from ..exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

WILDCARD = "*"


class EventBus:
    """Routes published events to subscribed callbacks.
    
    Callbacks run synchronously in the publishing thread, in subscription
    order. A callback that raises is logged and skipped.
    """
    
    def __init__(self):
        self._subscriptions: "OrderedDict[str, Tuple[str, Callable[[Any], None]]]" = OrderedDict()
        self._lock = threading.Lock()
        self.published_events = 0
        self.callback_errors = 0
    
    def subscribe(self, event_type: str, callback: Callable[[Any], None]) -> str:
        """Register a callback for an event type ('*' for all events)."""
        if not event_type or not str(event_type).strip():
            raise InvalidArgumentError("event_type must not be empty")
        if not callable(callback):
            raise InvalidArgumentError("callback must be callable")
        
        subscription_id = str(uuid.uuid4())
        with self._lock:
            self._subscriptions[subscription_id] = (event_type, callback)
        
        logger.debug(f"Subscribed {subscription_id} to {event_type}")
        return subscription_id
    
    def unsubscribe(self, subscription_id: str) -> bool:
        """Remove a subscription. Returns False when it does not exist."""
        with self._lock:
            removed = self._subscriptions.pop(subscription_id, None)
        
        if removed is None:
            return False
        logger.debug(f"Unsubscribed {subscription_id} from {removed[0]}")
        return True
    
    def publish(self, event_type: str, payload: Any) -> int:
        """Deliver payload to matching subscribers and return how many ran."""
        with self._lock:
            targets = [
                callback for subscribed_type, callback in self._subscriptions.values()
                if subscribed_type == event_type or subscribed_type == WILDCARD
            ]
            self.published_events += 1
        
        delivered = 0
        for callback in targets:
            try:
                callback(payload)
                delivered += 1
            except Exception as e:
                with self._lock:
                    self.callback_errors += 1
                logger.error(f"Subscriber for {event_type} failed: {e}", exc_info=True)
        
        return delivered
    
    def subscription_count(self, event_type: Optional[str] = None) -> int:
        with self._lock:
            if event_type is None:
                return len(self._subscriptions)
            return sum(1 for subscribed_type, _ in self._subscriptions.values() if subscribed_type == event_type)
    
    def clear(self) -> None:
        with self._lock:
            self._subscriptions.clear()
    
    def get_statistics(self) -> Dict[str, int]:
        subscriptions = self.subscription_count()
        with self._lock:
            return {
                "subscriptions": subscriptions,
                "published_events": self.published_events,
                "callback_errors": self.callback_errors,
            }
