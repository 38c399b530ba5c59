"""Analytics service: event tracking and metric queries."""

import logging
from datetime import date, datetime, time, timezone
from typing import Any, Dict, Iterable, List, Optional, Union

from ..exceptions import InvalidArgumentError
from ..models.analytics import AnalyticsEvent, MetricSeries
from ..models.content import Page
from ..utils.timestamps import format_timestamp
from ..utils.validators import METRIC_INTERVALS, require_choice, require_non_empty, validate_pagination
from .responses import decode_model, decode_page, invalid_response

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]


def _as_utc(value: DateLike) -> datetime:
    """Comparable form of a date or datetime; naive values are taken as UTC."""
    if not isinstance(value, datetime):
        if not isinstance(value, date):
            raise InvalidArgumentError(f"Expected a date or datetime, got {type(value).__name__}")
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class AnalyticsService:
    """Track events and read aggregated metrics."""
    
    def __init__(self, http):
        self.http = http
    
    def track(
        self,
        name: str,
        properties: Optional[Dict[str, Any]] = None,
        user_id: Optional[str] = None,
        timestamp: Optional[datetime] = None
    ) -> AnalyticsEvent:
        """Record a single analytics event."""
        event = AnalyticsEvent(
            name=require_non_empty(name, "name"),
            properties=dict(properties or {}),
            user_id=user_id,
            timestamp=timestamp,
        )
        logger.debug(f"Tracking event {event.name}")
        response = self.http.post("/analytics/events", json_body=event.to_dict())
        if isinstance(response, dict) and response:
            return decode_model(AnalyticsEvent.from_dict, {**event.to_dict(), **response}, required=())
        return event
    
    def track_many(self, events: Iterable[Union[AnalyticsEvent, Dict[str, Any]]]) -> int:
        """Record several events in one request. Returns the accepted count."""
        payload: List[Dict[str, Any]] = []
        for event in events:
            if isinstance(event, dict):
                event = AnalyticsEvent.from_dict(event)
            require_non_empty(event.name, "name")
            payload.append(event.to_dict())
        
        if not payload:
            return 0
        
        logger.debug(f"Tracking {len(payload)} events")
        response = self.http.post("/analytics/events/bulk", json_body={"events": payload})
        if isinstance(response, dict) and "accepted" in response:
            try:
                return int(response["accepted"])
            except (TypeError, ValueError):
                raise invalid_response(f"Invalid accepted count: {response['accepted']!r}")
        return len(payload)
    
    def get_metrics(
        self,
        metric: str,
        start: DateLike,
        end: DateLike,
        interval: str = "day"
    ) -> MetricSeries:
        """Fetch a metric time series between start and end (inclusive)."""
        metric = require_non_empty(metric, "metric")
        require_choice(interval, METRIC_INTERVALS, "interval")
        if _as_utc(start) > _as_utc(end):
            raise InvalidArgumentError("start must not be after end")
        
        response = self.http.get(
            f"/analytics/metrics/{metric}",
            params={
                "start": format_timestamp(start),
                "end": format_timestamp(end),
                "interval": interval,
            },
        )
        series = decode_model(MetricSeries.from_dict, response if response is not None else {}, required=())
        if not series.metric:
            series.metric = metric
        if "interval" not in (response or {}):
            series.interval = interval
        return series
    
    def list_events(self, name: Optional[str] = None, page: int = 1, limit: int = 50) -> Page:
        """List recorded events, optionally filtered by name."""
        validate_pagination(page, limit)
        response = self.http.get(
            "/analytics/events",
            params={"name": name, "page": page, "limit": limit},
        )
        return decode_page(AnalyticsEvent.from_dict, response, required=("name",))
