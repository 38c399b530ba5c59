"""Analytics event and metric models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..utils.timestamps import format_timestamp, parse_timestamp


@dataclass
class AnalyticsEvent:
    """A single tracked analytics event."""
    
    name: str
    properties: Dict[str, Any] = field(default_factory=dict)
    user_id: Optional[str] = None
    timestamp: Optional[datetime] = None
    event_id: Optional[str] = None
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalyticsEvent":
        return cls(
            name=data.get("name", ""),
            properties=dict(data.get("properties") or {}),
            user_id=data.get("user_id"),
            timestamp=parse_timestamp(data.get("timestamp")),
            event_id=data.get("id") or data.get("event_id"),
        )
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to the request body shape; unset fields are omitted."""
        payload = {"name": self.name, "properties": self.properties}
        if self.user_id is not None:
            payload["user_id"] = self.user_id
        if self.timestamp is not None:
            payload["timestamp"] = format_timestamp(self.timestamp)
        if self.event_id is not None:
            payload["id"] = self.event_id
        return payload


@dataclass
class MetricPoint:
    """One bucket of a metric time series."""
    
    timestamp: datetime
    value: float
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MetricPoint":
        return cls(timestamp=parse_timestamp(data["timestamp"]), value=float(data.get("value", 0)))
    
    def to_dict(self) -> Dict[str, Any]:
        return {"timestamp": format_timestamp(self.timestamp), "value": self.value}


@dataclass
class MetricSeries:
    """A metric aggregated over time buckets."""
    
    metric: str
    interval: str = "day"
    points: List[MetricPoint] = field(default_factory=list)
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MetricSeries":
        points = [MetricPoint.from_dict(point) for point in data.get("points") or []]
        points.sort(key=lambda point: point.timestamp)
        return cls(metric=data.get("metric", ""), interval=data.get("interval", "day"), points=points)
    
    def total(self) -> float:
        return sum(point.value for point in self.points)
    
    def average(self) -> float:
        """Mean value per bucket (0 for an empty series)."""
        if not self.points:
            return 0.0
        return self.total() / len(self.points)
    
    def peak(self) -> Optional[MetricPoint]:
        """Bucket with the highest value; earliest wins on ties."""
        if not self.points:
            return None
        return max(self.points, key=lambda point: point.value)
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "metric": self.metric,
            "interval": self.interval,
            "points": [point.to_dict() for point in self.points],
        }
