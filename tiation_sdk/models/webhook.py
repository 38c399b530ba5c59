"""Webhook endpoint and event models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..utils.timestamps import format_timestamp, parse_timestamp


@dataclass
class WebhookEndpoint:
    """A registered URL that receives event deliveries."""
    
    id: str
    url: str
    events: List[str] = field(default_factory=list)
    active: bool = True
    created_at: Optional[datetime] = None
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WebhookEndpoint":
        return cls(
            id=data["id"],
            url=data.get("url", ""),
            events=list(data.get("events") or []),
            active=bool(data.get("active", True)),
            created_at=parse_timestamp(data.get("created_at")),
        )
    
    def listens_to(self, event_type: str) -> bool:
        return "*" in self.events or event_type in self.events
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "url": self.url,
            "events": self.events,
            "active": self.active,
            "created_at": format_timestamp(self.created_at),
        }


@dataclass
class WebhookEvent:
    """An event delivered to a webhook endpoint."""
    
    id: str
    type: str
    data: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WebhookEvent":
        return cls(
            id=data["id"],
            type=data["type"],
            data=dict(data.get("data") or {}),
            created_at=parse_timestamp(data.get("created_at")),
        )
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "data": self.data,
            "created_at": format_timestamp(self.created_at),
        }
