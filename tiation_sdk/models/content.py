"""CMS content models and pagination."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from ..utils.timestamps import format_timestamp, parse_timestamp

T = TypeVar("T")


@dataclass
class ContentItem:
    """A piece of CMS content."""
    
    id: str
    content_type: str
    title: str
    body: str = ""
    status: str = "draft"
    slug: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContentItem":
        return cls(
            id=data["id"],
            content_type=data.get("content_type") or data.get("type", ""),
            title=data.get("title", ""),
            body=data.get("body") or "",
            status=data.get("status", "draft"),
            slug=data.get("slug"),
            metadata=dict(data.get("metadata") or {}),
            created_at=parse_timestamp(data.get("created_at")),
            updated_at=parse_timestamp(data.get("updated_at")),
        )
    
    def is_published(self) -> bool:
        return self.status == "published"
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "content_type": self.content_type,
            "title": self.title,
            "body": self.body,
            "status": self.status,
            "slug": self.slug,
            "metadata": self.metadata,
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
        }


@dataclass
class Page(Generic[T]):
    """One page of a paginated list response."""
    
    items: List[T] = field(default_factory=list)
    page: int = 1
    limit: int = 50
    total: int = 0
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any], item_factory: Callable[[Dict[str, Any]], T]) -> "Page[T]":
        items = [item_factory(item) for item in data.get("data") or data.get("items") or []]
        return cls(
            items=items,
            page=int(data.get("page", 1)),
            limit=int(data.get("limit", len(items) or 50)),
            total=int(data.get("total", len(items))),
        )
    
    def has_more(self) -> bool:
        return self.page * self.limit < self.total
    
    def __iter__(self):
        return iter(self.items)
    
    def __len__(self) -> int:
        return len(self.items)
