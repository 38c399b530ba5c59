"""CMS service: content items."""

import logging
from typing import Any, Dict, Optional

from ..exceptions import InvalidArgumentError
from ..models.content import ContentItem, Page
from ..utils.validators import CONTENT_STATUSES, require_choice, require_non_empty, slugify, validate_pagination
from .responses import decode_model, decode_page

logger = logging.getLogger(__name__)

UPDATABLE_CONTENT_FIELDS = ("title", "body", "status", "slug", "metadata")


class CmsService:
    """Create, read, update and publish CMS content."""
    
    def __init__(self, http):
        self.http = http
    
    def list_content(
        self,
        content_type: Optional[str] = None,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = 50
    ) -> Page:
        validate_pagination(page, limit)
        if status is not None:
            require_choice(status, CONTENT_STATUSES, "status")
        response = self.http.get(
            "/cms/content",
            params={"type": content_type, "status": status, "page": page, "limit": limit},
        )
        return decode_page(ContentItem.from_dict, response)
    
    def get_content(self, content_id: str) -> ContentItem:
        content_id = require_non_empty(content_id, "content_id")
        return decode_model(ContentItem.from_dict, self.http.get(f"/cms/content/{content_id}"))
    
    def create_content(
        self,
        content_type: str,
        title: str,
        body: str = "",
        status: str = "draft",
        slug: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> ContentItem:
        """Create a content item; the slug defaults to the slugified title."""
        content_type = require_non_empty(content_type, "content_type")
        title = require_non_empty(title, "title")
        require_choice(status, CONTENT_STATUSES, "status")
        
        payload = {
            "content_type": content_type,
            "title": title,
            "body": body,
            "status": status,
            "slug": slug or slugify(title),
            "metadata": dict(metadata or {}),
        }
        logger.debug(f"Creating {content_type} content {payload['slug']}")
        return decode_model(ContentItem.from_dict, self.http.post("/cms/content", json_body=payload))
    
    def update_content(self, content_id: str, **fields) -> ContentItem:
        content_id = require_non_empty(content_id, "content_id")
        unknown = set(fields) - set(UPDATABLE_CONTENT_FIELDS)
        if unknown:
            raise InvalidArgumentError(f"Cannot update content fields: {', '.join(sorted(unknown))}")
        if not fields:
            raise InvalidArgumentError("No fields to update")
        if "status" in fields:
            require_choice(fields["status"], CONTENT_STATUSES, "status")
        response = self.http.patch(f"/cms/content/{content_id}", json_body=fields)
        return decode_model(ContentItem.from_dict, response)
    
    def publish_content(self, content_id: str) -> ContentItem:
        return self.update_content(content_id, status="published")
    
    def delete_content(self, content_id: str) -> None:
        content_id = require_non_empty(content_id, "content_id")
        self.http.delete(f"/cms/content/{content_id}")
