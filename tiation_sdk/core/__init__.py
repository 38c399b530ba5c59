"""Core SDK machinery."""

from .batch_processor import BatchProcessor
from .cache_manager import ResponseCacheManager
from .event_bus import EventBus

__all__ = ["BatchProcessor", "ResponseCacheManager", "EventBus"]
