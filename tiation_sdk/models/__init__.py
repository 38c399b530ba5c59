"""Data models and structures."""

from .analytics import AnalyticsEvent, MetricPoint, MetricSeries
from .batch import BatchOperation, BatchItemResult, BatchResult
from .content import ContentItem, Page
from .webhook import WebhookEndpoint, WebhookEvent
from .workflow import Workflow, WorkflowRun

__all__ = [
    "AnalyticsEvent",
    "MetricPoint",
    "MetricSeries",
    "BatchOperation",
    "BatchItemResult",
    "BatchResult",
    "ContentItem",
    "Page",
    "WebhookEndpoint",
    "WebhookEvent",
    "Workflow",
    "WorkflowRun",
]
