"""Batch operation models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
import uuid

from ..exceptions import ApiError, InvalidArgumentError

BATCH_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


@dataclass
class BatchOperation:
    """A single API call to run as part of a batch."""
    
    method: str
    path: str
    body: Optional[Dict[str, Any]] = None
    params: Optional[Dict[str, Any]] = None
    operation_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    
    def __post_init__(self):
        self.method = self.method.upper()
        if self.method not in BATCH_METHODS:
            raise InvalidArgumentError(f"Unsupported batch method: {self.method}")
        if not self.path:
            raise InvalidArgumentError("Batch operation path must not be empty")
        if not self.path.startswith("/"):
            self.path = "/" + self.path
    
    def to_dict(self) -> Dict[str, Any]:
        payload = {"id": self.operation_id, "method": self.method, "path": self.path}
        if self.body is not None:
            payload["body"] = self.body
        if self.params:
            payload["params"] = self.params
        return payload


@dataclass
class BatchItemResult:
    """Outcome of one operation inside a batch."""
    
    operation_id: str
    status_code: int
    data: Any = None
    error: Optional[Dict[str, Any]] = None
    
    @property
    def ok(self) -> bool:
        return self.error is None and 200 <= self.status_code < 300
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BatchItemResult":
        """Parse one result item; an unreadable status counts as 0 (failed)."""
        try:
            status_code = int(data.get("status") or 0)
        except (TypeError, ValueError):
            status_code = 0
        error = data.get("error")
        if error is not None and not isinstance(error, dict):
            error = {"message": str(error)}
        return cls(
            operation_id=str(data.get("id") or ""),
            status_code=status_code,
            data=data.get("data"),
            error=error,
        )
    
    @classmethod
    def failure(cls, operation_id: str, error: Exception) -> "BatchItemResult":
        """Build a failed result for an operation whose whole chunk failed."""
        status_code = getattr(error, "status_code", None) or 0
        return cls(
            operation_id=operation_id,
            status_code=status_code,
            error={"message": str(error), "code": getattr(error, "code", None)},
        )


@dataclass
class BatchResult:
    """Represents the results from running a list of batch operations."""
    
    batch_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    results: List[BatchItemResult] = field(default_factory=list)
    started: datetime = field(default_factory=datetime.now)
    finished: Optional[datetime] = None
    chunks_sent: int = 0
    errors: List[str] = field(default_factory=list)
    
    def add_result(self, result: BatchItemResult) -> None:
        self.results.append(result)
    
    def mark_completed(self) -> None:
        """Mark the batch as completed."""
        self.finished = datetime.now()
    
    def get_processing_duration(self) -> Optional[float]:
        """Get processing duration in seconds."""
        if not self.finished:
            return None
        return (self.finished - self.started).total_seconds()
    
    @property
    def succeeded(self) -> List[BatchItemResult]:
        return [result for result in self.results if result.ok]
    
    @property
    def failed(self) -> List[BatchItemResult]:
        return [result for result in self.results if not result.ok]
    
    def get_success_rate(self) -> float:
        if not self.results:
            return 0.0
        return len(self.succeeded) / len(self.results)
    
    def get(self, operation_id: str) -> Optional[BatchItemResult]:
        for result in self.results:
            if result.operation_id == operation_id:
                return result
        return None
    
    def raise_for_errors(self) -> None:
        """Raise ApiError summarising failed operations, if any."""
        failed = self.failed
        if not failed:
            return
        first = failed[0]
        message = (first.error or {}).get("message") or f"HTTP {first.status_code}"
        raise ApiError(
            f"{len(failed)} of {len(self.results)} batch operations failed; first error: {message}",
            code="batch_partial_failure",
            details={"failed_operation_ids": [result.operation_id for result in failed]},
        )
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "batch_id": self.batch_id,
            "total": len(self.results),
            "succeeded": len(self.succeeded),
            "failed": len(self.failed),
            "chunks_sent": self.chunks_sent,
            "duration": self.get_processing_duration(),
            "errors": self.errors,
        }
