"""Automation workflow models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..utils.timestamps import format_timestamp, parse_timestamp

FINISHED_RUN_STATUSES = ("succeeded", "failed", "cancelled")


@dataclass
class Workflow:
    """An automation workflow: a trigger plus an ordered list of steps."""
    
    id: str
    name: str
    trigger: Dict[str, Any] = field(default_factory=dict)
    steps: List[Dict[str, Any]] = field(default_factory=list)
    enabled: bool = True
    created_at: Optional[datetime] = None
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Workflow":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            trigger=dict(data.get("trigger") or {}),
            steps=list(data.get("steps") or []),
            enabled=bool(data.get("enabled", True)),
            created_at=parse_timestamp(data.get("created_at")),
        )
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "trigger": self.trigger,
            "steps": self.steps,
            "enabled": self.enabled,
            "created_at": format_timestamp(self.created_at),
        }


@dataclass
class WorkflowRun:
    """One execution of a workflow."""
    
    id: str
    workflow_id: str
    status: str = "queued"  # queued, running, succeeded, failed, cancelled
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    output: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkflowRun":
        return cls(
            id=data["id"],
            workflow_id=data.get("workflow_id", ""),
            status=data.get("status", "queued"),
            started_at=parse_timestamp(data.get("started_at")),
            finished_at=parse_timestamp(data.get("finished_at")),
            output=dict(data.get("output") or {}),
            error=data.get("error"),
        )
    
    def is_finished(self) -> bool:
        return self.status in FINISHED_RUN_STATUSES
    
    def succeeded(self) -> bool:
        return self.status == "succeeded"
    
    def get_duration(self) -> Optional[float]:
        """Run duration in seconds, once both timestamps are known."""
        if not self.started_at or not self.finished_at:
            return None
        return (self.finished_at - self.started_at).total_seconds()
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "workflow_id": self.workflow_id,
            "status": self.status,
            "started_at": format_timestamp(self.started_at),
            "finished_at": format_timestamp(self.finished_at),
            "output": self.output,
            "error": self.error,
        }
