"""Automation service: workflows and workflow runs."""

import logging
import time
from typing import Any, Dict, List, Optional

from ..exceptions import InvalidArgumentError, TiationError
from ..models.content import Page
from ..models.workflow import Workflow, WorkflowRun
from ..utils.validators import require_non_empty, validate_pagination
from .responses import decode_model, decode_page

logger = logging.getLogger(__name__)

UPDATABLE_WORKFLOW_FIELDS = ("name", "trigger", "steps", "enabled")


class AutomationService:
    """Manage and trigger automation workflows."""
    
    def __init__(self, http):
        self.http = http
    
    def list_workflows(self, page: int = 1, limit: int = 50) -> Page:
        validate_pagination(page, limit)
        response = self.http.get("/automation/workflows", params={"page": page, "limit": limit})
        return decode_page(Workflow.from_dict, response)
    
    def get_workflow(self, workflow_id: str) -> Workflow:
        workflow_id = require_non_empty(workflow_id, "workflow_id")
        return decode_model(Workflow.from_dict, self.http.get(f"/automation/workflows/{workflow_id}"))
    
    def create_workflow(
        self,
        name: str,
        trigger: Dict[str, Any],
        steps: Optional[List[Dict[str, Any]]] = None,
        enabled: bool = True
    ) -> Workflow:
        """Create a workflow from a trigger definition and steps."""
        name = require_non_empty(name, "name")
        if not isinstance(trigger, dict) or not trigger.get("type"):
            raise InvalidArgumentError("trigger must be a dict with a 'type'")
        
        body = {"name": name, "trigger": trigger, "steps": list(steps or []), "enabled": enabled}
        logger.debug(f"Creating workflow {name}")
        return decode_model(Workflow.from_dict, self.http.post("/automation/workflows", json_body=body))
    
    def update_workflow(self, workflow_id: str, **fields) -> Workflow:
        workflow_id = require_non_empty(workflow_id, "workflow_id")
        unknown = set(fields) - set(UPDATABLE_WORKFLOW_FIELDS)
        if unknown:
            raise InvalidArgumentError(f"Cannot update workflow fields: {', '.join(sorted(unknown))}")
        if not fields:
            raise InvalidArgumentError("No fields to update")
        response = self.http.patch(f"/automation/workflows/{workflow_id}", json_body=fields)
        return decode_model(Workflow.from_dict, response)
    
    def delete_workflow(self, workflow_id: str) -> None:
        workflow_id = require_non_empty(workflow_id, "workflow_id")
        self.http.delete(f"/automation/workflows/{workflow_id}")
    
    def trigger_workflow(self, workflow_id: str, payload: Optional[Dict[str, Any]] = None) -> WorkflowRun:
        """Start a workflow run with an optional input payload."""
        workflow_id = require_non_empty(workflow_id, "workflow_id")
        logger.info(f"Triggering workflow {workflow_id}")
        response = self.http.post(
            f"/automation/workflows/{workflow_id}/runs",
            json_body={"input": payload or {}},
        )
        run = decode_model(WorkflowRun.from_dict, response)
        if not run.workflow_id:
            run.workflow_id = workflow_id
        return run
    
    def get_run(self, workflow_id: str, run_id: str) -> WorkflowRun:
        workflow_id = require_non_empty(workflow_id, "workflow_id")
        run_id = require_non_empty(run_id, "run_id")
        response = self.http.get(f"/automation/workflows/{workflow_id}/runs/{run_id}", use_cache=False)
        run = decode_model(WorkflowRun.from_dict, response)
        if not run.workflow_id:
            run.workflow_id = workflow_id
        return run
    
    def wait_for_run(
        self,
        workflow_id: str,
        run_id: str,
        poll_interval: float = 1.0,
        timeout: float = 60.0
    ) -> WorkflowRun:
        """Poll a run until it finishes or the timeout elapses."""
        deadline = time.monotonic() + timeout
        while True:
            run = self.get_run(workflow_id, run_id)
            if run.is_finished():
                return run
            if time.monotonic() + poll_interval > deadline:
                raise TiationError(
                    f"Workflow run {run_id} still {run.status} after {timeout:.0f}s"
                )
            time.sleep(poll_interval)
