"""Chunked execution of batch API operations."""

import logging
import time
from typing import Any, Callable, Dict, List, Optional

from ..exceptions import ApiError, InvalidArgumentError, TransportError
from ..models.batch import BatchItemResult, BatchOperation, BatchResult

logger = logging.getLogger(__name__)


class BatchProcessor:
    """Sends operations to the batch endpoint in fixed-size chunks."""
    
    def __init__(self, http, batch_size: int = 50, endpoint: str = "/batch"):
        """Initialize batch processor."""
        if batch_size < 1:
            raise InvalidArgumentError("batch_size must be at least 1")
        self.http = http
        self.batch_size = batch_size
        self.endpoint = endpoint
        
        # Processing statistics
        self.total_batches_processed = 0
        self.total_operations_processed = 0
        self.total_processing_time = 0.0
        self.failed_batches = 0
    
    def create_batches(self, operations: List[BatchOperation]) -> List[List[BatchOperation]]:
        """Split operations into chunks of at most batch_size."""
        if not operations:
            return []
        
        batches = []
        for i in range(0, len(operations), self.batch_size):
            batches.append(operations[i:i + self.batch_size])
        
        logger.debug(f"Created {len(batches)} batches for {len(operations)} operations")
        return batches
    
    def _send_chunk(self, chunk: List[BatchOperation]) -> List[BatchItemResult]:
        response = self.http.post(self.endpoint, json_body={"operations": [op.to_dict() for op in chunk]})
        if response is None:
            response = {}
        if not isinstance(response, dict) or not isinstance(response.get("results") or [], list):
            raise ApiError("Batch response is not a JSON object with a results list", code="invalid_response")
        
        returned = {}
        for item in response.get("results") or []:
            if not isinstance(item, dict):
                continue
            result = BatchItemResult.from_dict(item)
            returned[result.operation_id] = result
        
        results = []
        for operation in chunk:
            result = returned.get(operation.operation_id)
            if result is None:
                result = BatchItemResult(
                    operation_id=operation.operation_id,
                    status_code=0,
                    error={"message": "No result returned for operation", "code": "missing_result"},
                )
            results.append(result)
        return results
    
    def process(
        self,
        operations: List[BatchOperation],
        progress_callback: Optional[Callable[[int, int], None]] = None
    ) -> BatchResult:
        """Run all operations; results keep the input order."""
        batch_result = BatchResult()
        batches = self.create_batches(list(operations))
        start_time = time.time()
        
        for i, chunk in enumerate(batches):
            try:
                results = self._send_chunk(chunk)
                self.total_batches_processed += 1
                logger.debug(f"Processed batch {i + 1}/{len(batches)} ({len(chunk)} operations)")
            except (ApiError, TransportError) as e:
                logger.error(f"Failed to process batch {i + 1}: {e}")
                self.failed_batches += 1
                batch_result.errors.append(str(e))
                results = [BatchItemResult.failure(op.operation_id, e) for op in chunk]
            
            for result in results:
                batch_result.add_result(result)
            batch_result.chunks_sent += 1
            self.total_operations_processed += len(chunk)
            
            if progress_callback:
                progress_callback(i + 1, len(batches))
        
        batch_result.mark_completed()
        self.total_processing_time += time.time() - start_time
        return batch_result
    
    def get_processing_statistics(self) -> Dict[str, Any]:
        """Get processing statistics."""
        attempted = self.total_batches_processed + self.failed_batches
        return {
            "total_batches_processed": self.total_batches_processed,
            "total_operations_processed": self.total_operations_processed,
            "failed_batches": self.failed_batches,
            "success_rate": self.total_batches_processed / attempted if attempted > 0 else 0,
            "total_processing_time": self.total_processing_time,
            "batch_size": self.batch_size,
        }
