"""Registry of running upload operations."""
import threading
import uuid
from typing import Dict, Optional

from ..retry import CancelableOperation


class OperationRegistry:
    """
    Maps operation ids to their cancelable handles.
    
    Used only to route cancel() calls. Safe for concurrent use from
    several threads; entries are added when an operation starts and
    removed when it settles or is cancelled.
    """
    
    def __init__(self):
        self._operations: Dict[str, CancelableOperation] = {}
        self._lock = threading.Lock()
    
    @staticmethod
    def new_id() -> str:
        return uuid.uuid4().hex
    
    def register(self, operation: CancelableOperation) -> None:
        with self._lock:
            if operation.operation_id in self._operations:
                raise KeyError(f"Operation already registered: {operation.operation_id}")
            self._operations[operation.operation_id] = operation
        operation.result.add_done_callback(
            lambda _task: self.discard(operation.operation_id)
        )
    
    def discard(self, operation_id: str) -> Optional[CancelableOperation]:
        with self._lock:
            return self._operations.pop(operation_id, None)
    
    def cancel(self, operation_id: str) -> bool:
        """
        Cancel and forget an operation.
        
        Returns:
            True if a running operation was found
        """
        operation = self.discard(operation_id)
        if operation is None:
            return False
        operation.cancel()
        return True
    
    def cancel_all(self) -> int:
        with self._lock:
            operations = list(self._operations.values())
            self._operations.clear()
        for operation in operations:
            operation.cancel()
        return len(operations)
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._operations)
    
    def __contains__(self, operation_id: str) -> bool:
        with self._lock:
            return operation_id in self._operations
