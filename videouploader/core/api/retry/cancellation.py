"""Cooperative cancellation primitives."""
import asyncio
from typing import Any, Generator, Generic, Optional, TypeVar

from ..errors import UploadError

T = TypeVar('T')


class CancellationToken:
    """
    Cooperative cancellation signal shared by one upload operation.
    
    Setting it aborts the in-flight request and cuts short any pending
    backoff wait. Once set it stays set.
    """
    
    def __init__(self):
        self._event = asyncio.Event()
    
    def cancel(self) -> None:
        self._event.set()
    
    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()
    
    async def wait(self) -> None:
        """Suspend until the token is cancelled."""
        await self._event.wait()
    
    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise UploadError.aborted()


class CancelableOperation(Generic[T]):
    """
    Handle on a running upload operation.
    
    Awaiting the handle (or its result task) yields the operation's value
    or raises its error; a cancelled operation raises UploadError with
    kind ABORTED.
    
    Example:
        >>> operation = uploader.upload()
        >>> operation.cancel()
        >>> await operation  # raises UploadError(ABORTED)
    """
    
    def __init__(self, operation_id: str, token: CancellationToken, task: 'asyncio.Task[T]'):
        self._operation_id = operation_id
        self._token = token
        self._task = task
    
    @property
    def operation_id(self) -> str:
        return self._operation_id
    
    @property
    def result(self) -> 'asyncio.Task[T]':
        """Task settling with the operation's outcome."""
        return self._task
    
    @property
    def done(self) -> bool:
        return self._task.done()
    
    @property
    def cancelled(self) -> bool:
        return self._token.is_cancelled
    
    def cancel(self) -> None:
        """Request cancellation. Idempotent; ignored once the operation settled."""
        if self._task.done():
            return
        self._token.cancel()
    
    def exception(self) -> Optional[BaseException]:
        return self._task.exception()
    
    def __await__(self) -> Generator[Any, None, T]:
        return self._task.__await__()
    
    def __repr__(self) -> str:
        state = 'done' if self._task.done() else 'running'
        return f"<CancelableOperation {self._operation_id} {state}>"
