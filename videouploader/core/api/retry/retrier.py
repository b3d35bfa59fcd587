"""
Retrier.

Runs one fallible asynchronous action under a retry strategy, with
cooperative cancellation of both the running attempt and backoff waits.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from .cancellation import CancellationToken
from .retry_strategy import RetryStrategyFn, default_retry_strategy
from ..errors import UploadError

T = TypeVar('T')

Action = Callable[[CancellationToken], Awaitable[T]]


class Retrier:
    """
    Bounded retry loop around a single action.
    
    Only UploadError is treated as a request failure; any other exception
    propagates on the first occurrence. ABORTED errors and cancellation
    are never retried.
    
    Example:
        >>> retrier = Retrier(default_retry_strategy(6))
        >>> response = await retrier.run(send_chunk, token)
    """
    
    def __init__(
        self,
        retry_strategy: Optional[RetryStrategyFn] = None,
        logger: Optional[logging.Logger] = None
    ):
        self._retry_strategy = retry_strategy or default_retry_strategy()
        self._logger = logger or logging.getLogger('videouploader.retry')
    
    @property
    def retry_strategy(self) -> RetryStrategyFn:
        return self._retry_strategy
    
    async def run(self, action: Action, token: CancellationToken) -> T:
        """
        Run action until it succeeds, the strategy gives up, or the
        token is cancelled.
        
        Args:
            action: Coroutine function receiving the cancellation token
            token: Cancellation token of the enclosing operation
            
        Returns:
            The action's result
            
        Raises:
            UploadError: ABORTED on cancellation, otherwise the last error
        """
        retry_count = 0
        while True:
            token.raise_if_cancelled()
            try:
                return await self._attempt(action, token)
            except UploadError as error:
                if error.is_aborted or token.is_cancelled:
                    raise UploadError.aborted() from error
                
                delay = self._retry_strategy(retry_count, error)
                if delay is None:
                    self._logger.error(
                        f"video upload: {error.reason}, giving up after {retry_count} retries"
                    )
                    raise
                
                self._logger.warning(
                    f"video upload: {error.reason or 'ERROR'}, will be retried in {delay} ms"
                )
                await self._backoff(delay, token)
                retry_count += 1
    
    async def _attempt(self, action: Action, token: CancellationToken) -> T:
        """Run one attempt, abandoning it as soon as the token fires."""
        attempt = asyncio.ensure_future(action(token))
        cancelled = asyncio.ensure_future(token.wait())
        try:
            done, _ = await asyncio.wait(
                {attempt, cancelled},
                return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            attempt.cancel()
            raise
        finally:
            cancelled.cancel()
        
        if attempt in done:
            return attempt.result()
        
        attempt.cancel()
        await asyncio.gather(attempt, return_exceptions=True)
        raise UploadError.aborted()
    
    async def _backoff(self, delay_ms: int, token: CancellationToken) -> None:
        """Wait delay_ms milliseconds unless the token fires first."""
        try:
            await asyncio.wait_for(token.wait(), timeout=delay_ms / 1000)
        except asyncio.TimeoutError:
            return
        raise UploadError.aborted()
