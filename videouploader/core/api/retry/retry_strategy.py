"""Retry strategies using Strategy Pattern."""
from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..config import RetryConfig, DEFAULT_RETRIES
from ..errors import UploadError

# (retry_count, error) -> delay in milliseconds, or None to give up
RetryStrategyFn = Callable[[int, UploadError], Optional[int]]


class RetryStrategy(ABC):
    """
    Abstract retry strategy.
    
    Instances are callables with the RetryStrategyFn signature, so plain
    functions and strategy objects are interchangeable.
    """
    
    @abstractmethod
    def next_delay(self, retry_count: int, error: UploadError) -> Optional[int]:
        """Milliseconds to wait before the next attempt, or None to stop."""
        pass
    
    def __call__(self, retry_count: int, error: UploadError) -> Optional[int]:
        return self.next_delay(retry_count, error)


class QuadraticBackoffStrategy(RetryStrategy):
    """
    Default strategy.
    
    Any response below 500 fails immediately: 4xx are client errors and
    a 2xx means the chunk was already accepted. Server errors and
    failures without a status are retried up to max_retries times, waiting
    floor(200 + 2000 * n * (n + 1)) ms before retry n: 200ms, 4.2s,
    12.2s, 24.2s, 40.2s, 60.2s.
    """
    
    def __init__(self, max_retries: int = DEFAULT_RETRIES, config: Optional[RetryConfig] = None):
        self._config = config or RetryConfig(max_retries=max_retries)
        self.max_retries = max_retries
    
    def next_delay(self, retry_count: int, error: UploadError) -> Optional[int]:
        if error.status is not None and error.status < 500:
            return None
        if retry_count >= self.max_retries:
            return None
        return self._config.calculate_delay(retry_count)


def default_retry_strategy(max_retries: int = DEFAULT_RETRIES) -> RetryStrategy:
    """Build the default quadratic backoff strategy."""
    return QuadraticBackoffStrategy(max_retries)
