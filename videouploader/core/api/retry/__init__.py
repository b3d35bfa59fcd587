"""Retry strategies, retrier and cancellation."""
from .retry_strategy import (
    RetryStrategy,
    RetryStrategyFn,
    QuadraticBackoffStrategy,
    default_retry_strategy,
)
from .cancellation import CancellationToken, CancelableOperation
from .retrier import Retrier

__all__ = [
    'RetryStrategy',
    'RetryStrategyFn',
    'QuadraticBackoffStrategy',
    'default_retry_strategy',
    'CancellationToken',
    'CancelableOperation',
    'Retrier',
]
