"""Video API client layer: configuration, transport, auth, retries."""
from .errors import ErrorKind, UploadError, parse_error_response
from .events import EventEmitter
from .config import APIConfig, ProxyConfig, SSLConfig, TimeoutConfig, RetryConfig
from .retry import (
    RetryStrategy,
    RetryStrategyFn,
    QuadraticBackoffStrategy,
    default_retry_strategy,
    CancellationToken,
    CancelableOperation,
    Retrier,
)
from .session import SessionManager, OperationRegistry
from .transport import HttpTransport, TransportResponse
from .auth import (
    Origin,
    Credentials,
    UploadTokenCredentials,
    AccessTokenCredentials,
    ApiKeyCredentials,
    CredentialManager,
    resolve_credentials,
)

__all__ = [
    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',
    
    # Errors
    'ErrorKind',
    'UploadError',
    'parse_error_response',
    
    # Events
    'EventEmitter',
    
    # Retry
    'RetryStrategy',
    'RetryStrategyFn',
    'QuadraticBackoffStrategy',
    'default_retry_strategy',
    'CancellationToken',
    'CancelableOperation',
    'Retrier',
    
    # Transport
    'SessionManager',
    'OperationRegistry',
    'HttpTransport',
    'TransportResponse',
    
    # Auth
    'Origin',
    'Credentials',
    'UploadTokenCredentials',
    'AccessTokenCredentials',
    'ApiKeyCredentials',
    'CredentialManager',
    'resolve_credentials',
]
