"""
videouploader - Async chunked video uploads for api.video.

Usage:
    >>> from videouploader import VideoUploader
    >>>
    >>> async with VideoUploader("clip.mp4", upload_token="TOKEN") as uploader:
    ...     uploader.on_progress(lambda e: print(e.uploaded_bytes, e.total_bytes))
    ...     video = await uploader.upload()
    ...     print(video.video_id, video.assets.player)
"""
import logging
from .version import __version__
from .client import VideoUploader

# Errors
from .core.exceptions import UploaderException, ConfigurationError
from .core.api import ErrorKind, UploadError

# Configuration
from .core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    RetryConfig,
    Origin,
    RetryStrategy,
    QuadraticBackoffStrategy,
    CancelableOperation,
    SessionManager,
)

# Models
from .core.upload import (
    UploadProgressEvent,
    VideoUploadResponse,
    VideoAssets,
    VideoSource,
    MetadataEntry,
    MIN_CHUNK_SIZE,
    DEFAULT_CHUNK_SIZE,
    MAX_CHUNK_SIZE,
)


def setup_logging(level=logging.INFO):
    """
    Configure logging for videouploader modules.
    
    This ensures that all videouploader loggers are properly configured
    to show log messages at the specified level.
    
    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'videouploader',
        'videouploader.client',
        'videouploader.auth',
        'videouploader.retry',
        'videouploader.transport',
        'videouploader.upload.coordinator',
        'videouploader.upload.chunk',
        'videouploader.upload.file',
        'videouploader.upload.playable',
    ]
    
    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'VideoUploader',
    'UploaderException',
    'ConfigurationError',
    'ErrorKind',
    'UploadError',
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',
    'Origin',
    'RetryStrategy',
    'QuadraticBackoffStrategy',
    'CancelableOperation',
    'SessionManager',
    'UploadProgressEvent',
    'VideoUploadResponse',
    'VideoAssets',
    'VideoSource',
    'MetadataEntry',
    'MIN_CHUNK_SIZE',
    'DEFAULT_CHUNK_SIZE',
    'MAX_CHUNK_SIZE',
    'setup_logging',
    '__version__',
]
