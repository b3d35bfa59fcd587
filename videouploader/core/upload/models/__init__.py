"""Upload models."""
from .upload_models import (
    UploadState,
    ChunkInfo,
    ChunkPart,
    ChunkRequest,
    UploadProgressEvent,
    MetadataEntry,
    VideoSource,
    VideoAssets,
    VideoUploadResponse,
    parse_datetime,
)

__all__ = [
    'UploadState',
    'ChunkInfo',
    'ChunkPart',
    'ChunkRequest',
    'UploadProgressEvent',
    'MetadataEntry',
    'VideoSource',
    'VideoAssets',
    'VideoUploadResponse',
    'parse_datetime',
]
