"""
Upload module.

Chunk planning, the chunk loop, and the services it relies on.
"""
from .coordinator import UploadCoordinator, UploadSession, build_progress_event, PROGRESS_EVENT
from .models import (
    UploadState,
    ChunkInfo,
    ChunkPart,
    ChunkRequest,
    UploadProgressEvent,
    VideoUploadResponse,
    VideoAssets,
    VideoSource,
    MetadataEntry,
)
from .strategies import ChunkPlan, ChunkPlanner, MIN_CHUNK_SIZE, DEFAULT_CHUNK_SIZE, MAX_CHUNK_SIZE
from .services import FileValidator, AsyncFileReader, ChunkUploader, PlayablePoller, PLAYABLE_EVENT
from .protocols import FileReaderProtocol, ChunkUploaderProtocol

__all__ = [
    # Main classes
    'UploadCoordinator',
    'UploadSession',
    'build_progress_event',
    'ChunkPlan',
    'ChunkPlanner',
    'ChunkUploader',
    'PlayablePoller',
    'FileValidator',
    'AsyncFileReader',
    
    # Constants
    'PROGRESS_EVENT',
    'PLAYABLE_EVENT',
    'MIN_CHUNK_SIZE',
    'DEFAULT_CHUNK_SIZE',
    'MAX_CHUNK_SIZE',
    
    # Models
    'UploadState',
    'ChunkInfo',
    'ChunkPart',
    'ChunkRequest',
    'UploadProgressEvent',
    'VideoUploadResponse',
    'VideoAssets',
    'VideoSource',
    'MetadataEntry',
    
    # Protocols
    'FileReaderProtocol',
    'ChunkUploaderProtocol',
]
