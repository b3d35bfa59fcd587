"""Upload services."""
from .file_service import FileValidator, AsyncFileReader
from .chunk_service import ChunkUploader
from .playable_service import PlayablePoller, PLAYABLE_EVENT

__all__ = [
    'FileValidator',
    'AsyncFileReader',
    'ChunkUploader',
    'PlayablePoller',
    'PLAYABLE_EVENT',
]
