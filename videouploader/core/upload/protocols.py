"""
Protocol definitions for upload module.

Interfaces the coordinator depends on, so transports and readers can be
swapped or stubbed.
"""
from typing import Callable, Optional, Protocol
from pathlib import Path

from .models import ChunkRequest, VideoUploadResponse
from ..api.retry import CancellationToken


class FileReaderProtocol(Protocol):
    """Protocol for byte-range reads."""
    
    async def read_chunk(self, file_path: Path, start: int, end: int) -> bytes:
        """
        Read bytes [start, end) of a file.
        
        Args:
            file_path: Path to the file
            start: Start position in bytes
            end: End position in bytes (exclusive)
            
        Returns:
            Chunk data
        """
        ...


class ChunkUploaderProtocol(Protocol):
    """Protocol for sending one chunk."""
    
    async def send(
        self,
        request: ChunkRequest,
        on_progress: Optional[Callable[[int], None]] = None,
        token: Optional[CancellationToken] = None
    ) -> VideoUploadResponse:
        """
        Upload a single chunk.
        
        Args:
            request: Chunk bytes and metadata
            on_progress: Called with bytes of this chunk sent so far
            token: Cancellation token of the operation
            
        Returns:
            Video record returned by the server
        """
        ...
