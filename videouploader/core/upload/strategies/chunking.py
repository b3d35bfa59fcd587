"""
Chunking strategies for file uploads.

ChunkPlan does the byte-range arithmetic; ChunkPlanner enforces the
chunk size limits accepted by the server.
"""
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from ..models import ChunkInfo
from ...exceptions import ConfigurationError

MiB = 1024 * 1024

MIN_CHUNK_SIZE = 5 * MiB
DEFAULT_CHUNK_SIZE = 50 * MiB
MAX_CHUNK_SIZE = 128 * MiB


@dataclass(frozen=True)
class ChunkPlan:
    """
    Fixed-size split of a file.
    
    A zero-byte file has exactly one empty chunk so that the server
    still receives a (zero-length) upload request.
    """
    file_size: int
    chunk_size: int
    
    def __post_init__(self):
        if self.file_size < 0:
            raise ValueError("File size cannot be negative")
        if self.chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
    
    @property
    def count(self) -> int:
        if self.file_size == 0:
            return 1
        return -(-self.file_size // self.chunk_size)
    
    def chunk(self, index: int) -> ChunkInfo:
        """
        Byte range of chunk index.
        
        Raises:
            IndexError: If index is outside [0, count)
        """
        if not 0 <= index < self.count:
            raise IndexError(f"Chunk index {index} out of range (0..{self.count - 1})")
        start = index * self.chunk_size
        end = min((index + 1) * self.chunk_size, self.file_size)
        return ChunkInfo(index=index, start=start, end=end)
    
    def __iter__(self) -> Iterator[ChunkInfo]:
        for index in range(self.count):
            yield self.chunk(index)
    
    def __len__(self) -> int:
        return self.count
    
    def boundaries(self) -> List[Tuple[int, int]]:
        """List of (start, end) tuples."""
        return [(chunk.start, chunk.end) for chunk in self]


class ChunkPlanner:
    """
    Validated fixed-size chunking.
    
    Example:
        >>> planner = ChunkPlanner(10 * MiB)
        >>> plan = planner.plan(25 * MiB)
        >>> plan.count
        3
    """
    
    def __init__(self, chunk_size: Optional[int] = None):
        """
        Initialize with chunk size.
        
        Args:
            chunk_size: Chunk size in bytes, DEFAULT_CHUNK_SIZE when None
            
        Raises:
            ConfigurationError: If chunk_size is outside the allowed range
        """
        if chunk_size is not None and not MIN_CHUNK_SIZE <= chunk_size <= MAX_CHUNK_SIZE:
            raise ConfigurationError(
                f"Invalid chunk size. Minimal allowed value: {MIN_CHUNK_SIZE // MiB}MB, "
                f"maximum allowed value: {MAX_CHUNK_SIZE // MiB}MB."
            )
        self.chunk_size = chunk_size if chunk_size is not None else DEFAULT_CHUNK_SIZE
    
    def plan(self, file_size: int) -> ChunkPlan:
        return ChunkPlan(file_size=file_size, chunk_size=self.chunk_size)
