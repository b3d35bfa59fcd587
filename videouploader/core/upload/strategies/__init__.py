"""Chunking strategies."""
from .chunking import (
    ChunkPlan,
    ChunkPlanner,
    MiB,
    MIN_CHUNK_SIZE,
    DEFAULT_CHUNK_SIZE,
    MAX_CHUNK_SIZE,
)

__all__ = [
    'ChunkPlan',
    'ChunkPlanner',
    'MiB',
    'MIN_CHUNK_SIZE',
    'DEFAULT_CHUNK_SIZE',
    'MAX_CHUNK_SIZE',
]
