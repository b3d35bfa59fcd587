"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class UploadState(str, Enum):
    """Lifecycle of one upload operation."""
    PLANNED = 'planned'
    UPLOADING = 'uploading'
    DONE = 'done'
    ABORTED = 'aborted'
    FAILED = 'failed'

    @property
    def is_terminal(self) -> bool:
        return self in (UploadState.DONE, UploadState.ABORTED, UploadState.FAILED)


@dataclass(frozen=True)
class ChunkInfo:
    """
    Information about a file chunk.

    Attributes:
        index: Chunk index (0-based)
        start: Start position in bytes (inclusive)
        end: End position in bytes (exclusive)
    """
    index: int
    start: int
    end: int

    @property
    def size(self) -> int:
        """Returns chunk size."""
        return self.end - self.start

    @property
    def ordinal(self) -> int:
        """1-based chunk number, as sent to the server."""
        return self.index + 1


@dataclass(frozen=True)
class ChunkPart:
    """Position of a chunk in the upload, sent as the Content-Range header."""
    current: int
    total: Union[int, str] = '*'

    def header_value(self) -> str:
        return f"part {self.current}/{self.total}"


@dataclass(frozen=True)
class ChunkRequest:
    """
    Everything needed to post one chunk.

    Attributes:
        chunk: Byte range of the chunk
        part: Content-Range part numbering
        data: Chunk bytes
        file_name: Original file name, used for the multipart file part
        video_id: Video id known when the request was built
    """
    chunk: ChunkInfo
    part: ChunkPart
    data: bytes
    file_name: str
    video_id: Optional[str] = None

    def form_fields(self) -> Dict[str, Any]:
        """Multipart fields in send order: optional videoId, then file."""
        fields: Dict[str, Any] = {}
        if self.video_id:
            fields['videoId'] = self.video_id
        fields['file'] = (self.file_name, self.data)
        return fields


@dataclass(frozen=True)
class UploadProgressEvent:
    """
    Snapshot of upload progress.

    Attributes:
        uploaded_bytes: Bytes of the file sent so far, all chunks included
        total_bytes: File size
        chunks_count: Number of chunks
        chunks_bytes: Configured chunk size
        current_chunk: Chunk being sent (1-based)
        current_chunk_uploaded_bytes: Bytes of the current chunk sent so far
    """
    uploaded_bytes: int
    total_bytes: int
    chunks_count: int
    chunks_bytes: int
    current_chunk: int
    current_chunk_uploaded_bytes: int

    @property
    def percentage(self) -> float:
        """Returns upload progress as percentage."""
        if self.total_bytes == 0:
            return 100.0
        return (self.uploaded_bytes / self.total_bytes) * 100


@dataclass(frozen=True)
class MetadataEntry:
    key: Optional[str] = None
    value: Optional[str] = None


@dataclass(frozen=True)
class VideoSource:
    type: Optional[str] = None
    uri: Optional[str] = None


@dataclass(frozen=True)
class VideoAssets:
    """Streaming and embedding URLs of a video."""
    iframe: Optional[str] = None
    player: Optional[str] = None
    hls: Optional[str] = None
    thumbnail: Optional[str] = None
    mp4: Optional[str] = None


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; empty or malformed values yield None."""
    if not value:
        return None
    if isinstance(value, str) and value.endswith('Z'):
        value = value[:-1] + '+00:00'
    try:
        return datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return None


@dataclass(frozen=True)
class VideoUploadResponse:
    """
    Video record returned by the upload endpoint.

    The JSON field 'public' is exposed as is_public; timestamps are
    parsed into datetime values. The unmodified mapping is kept in raw.
    """
    video_id: str
    title: Optional[str] = None
    description: Optional[str] = None
    is_public: Optional[bool] = None
    panoramic: Optional[bool] = None
    mp4_support: Optional[bool] = None
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    tags: List[str] = field(default_factory=list)
    metadata: List[MetadataEntry] = field(default_factory=list)
    source: Optional[VideoSource] = None
    assets: Optional[VideoAssets] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'VideoUploadResponse':
        """
        Map an API video object.

        Raises:
            ValueError: If the mapping has no videoId
        """
        video_id = data.get('videoId')
        if not video_id:
            raise ValueError("Response has no videoId")

        source = data.get('source')
        assets = data.get('assets')
        return cls(
            video_id=video_id,
            title=data.get('title'),
            description=data.get('description'),
            is_public=data.get('public'),
            panoramic=data.get('panoramic'),
            mp4_support=data.get('mp4Support'),
            published_at=parse_datetime(data.get('publishedAt')),
            created_at=parse_datetime(data.get('createdAt')),
            updated_at=parse_datetime(data.get('updatedAt')),
            tags=list(data.get('tags') or []),
            metadata=[
                MetadataEntry(key=item.get('key'), value=item.get('value'))
                for item in data.get('metadata') or []
            ],
            source=VideoSource(type=source.get('type'), uri=source.get('uri')) if source else None,
            assets=VideoAssets(
                iframe=assets.get('iframe'),
                player=assets.get('player'),
                hls=assets.get('hls'),
                thumbnail=assets.get('thumbnail'),
                mp4=assets.get('mp4'),
            ) if assets else None,
            raw=dict(data),
        )

    @property
    def hls_url(self) -> Optional[str]:
        return self.assets.hls if self.assets else None
