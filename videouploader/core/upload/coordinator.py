"""
Upload coordinator.

Drives the chunk loop of one upload operation: chunks are sent strictly
in order, each through the retrier, and the video id returned by the
server is carried into every following request.
"""
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .models import (
    ChunkInfo,
    ChunkPart,
    ChunkRequest,
    UploadProgressEvent,
    UploadState,
    VideoUploadResponse,
)
from .protocols import ChunkUploaderProtocol, FileReaderProtocol
from .services import AsyncFileReader
from .strategies import ChunkPlan
from ..api.errors import UploadError
from ..api.events import EventEmitter
from ..api.retry import CancellationToken, Retrier
from ..logging import get_logger

logger = get_logger('videouploader.upload.coordinator')

PROGRESS_EVENT = 'progress'


@dataclass
class UploadSession:
    """
    Mutable state of one upload operation.
    
    Attributes:
        file_path: File being uploaded
        file_name: Name sent with every chunk
        plan: Chunk plan of the file
        video_id: Video id, once known; never reset to an empty value
    """
    file_path: Path
    file_name: str
    plan: ChunkPlan
    video_id: Optional[str] = None
    
    @property
    def file_size(self) -> int:
        return self.plan.file_size
    
    def adopt_video_id(self, video_id: Optional[str]) -> None:
        if video_id:
            self.video_id = video_id


def build_progress_event(plan: ChunkPlan, chunk: ChunkInfo, loaded: int) -> UploadProgressEvent:
    """Progress snapshot for `loaded` bytes sent of `chunk`."""
    return UploadProgressEvent(
        uploaded_bytes=chunk.start + loaded,
        total_bytes=plan.file_size,
        chunks_count=plan.count,
        chunks_bytes=plan.chunk_size,
        current_chunk=chunk.ordinal,
        current_chunk_uploaded_bytes=loaded,
    )


class UploadCoordinator:
    """
    Coordinates one chunked upload.
    
    One coordinator serves one operation; its state moves from PLANNED
    through UPLOADING to DONE, or ends in ABORTED / FAILED.
    """
    
    def __init__(
        self,
        chunk_uploader: ChunkUploaderProtocol,
        retrier: Retrier,
        emitter: EventEmitter,
        file_reader: Optional[FileReaderProtocol] = None
    ):
        """
        Initialize upload coordinator.
        
        Args:
            chunk_uploader: Sends one chunk (transport adapter)
            retrier: Retry loop wrapped around every chunk
            emitter: Receives 'progress' events
            file_reader: Byte-range reader
        """
        self._uploader = chunk_uploader
        self._retrier = retrier
        self._emitter = emitter
        self._file_reader = file_reader or AsyncFileReader()
        self._state = UploadState.PLANNED
        self._current_chunk: Optional[ChunkInfo] = None
    
    @property
    def state(self) -> UploadState:
        return self._state
    
    @property
    def current_chunk(self) -> Optional[ChunkInfo]:
        return self._current_chunk
    
    async def upload(self, session: UploadSession, token: CancellationToken) -> VideoUploadResponse:
        """
        Upload every chunk of the session's file.
        
        Returns:
            Response to the last chunk
            
        Raises:
            UploadError: ABORTED if cancelled, otherwise the error that
                ended the retry loop of the failing chunk
        """
        plan = session.plan
        size_mb = plan.file_size / (1024 * 1024)
        logger.info(f"Starting upload: {session.file_name} ({size_mb:.2f} MB, {plan.count} chunks)")
        
        has_file_management = hasattr(self._file_reader, 'open_file') and hasattr(self._file_reader, 'close_file')
        started = time.time()
        response: Optional[VideoUploadResponse] = None
        try:
            if has_file_management:
                await self._file_reader.open_file(session.file_path)
            
            for chunk in plan:
                self._state = UploadState.UPLOADING
                self._current_chunk = chunk
                response = await self._upload_chunk(session, chunk, token)
                session.adopt_video_id(response.video_id)
                logger.debug(f"Chunk {chunk.ordinal}/{plan.count} done, videoId={session.video_id}")
        except UploadError as e:
            self._state = UploadState.ABORTED if e.is_aborted else UploadState.FAILED
            chunk_no = self._current_chunk.ordinal if self._current_chunk else 0
            logger.error(f"Upload {self._state.value} at chunk {chunk_no}/{plan.count}: {e}")
            raise
        except Exception:
            self._state = UploadState.FAILED
            raise
        finally:
            if has_file_management:
                await self._file_reader.close_file()
        
        self._state = UploadState.DONE
        logger.info(f"Upload complete: video {session.video_id} in {time.time() - started:.2f}s")
        return response
    
    async def _upload_chunk(
        self,
        session: UploadSession,
        chunk: ChunkInfo,
        token: CancellationToken
    ) -> VideoUploadResponse:
        plan = session.plan
        data = await self._file_reader.read_chunk(session.file_path, chunk.start, chunk.end)
        request = ChunkRequest(
            chunk=chunk,
            part=ChunkPart(current=chunk.ordinal, total=plan.count),
            data=data,
            file_name=session.file_name,
            video_id=session.video_id,
        )
        
        def on_progress(loaded: int) -> None:
            self._emitter.emit(PROGRESS_EVENT, build_progress_event(plan, chunk, loaded))
        
        return await self._retrier.run(
            lambda attempt_token: self._uploader.send(request, on_progress, attempt_token),
            token
        )
