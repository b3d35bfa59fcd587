"""
Playable poller.

Waits until the HLS manifest of an uploaded video is served, then
notifies 'playable' observers.
"""
import asyncio
import logging

from ..models import VideoUploadResponse
from ...api.events import EventEmitter
from ...api.transport import HttpTransport
from ...exceptions import UploaderException

PLAYABLE_EVENT = 'playable'


class PlayablePoller:
    """
    Polls a video's HLS URL until it returns content.
    
    A 202 status or an empty body means the video is still processing.
    There is no attempt limit and no cancellation: the loop only ends
    when the manifest is served or the transport raises.
    """
    
    DEFAULT_INTERVAL = 0.5
    PROCESSING_STATUS = 202
    
    def __init__(
        self,
        transport: HttpTransport,
        emitter: EventEmitter,
        interval: float = DEFAULT_INTERVAL
    ):
        self._transport = transport
        self._emitter = emitter
        self._interval = interval
        self._logger = logging.getLogger('videouploader.upload.playable')
    
    async def wait(self, video: VideoUploadResponse) -> VideoUploadResponse:
        """
        Block until video is playable, then emit it to observers once.
        
        Raises:
            UploaderException: If the response carries no HLS asset
            UploadError: If a poll request fails at transport level
        """
        hls = video.hls_url
        if not hls:
            raise UploaderException(f"Video {video.video_id} has no HLS asset to poll")
        
        self._logger.info(f"Waiting for video {video.video_id} to become playable")
        polls = 0
        while True:
            await asyncio.sleep(self._interval)
            polls += 1
            
            response = await self._transport.get(hls)
            if response.status == self.PROCESSING_STATUS or not response.text:
                continue
            break
        
        self._logger.info(f"Video {video.video_id} playable after {polls} polls")
        self._emitter.emit(PLAYABLE_EVENT, video)
        return video
