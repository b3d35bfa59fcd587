"""Tests for the playable poller."""
import pytest

from videouploader.core.exceptions import UploaderException
from videouploader.core.api import EventEmitter, TransportResponse, UploadError
from videouploader.core.upload import VideoAssets, VideoUploadResponse
from videouploader.core.upload.services import PlayablePoller, PLAYABLE_EVENT

HLS = "https://vod.api.video/vod/vi123/hls/manifest.m3u8"


class TestPlayablePoller:
    """Test suite for PlayablePoller."""
    
    @pytest.fixture
    def emitter(self):
        """Create emitter."""
        return EventEmitter()
    
    @pytest.fixture
    def video(self):
        """Video with an HLS asset."""
        return VideoUploadResponse(video_id="vi123", assets=VideoAssets(hls=HLS))
    
    @pytest.mark.asyncio
    async def test_polls_until_served(self, stub_transport, emitter, video):
        """Test 202 and empty bodies keep polling."""
        stub_transport.queue(
            TransportResponse(status=202, text="processing"),
            TransportResponse(status=200, text=""),
            TransportResponse(status=200, text="#EXTM3U"),
        )
        playable = []
        emitter.on(PLAYABLE_EVENT, playable.append)
        
        result = await PlayablePoller(stub_transport, emitter, interval=0).wait(video)
        
        assert result is video
        assert playable == [video]
        assert [call['url'] for call in stub_transport.calls] == [HLS] * 3
    
    @pytest.mark.asyncio
    async def test_error_status_with_body_ends_polling(self, stub_transport, emitter, video):
        """Test any non-202 status with content counts as served."""
        stub_transport.queue(TransportResponse(status=404, text="not found"))
        playable = []
        emitter.on(PLAYABLE_EVENT, playable.append)
        
        await PlayablePoller(stub_transport, emitter, interval=0).wait(video)
        
        assert playable == [video]
    
    @pytest.mark.asyncio
    async def test_requires_hls(self, stub_transport, emitter):
        """Test videos without HLS asset."""
        poller = PlayablePoller(stub_transport, emitter, interval=0)
        
        with pytest.raises(UploaderException, match="no HLS asset"):
            await poller.wait(VideoUploadResponse(video_id="vi123"))
        
        assert stub_transport.calls == []
    
    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, stub_transport, emitter, video):
        """Test network failures end the wait."""
        stub_transport.queue(UploadError.network_error("reset"))
        playable = []
        emitter.on(PLAYABLE_EVENT, playable.append)
        
        with pytest.raises(UploadError):
            await PlayablePoller(stub_transport, emitter, interval=0).wait(video)
        
        assert playable == []
