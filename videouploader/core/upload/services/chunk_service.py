"""
Chunk upload service.

Posts one chunk to the upload endpoint and maps the outcome to a
VideoUploadResponse or an UploadError. A 401 with refreshable
credentials triggers one token refresh and one resubmission.
"""
import json
import logging
from typing import AsyncIterator, Callable, Optional

import aiohttp

from ..models import ChunkRequest, VideoUploadResponse
from ...api.auth import CredentialManager
from ...api.errors import ErrorKind, UploadError, parse_error_response
from ...api.retry import CancellationToken
from ...api.transport import HttpTransport, TransportResponse

ProgressCallback = Callable[[int], None]


class ProgressRelay:
    """
    Forwards progress ticks from the body stream to an observer.

    The stream is consumed by aiohttp, which would wrap an observer
    exception in a connection error. The relay keeps the first observer
    exception instead so the sender can re-raise it unchanged.
    """

    def __init__(self, callback: Optional[ProgressCallback] = None):
        self.callback = callback
        self.error: Optional[Exception] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def __call__(self, loaded: int) -> None:
        if self.callback is None or self.error is not None:
            return
        try:
            self.callback(loaded)
        except Exception as e:
            self.error = e

    def raise_if_failed(self) -> None:
        if self.error is not None:
            raise self.error


class ChunkUploader:
    """
    Handles uploading one chunk to the video API.

    Responsibilities:
    - Build the multipart body and Content-Range header
    - Report bytes handed to the connection through on_progress
    - Refresh credentials once on 401
    - Map HTTP responses to results or structured errors
    """

    # Granularity of progress reports
    PROGRESS_SLICE = 64 * 1024

    def __init__(self, transport: HttpTransport, credentials: CredentialManager):
        """
        Initialize chunk uploader.

        Args:
            transport: HTTP transport
            credentials: Credential manager of the upload session
        """
        self._transport = transport
        self._credentials = credentials
        self._logger = logging.getLogger('videouploader.upload.chunk')

    @property
    def upload_url(self) -> str:
        return self._credentials.upload_endpoint

    async def send(
        self,
        request: ChunkRequest,
        on_progress: Optional[ProgressCallback] = None,
        token: Optional[CancellationToken] = None
    ) -> VideoUploadResponse:
        """
        Upload a single chunk.

        Args:
            request: Chunk to send
            on_progress: Called with the number of chunk bytes sent so far
            token: Cancellation token checked before each request

        Returns:
            Video record returned by the server

        Raises:
            UploadError: HTTP_ERROR for status >= 400, NETWORK_ERROR /
                NETWORK_TIMEOUT for transport failures, UNKNOWN for an
                unreadable success body
            Exception: Whatever a progress observer raised
        """
        part = request.part.header_value()
        self._logger.debug(f"Uploading {part} ({request.chunk.size} bytes)")

        response = await self._post(request, on_progress, token)

        if response.status == 401 and self._credentials.can_refresh:
            self._logger.info(f"{part} rejected with 401, refreshing access token")
            await self._credentials.refresh()
            response = await self._post(request, on_progress, token)

        if response.status >= 400:
            self._logger.error(f"{part} failed with HTTP {response.status}")
            raise parse_error_response(response.status, response.text)

        return self._process_response(response)

    async def _post(
        self,
        request: ChunkRequest,
        on_progress: Optional[ProgressCallback],
        token: Optional[CancellationToken]
    ) -> TransportResponse:
        if token is not None:
            token.raise_if_cancelled()

        headers = {
            'Content-Range': request.part.header_value(),
            **self._credentials.headers(),
        }
        relay = ProgressRelay(on_progress)
        try:
            response = await self._transport.post(
                self.upload_url,
                headers=headers,
                data=self.build_form(request, relay)
            )
        except UploadError:
            relay.raise_if_failed()
            raise
        relay.raise_if_failed()
        return response

    def build_form(
        self,
        request: ChunkRequest,
        relay: Optional[ProgressRelay] = None
    ) -> aiohttp.FormData:
        """Multipart body of a chunk. Built fresh for every attempt."""
        relay = relay or ProgressRelay()
        form = aiohttp.FormData()
        for name, value in request.form_fields().items():
            if name == 'file':
                file_name, data = value
                form.add_field(
                    'file',
                    self._stream(data, relay),
                    filename=file_name,
                    content_type='application/octet-stream'
                )
            else:
                form.add_field(name, value)
        return form

    async def _stream(self, data: bytes, relay: ProgressRelay) -> AsyncIterator[bytes]:
        """
        Yield data in slices, reporting bytes written after each one.

        Stops early once the observer has failed.
        """
        if not data:
            relay(0)

        view = memoryview(data)
        loaded = 0
        for offset in range(0, len(data), self.PROGRESS_SLICE):
            piece = bytes(view[offset:offset + self.PROGRESS_SLICE])
            yield piece
            loaded += len(piece)
            relay(loaded)
            if relay.failed:
                return

    def _process_response(self, response: TransportResponse) -> VideoUploadResponse:
        """
        Parse a successful response body.

        The server has accepted the chunk at this point, so the error
        carries the success status and is not retried by the default
        strategy.

        Raises:
            UploadError: UNKNOWN if the body is not a video object
        """
        try:
            body = json.loads(response.text)
            return VideoUploadResponse.from_api(body)
        except (ValueError, AttributeError, TypeError) as e:
            self._logger.error(f"Unexpected upload response: {e}")
            raise UploadError(
                ErrorKind.UNKNOWN,
                status=response.status,
                raw=response.text,
                title=f"Invalid upload response: {e}"
            ) from e
