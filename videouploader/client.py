"""
VideoUploader - High-level async client for chunked video uploads.

Example:
    >>> async with VideoUploader("clip.mp4", upload_token="to1tcmSFHeYY5KzyhOqVKMKb") as uploader:
    ...     uploader.on_progress(lambda e: print(f"{e.percentage:.1f}%"))
    ...     video = await uploader.upload()
    ...     print(video.video_id)
"""
import asyncio
from pathlib import Path
from typing import Callable, Optional, Set, Union

from .version import __version__
from .core.api import (
    APIConfig,
    RetryConfig,
    RetryStrategyFn,
    QuadraticBackoffStrategy,
    CancellationToken,
    CancelableOperation,
    Retrier,
    EventEmitter,
    SessionManager,
    HttpTransport,
    Origin,
    Credentials,
    CredentialManager,
    resolve_credentials,
)
from .core.upload import (
    UploadCoordinator,
    UploadSession,
    ChunkPlanner,
    ChunkUploader,
    FileValidator,
    PlayablePoller,
    UploadProgressEvent,
    VideoUploadResponse,
    PROGRESS_EVENT,
    PLAYABLE_EVENT,
)
from .core.logging import get_logger

logger = get_logger('videouploader.client')

CLIENT_NAME = 'python-uploader'


class VideoUploader:
    """
    Uploads one video file in sequential chunks.

    Exactly one authentication mode must be supplied:

    - upload_token (optionally with a known video_id)
    - access_token with video_id (optionally a refresh_token)
    - api_key with video_id

    upload() starts an operation and returns a cancelable handle at once;
    several operations may run concurrently, each with its own state.

    Example:
        >>> uploader = VideoUploader("clip.mp4", api_key="KEY", video_id="vi123")
        >>> operation = uploader.upload()
        >>> operation.cancel()
    """

    def __init__(
        self,
        file_path: Union[str, Path],
        *,
        upload_token: Optional[str] = None,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        api_key: Optional[str] = None,
        video_id: Optional[str] = None,
        chunk_size: Optional[int] = None,
        retries: Optional[int] = None,
        retry_strategy: Optional[RetryStrategyFn] = None,
        origin_app: Optional[Origin] = None,
        origin_sdk: Optional[Origin] = None,
        config: Optional[APIConfig] = None,
        session_manager: Optional[SessionManager] = None,
        transport: Optional[HttpTransport] = None,
        skip_upload: bool = False
    ):
        """
        Initialize uploader.

        Args:
            file_path: Video file to upload
            upload_token: Delegated upload token
            access_token: Bearer access token
            refresh_token: Refresh token paired with access_token
            api_key: API key
            video_id: Target video (required with access_token / api_key)
            chunk_size: Chunk size in bytes, 5 MiB to 128 MiB (default 50 MiB)
            retries: Retries per chunk for the default strategy (default 6)
            retry_strategy: Callable (retry_count, error) -> delay ms or None
            origin_app: Application name/version sent as AV-Origin-App
            origin_sdk: SDK name/version sent as AV-Origin-Sdk
            config: Client configuration
            session_manager: Shared HTTP session and operation registry
            transport: HTTP transport (defaults to aiohttp on session_manager)
            skip_upload: Accept missing credentials; upload() then resolves
                to None without any network request

        Raises:
            ConfigurationError: On invalid credentials, chunk size or origin
            FileNotFoundError: If file_path does not exist
        """
        self._config = config or APIConfig.default()
        self._credentials: Optional[Credentials] = resolve_credentials(
            upload_token=upload_token,
            access_token=access_token,
            refresh_token=refresh_token,
            api_key=api_key,
            video_id=video_id,
            allow_missing=skip_upload
        )
        self._planner = ChunkPlanner(chunk_size)
        self._headers = self._build_headers(origin_app, origin_sdk)
        self._path, self._file_size = FileValidator().validate(file_path)

        max_retries = retries if retries is not None else self._config.retry.max_retries
        self._retry_strategy = retry_strategy or QuadraticBackoffStrategy(
            max_retries,
            RetryConfig(
                max_retries=max_retries,
                base_delay_ms=self._config.retry.base_delay_ms,
                step_ms=self._config.retry.step_ms
            )
        )

        if session_manager is None and transport is not None:
            session_manager = getattr(transport, 'session_manager', None)
        self._owns_manager = session_manager is None
        self._manager = session_manager or SessionManager(self._config)
        self._transport = transport or HttpTransport(self._manager)
        self._credential_manager = CredentialManager(
            self._credentials,
            self._transport,
            self._config.base_url,
            self._headers
        ) if self._credentials is not None else None

        self._emitter = EventEmitter()
        self._background: Set[asyncio.Task] = set()
        self._video_id = self._credentials.video_id if self._credentials else None

    def _build_headers(self, origin_app: Optional[Origin], origin_sdk: Optional[Origin]) -> dict:
        headers = {
            **self._config.extra_headers,
            'AV-Origin-Client': f"{CLIENT_NAME}:{__version__}",
        }
        if origin_app is not None:
            origin_app.validate('application')
            headers['AV-Origin-App'] = origin_app.header_value()
        if origin_sdk is not None:
            origin_sdk.validate('sdk')
            headers['AV-Origin-Sdk'] = origin_sdk.header_value()
        return headers

    @property
    def file_path(self) -> Path:
        return self._path

    @property
    def file_size(self) -> int:
        return self._file_size

    @property
    def chunk_size(self) -> int:
        return self._planner.chunk_size

    @property
    def chunks_count(self) -> int:
        return self._planner.plan(self._file_size).count

    @property
    def video_id(self) -> Optional[str]:
        """Video id given at construction or returned by the last upload."""
        return self._video_id

    @property
    def headers(self) -> dict:
        """Headers sent with every chunk, Authorization included."""
        if self._credential_manager is None:
            return dict(self._headers)
        return self._credential_manager.headers()

    @property
    def upload_endpoint(self) -> Optional[str]:
        if self._credential_manager is None:
            return None
        return self._credential_manager.upload_endpoint

    @property
    def session_manager(self) -> SessionManager:
        return self._manager

    # Observers

    def on_progress(self, callback: Callable[[UploadProgressEvent], None]) -> Callable[[], None]:
        """
        Register a progress observer.

        Returns:
            Function removing the observer
        """
        return self._emitter.on(PROGRESS_EVENT, callback)

    def on_playable(self, callback: Callable[[VideoUploadResponse], None]) -> Callable[[], None]:
        """
        Register an observer called once the uploaded video can be played.

        Registering at least one playable observer makes every successful
        upload start polling for playability in the background.

        Returns:
            Function removing the observer
        """
        return self._emitter.on(PLAYABLE_EVENT, callback)

    # Operations

    def upload(self) -> CancelableOperation[Optional[VideoUploadResponse]]:
        """
        Start uploading the file. Must be called from a running event loop.

        Returns:
            Handle whose result is the response to the last chunk (None
            when uploads are skipped)
        """
        token = CancellationToken()
        operation_id = self._manager.operations.new_id()
        task = asyncio.get_running_loop().create_task(self._run(operation_id, token))
        operation = CancelableOperation(operation_id, token, task)
        self._manager.operations.register(operation)
        logger.debug(f"Operation {operation_id} started for {self._path.name}")
        return operation

    def cancel(self, operation_id: str) -> bool:
        """
        Cancel a running operation by id.

        Returns:
            True if the operation was running
        """
        return self._manager.operations.cancel(operation_id)

    async def _run(self, operation_id: str, token: CancellationToken) -> Optional[VideoUploadResponse]:
        if self._credential_manager is None:
            logger.info(f"No credentials configured, skipping upload of {self._path.name}")
            return None

        session = UploadSession(
            file_path=self._path,
            file_name=self._path.name,
            plan=self._planner.plan(self._file_size),
            video_id=self._credentials.video_id,
        )
        coordinator = UploadCoordinator(
            ChunkUploader(self._transport, self._credential_manager),
            Retrier(self._retry_strategy, get_logger('videouploader.retry')),
            self._emitter,
        )
        response = await coordinator.upload(session, token)
        self._video_id = session.video_id

        if self._emitter.listener_count(PLAYABLE_EVENT) and response.hls_url:
            self._spawn(self.wait_for_playable(response))

        return response

    async def wait_for_playable(self, video: VideoUploadResponse) -> VideoUploadResponse:
        """
        Poll until video is playable and notify playable observers.

        Polls indefinitely; see PlayablePoller.
        """
        return await PlayablePoller(self._transport, self._emitter).wait(video)

    def _spawn(self, coro) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._on_background_done)

    def _on_background_done(self, task: asyncio.Task) -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Playable polling failed: {error}")

    # Lifecycle

    async def close(self):
        """Stop background polling and release the HTTP session if owned."""
        for task in list(self._background):
            task.cancel()
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)

        if self._owns_manager:
            await self._manager.close()

    async def __aenter__(self) -> 'VideoUploader':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
