"""
Async HTTP transport.

Thin aiohttp wrapper: issues one request and returns status and body.
Transport-level failures are mapped to UploadError so the retry layer
can classify them; HTTP error statuses are returned, not raised. Bodies
are decoded leniently: gateway error pages are not always valid text.
"""
import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import aiohttp

from .errors import UploadError
from .session import SessionManager
from ..logging import get_logger


@dataclass(frozen=True)
class TransportResponse:
    """Status and decoded body of an HTTP response."""
    status: int
    text: str
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status < 400


class HttpTransport:
    """
    Asynchronous HTTP transport backed by aiohttp.

    Example:
        >>> async with HttpTransport() as transport:
        ...     response = await transport.get('https://example.com')
    """

    def __init__(self, session_manager: Optional[SessionManager] = None):
        self._manager = session_manager or SessionManager()
        self._owns_manager = session_manager is None
        self._logger = get_logger('videouploader.transport')
        self._logger.setLevel(self._manager.config.log_level)

    @property
    def session_manager(self) -> SessionManager:
        return self._manager

    async def __aenter__(self) -> 'HttpTransport':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the HTTP session if this transport created it."""
        if self._owns_manager:
            await self._manager.close()

    async def post(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        data: Any = None,
        json_body: Any = None
    ) -> TransportResponse:
        """
        Issue a POST request.

        Args:
            url: Target URL
            headers: Request headers
            data: Body (bytes, aiohttp.FormData, payload)
            json_body: JSON-serializable body, used instead of data

        Returns:
            Response status and text

        Raises:
            UploadError: NETWORK_ERROR or NETWORK_TIMEOUT
        """
        return await self._request('POST', url, headers=headers, data=data, json=json_body)

    async def get(self, url: str, headers: Optional[Dict[str, str]] = None) -> TransportResponse:
        """Issue a GET request."""
        return await self._request('GET', url, headers=headers)

    async def _request(self, method: str, url: str, **kwargs) -> TransportResponse:
        session = await self._manager.get_async_session()
        proxy = self._manager.config.proxy
        if proxy is not None:
            kwargs['proxy'] = proxy.to_aiohttp_proxy()

        self._logger.debug(f"{method} {url}")
        try:
            async with session.request(method, url, **kwargs) as response:
                text = await response.text(errors='replace')
                self._logger.debug(f"{method} {url} -> {response.status} ({len(text)} chars)")
                return TransportResponse(
                    status=response.status,
                    text=text,
                    headers=dict(response.headers)
                )
        except asyncio.TimeoutError:
            self._logger.warning(f"{method} {url} timed out")
            raise UploadError.network_timeout()
        except aiohttp.ClientError as e:
            self._logger.warning(f"Network error on {method} {url}: {e}")
            raise UploadError.network_error(str(e)) from e
