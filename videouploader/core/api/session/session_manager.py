"""Session manager for HTTP connections and running operations."""
from typing import Optional

import aiohttp

from ..config import APIConfig
from .operation_registry import OperationRegistry
from .session_factory import SessionFactory


class SessionManager:
    """
    Owns the shared aiohttp session and the operation registry.
    
    Several uploaders may share one manager so that their operations can
    be cancelled from a single place.
    """
    
    def __init__(self, config: Optional[APIConfig] = None):
        """Initializes session manager."""
        self.config = config or APIConfig.default()
        self.operations = OperationRegistry()
        self._async_session: Optional[aiohttp.ClientSession] = None
    
    async def get_async_session(self) -> aiohttp.ClientSession:
        """Gets or creates asynchronous session."""
        if self._async_session is None or self._async_session.closed:
            self._async_session = SessionFactory.create_async_session(self.config)
        return self._async_session
    
    async def close(self):
        """Cancels running operations and closes the HTTP session."""
        self.operations.cancel_all()
        
        if self._async_session and not self._async_session.closed:
            await self._async_session.close()
        self._async_session = None
