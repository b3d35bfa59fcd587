"""
Credentials.

The three authentication modes are resolved once into a strategy object;
CredentialManager owns the active one and performs token refresh.
"""
import base64
import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional, TYPE_CHECKING
from urllib.parse import quote

from ..errors import parse_error_response
from ...exceptions import ConfigurationError
from ...logging import get_logger

if TYPE_CHECKING:
    from ..transport import HttpTransport

logger = get_logger('videouploader.auth')

ORIGIN_NAME_PATTERN = re.compile(r'^[A-Za-z0-9_-]{1,50}$')
ORIGIN_VERSION_PATTERN = re.compile(r'^\d{1,3}(\.\d{1,3}(\.\d{1,3})?)?$')


@dataclass(frozen=True)
class Origin:
    """Name and version of an application or SDK built on this client."""
    name: str
    version: str

    def validate(self, kind: str) -> None:
        """
        Check name and version formats.

        Args:
            kind: 'application' or 'sdk', used in error messages

        Raises:
            ConfigurationError: If a value is missing or malformed
        """
        if not self.name:
            raise ConfigurationError(f"{kind} name is required")
        if not self.version:
            raise ConfigurationError(f"{kind} version is required")
        if not ORIGIN_NAME_PATTERN.match(self.name):
            raise ConfigurationError(
                f"Invalid {kind} name value. Allowed characters: A-Z, a-z, 0-9, '-', '_'. "
                f"Max length: 50."
            )
        if not ORIGIN_VERSION_PATTERN.match(self.version):
            raise ConfigurationError(
                f"Invalid {kind} version value. "
                f"The version should match the xxx[.yyy][.zzz] pattern."
            )

    def header_value(self) -> str:
        return f"{self.name}:{self.version}"


class Credentials(ABC):
    """Authentication mode of an upload session."""

    video_id: Optional[str] = None

    @abstractmethod
    def upload_endpoint(self, base_url: str) -> str:
        """URL every chunk is posted to."""
        pass

    def build_headers(self) -> Dict[str, str]:
        """Authorization headers of the mode."""
        return {}

    @property
    def can_refresh(self) -> bool:
        return False


class UploadTokenCredentials(Credentials):
    """Delegated upload token carried in the query string."""

    def __init__(self, upload_token: str, video_id: Optional[str] = None):
        self.upload_token = upload_token
        self.video_id = video_id or None

    def upload_endpoint(self, base_url: str) -> str:
        return f"{base_url}/upload?token={quote(self.upload_token, safe='')}"


class _VideoSourceCredentials(Credentials):
    """Modes that upload to an existing video's source endpoint."""

    def __init__(self, video_id: Optional[str]):
        if not video_id:
            raise ConfigurationError("'video_id' is missing")
        self.video_id = video_id

    def upload_endpoint(self, base_url: str) -> str:
        return f"{base_url}/videos/{quote(self.video_id, safe='')}/source"


class AccessTokenCredentials(_VideoSourceCredentials):
    """Bearer access token, optionally refreshable."""

    def __init__(self, access_token: str, video_id: Optional[str], refresh_token: Optional[str] = None):
        super().__init__(video_id)
        self.access_token = access_token
        self.refresh_token = refresh_token or None

    def build_headers(self) -> Dict[str, str]:
        return {'Authorization': f"Bearer {self.access_token}"}

    @property
    def can_refresh(self) -> bool:
        return self.refresh_token is not None


class ApiKeyCredentials(_VideoSourceCredentials):
    """API key sent as HTTP Basic user name with an empty password."""

    def __init__(self, api_key: str, video_id: Optional[str]):
        super().__init__(video_id)
        self.api_key = api_key

    def build_headers(self) -> Dict[str, str]:
        encoded = base64.b64encode(f"{self.api_key}:".encode()).decode()
        return {'Authorization': f"Basic {encoded}"}


def resolve_credentials(
    upload_token: Optional[str] = None,
    access_token: Optional[str] = None,
    refresh_token: Optional[str] = None,
    api_key: Optional[str] = None,
    video_id: Optional[str] = None,
    allow_missing: bool = False
) -> Optional[Credentials]:
    """
    Pick the authentication mode from the supplied values.

    Exactly one of upload_token, access_token or api_key must be given.

    Args:
        allow_missing: Return None instead of failing when no credential
            is supplied (uploads are skipped in that case)

    Raises:
        ConfigurationError: On zero or several credentials, a missing
            video_id, or a refresh token without access token
    """
    supplied = [
        name for name, value in (
            ('upload_token', upload_token),
            ('access_token', access_token),
            ('api_key', api_key),
        ) if value
    ]

    if len(supplied) > 1:
        raise ConfigurationError(
            f"Only one of uploadToken, accessToken or apiKey may be provided (got {', '.join(supplied)})"
        )
    if refresh_token and not access_token:
        raise ConfigurationError("'refresh_token' requires an access token")

    if upload_token:
        return UploadTokenCredentials(upload_token, video_id)
    if access_token:
        return AccessTokenCredentials(access_token, video_id, refresh_token)
    if api_key:
        return ApiKeyCredentials(api_key, video_id)

    if allow_missing:
        return None
    raise ConfigurationError("You must provide either an accessToken, an uploadToken or an API key")


class CredentialManager:
    """
    Holds the active credentials of a session and refreshes them.

    Headers are rebuilt from the current credentials on every call, so a
    refresh is visible to the next request.
    """

    REFRESH_PATH = '/auth/refresh'

    def __init__(
        self,
        credentials: Credentials,
        transport: 'HttpTransport',
        base_url: str,
        base_headers: Optional[Dict[str, str]] = None
    ):
        self._credentials = credentials
        self._transport = transport
        self._base_url = base_url.rstrip('/')
        self._base_headers = dict(base_headers or {})

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def can_refresh(self) -> bool:
        return self._credentials.can_refresh

    @property
    def upload_endpoint(self) -> str:
        return self._credentials.upload_endpoint(self._base_url)

    @property
    def refresh_url(self) -> str:
        return f"{self._base_url}{self.REFRESH_PATH}"

    def headers(self) -> Dict[str, str]:
        """Session headers plus the current Authorization header."""
        return {**self._base_headers, **self._credentials.build_headers()}

    async def refresh(self) -> None:
        """
        Exchange the refresh token for a new access token.

        Raises:
            UploadError: The parsed server error, or a transport error
            RuntimeError: If the credentials are not refreshable
        """
        credentials = self._credentials
        if not isinstance(credentials, AccessTokenCredentials) or not credentials.can_refresh:
            raise RuntimeError("Credentials cannot be refreshed")

        logger.info("Refreshing access token")
        response = await self._transport.post(
            self.refresh_url,
            headers={'Content-Type': 'application/json', **self._base_headers},
            data=json.dumps({'refreshToken': credentials.refresh_token})
        )
        if response.status >= 400:
            logger.error(f"Token refresh failed with HTTP {response.status}")
            raise parse_error_response(response.status, response.text)

        tokens = self._parse_tokens(response.text)
        if tokens is None:
            logger.error("Token refresh response is missing tokens")
            raise parse_error_response(response.status, response.text)

        # Swap both values together, never one without the other
        credentials.access_token, credentials.refresh_token = tokens
        logger.debug("Access token refreshed")

    @staticmethod
    def _parse_tokens(text: str) -> Optional[tuple]:
        try:
            body = json.loads(text)
        except ValueError:
            return None
        if not isinstance(body, dict):
            return None
        access_token = body.get('access_token')
        refresh_token = body.get('refresh_token')
        if not access_token or not refresh_token:
            return None
        return access_token, refresh_token
