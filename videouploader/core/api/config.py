"""
API configuration module.

Dataclass configuration for the upload client: target host, HTTP session
settings and retry policy.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import ssl


DEFAULT_API_HOST = 'ws.api.video'
DEFAULT_RETRIES = 6


@dataclass
class ProxyConfig:
    """HTTP(S) proxy used for every request."""
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def to_aiohttp_proxy(self) -> Optional[str]:
        """Proxy URL with credentials inlined, as aiohttp expects it."""
        if not self.url:
            return None

        if self.username and self.password and '://' in self.url:
            scheme, host = self.url.split('://', 1)
            return f"{scheme}://{self.username}:{self.password}@{host}"

        return self.url


@dataclass
class SSLConfig:
    """TLS verification settings."""
    verify: bool = True
    ca_file: Optional[str] = None

    def create_ssl_context(self):
        """Return an SSLContext, or False to disable verification."""
        if not self.verify:
            return False

        context = ssl.create_default_context()
        if self.ca_file:
            context.load_verify_locations(self.ca_file)
        return context


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.

    Chunks can be up to 128 MiB, so the total timeout is generous and the
    read timeout bounds a stalled connection instead.
    """
    total: Optional[float] = None
    connect: float = 30.0
    sock_read: float = 300.0

    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read
        )


@dataclass
class RetryConfig:
    """
    Retry configuration for the default retry strategy.

    The delay grows quadratically: base + step * n * (n + 1) milliseconds
    for retry number n (0-based).
    """
    max_retries: int = DEFAULT_RETRIES
    base_delay_ms: int = 200
    step_ms: int = 2000

    def calculate_delay(self, retry_count: int) -> int:
        """Delay in milliseconds before retry number retry_count."""
        return int(self.base_delay_ms + self.step_ms * retry_count * (retry_count + 1))


@dataclass
class APIConfig:
    """
    Complete client configuration.

    Centralizes every option of the upload client. Create a modified copy
    with the classmethod helpers or by passing keyword arguments.
    """
    api_host: str = DEFAULT_API_HOST
    scheme: str = 'https'

    user_agent: str = 'videouploader'

    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)

    extra_headers: Dict[str, str] = field(default_factory=dict)

    log_level: int = 20  # logging.INFO

    # Single upload stream per operation, a small pool is enough
    limit_per_host: int = 4

    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def sandbox(cls, **kwargs) -> 'APIConfig':
        """Configuration targeting the sandbox environment."""
        return cls(api_host='sandbox.api.video', **kwargs)

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.api_host}"

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        return {
            'headers': {'User-Agent': self.user_agent, **self.extra_headers},
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
