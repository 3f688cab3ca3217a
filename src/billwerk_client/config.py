"""
Configuration for billwerk_client.
"""
import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union
from urllib.parse import urlparse

from .auth import _mask_sensitive

logger = logging.getLogger("billwerk_client.config")

DEFAULT_BASE_URL = "https://api.reepay.com/v1"
DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass
class TimeoutConfig:
    """Timeout configuration in seconds."""

    connect: float = DEFAULT_TIMEOUT_SECONDS
    read: float = DEFAULT_TIMEOUT_SECONDS
    write: float = DEFAULT_TIMEOUT_SECONDS
    pool: float = DEFAULT_TIMEOUT_SECONDS


DEFAULT_TIMEOUT = TimeoutConfig()


@dataclass
class ClientConfig:
    """Client configuration.

    - api_key: private API key, sent as the Basic auth username
    - base_url: API root; endpoints are appended verbatim
    - timeout: TimeoutConfig, or a single value in seconds for every phase
    - httpx_client: custom httpx.Client/AsyncClient (transport override)
    - debug: pretty-print requests and responses to the terminal
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: Union[TimeoutConfig, float, None] = None
    httpx_client: Optional[Any] = None
    debug: bool = False

    def __repr__(self) -> str:
        """Safe repr that masks the API key."""
        return (
            f"ClientConfig(api_key={_mask_sensitive(self.api_key)!r}, "
            f"base_url={self.base_url!r}, "
            f"timeout={self.timeout!r}, "
            f"httpx_client={self.httpx_client!r}, "
            f"debug={self.debug!r})"
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """Build a config from BILLWERK_* environment variables.

        - BILLWERK_API_KEY (required)
        - BILLWERK_BASE_URL (default: DEFAULT_BASE_URL)
        - BILLWERK_TIMEOUT in seconds (default: DEFAULT_TIMEOUT_SECONDS)
        - BILLWERK_DEBUG=1 to enable request/response printing
        """
        env = os.environ if environ is None else environ

        timeout: Optional[float] = None
        raw_timeout = env.get("BILLWERK_TIMEOUT", "")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ValueError(f"Invalid BILLWERK_TIMEOUT: {raw_timeout}") from e

        return cls(
            api_key=env.get("BILLWERK_API_KEY", ""),
            base_url=env.get("BILLWERK_BASE_URL") or DEFAULT_BASE_URL,
            timeout=timeout,
            debug=env.get("BILLWERK_DEBUG", "").lower() in ("1", "true", "yes"),
        )


@dataclass(frozen=True)
class ResolvedConfig:
    """Resolved client configuration with defaults applied."""

    api_key: str
    base_url: str
    timeout: TimeoutConfig
    httpx_client: Optional[Any]
    debug: bool

    def __repr__(self) -> str:
        return (
            f"ResolvedConfig(api_key={_mask_sensitive(self.api_key)!r}, "
            f"base_url={self.base_url!r}, timeout={self.timeout!r}, "
            f"debug={self.debug!r})"
        )


def normalize_timeout(timeout: Union[TimeoutConfig, float, None]) -> TimeoutConfig:
    """Normalize timeout config."""
    if timeout is None:
        return DEFAULT_TIMEOUT
    if isinstance(timeout, (int, float)):
        return TimeoutConfig(connect=timeout, read=timeout, write=timeout, pool=timeout)
    return timeout


def validate_config(config: ClientConfig) -> None:
    """Validate client configuration."""
    if not config.api_key:
        raise ValueError("api_key is required")

    if not config.base_url:
        raise ValueError("base_url is required")

    try:
        parsed = urlparse(config.base_url)
    except ValueError as e:
        raise ValueError(f"Invalid base_url: {config.base_url}") from e
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Invalid base_url: {config.base_url}")

    timeout = normalize_timeout(config.timeout)
    for phase in ("connect", "read", "write", "pool"):
        if getattr(timeout, phase) < 0:
            raise ValueError(f"timeout.{phase} must be >= 0")

    if not config.base_url.startswith("https://"):
        logger.warning(
            f"ClientConfig: base_url {config.base_url} is not HTTPS; "
            f"credentials will be sent in clear text"
        )


def resolve_config(config: ClientConfig) -> ResolvedConfig:
    """Resolve client configuration with defaults."""
    validate_config(config)

    return ResolvedConfig(
        api_key=config.api_key,
        base_url=config.base_url,
        timeout=normalize_timeout(config.timeout),
        httpx_client=config.httpx_client,
        debug=config.debug,
    )


# Construction options, applied in order by the factory functions
ConfigOption = Callable[[ClientConfig], None]


def with_http_client(client: Any) -> ConfigOption:
    """Use a custom httpx client (and thereby its transport) for all calls."""

    def apply(config: ClientConfig) -> None:
        config.httpx_client = client

    return apply


def with_timeout(timeout: Union[TimeoutConfig, float]) -> ConfigOption:
    """Override the default timeout of the client built by the library."""

    def apply(config: ClientConfig) -> None:
        config.timeout = timeout

    return apply


def with_base_url(base_url: str) -> ConfigOption:
    """Point the client at a different API root (e.g. a test server)."""

    def apply(config: ClientConfig) -> None:
        config.base_url = base_url

    return apply


def with_debug(enabled: bool = True) -> ConfigOption:
    """Pretty-print every request and response."""

    def apply(config: ClientConfig) -> None:
        config.debug = enabled

    return apply


def apply_options(config: ClientConfig, *options: ConfigOption) -> ClientConfig:
    """Apply options to config in order and return it."""
    for option in options:
        option(config)
    return config
