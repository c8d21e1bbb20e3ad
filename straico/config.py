"""
Straico SDK - Client Configuration

Connection settings shared by the sync and async clients.

Environment variables:
    STRAICO_API_KEY: API key (required unless passed explicitly)
    STRAICO_BASE_URL: Base URL, defaults to https://api.straico.com/v1
    STRAICO_TIMEOUT: Request timeout in seconds, defaults to 30
"""

import os
from dataclasses import dataclass
from typing import Optional, Union

import httpx

from .errors import ConfigurationError


DEFAULT_BASE_URL = "https://api.straico.com/v1"
DEFAULT_TIMEOUT = 30.0

ENV_API_KEY = "STRAICO_API_KEY"
ENV_BASE_URL = "STRAICO_BASE_URL"
ENV_TIMEOUT = "STRAICO_TIMEOUT"


@dataclass(frozen=True)
class ClientConfig:
    """
    Validated connection settings.

    Immutable once constructed. The base URL is stored without
    trailing slashes.
    """
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        if not self.api_key:
            raise ConfigurationError(
                f"Straico API key is required. Set {ENV_API_KEY} or pass api_key."
            )
        if not self.base_url:
            raise ConfigurationError("Straico Base URL is required.")
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)):
            raise ConfigurationError(f"Timeout must be a number, got {self.timeout!r}")
        if self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be positive, got {self.timeout!r}")

        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        if not self.base_url:
            raise ConfigurationError("Straico Base URL is required.")

    @classmethod
    def resolve(
        cls,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[Union[int, float]] = None,
    ) -> "ClientConfig":
        """
        Build a config, filling values left as None from the environment.

        Explicitly passed values (including empty strings) always win.
        """
        if api_key is None:
            api_key = os.getenv(ENV_API_KEY, "")
        if base_url is None:
            base_url = os.getenv(ENV_BASE_URL) or DEFAULT_BASE_URL
        if timeout is None:
            timeout = _timeout_from_env()

        return cls(api_key=api_key, base_url=base_url, timeout=timeout)

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a config from STRAICO_* environment variables."""
        return cls.resolve()

    def host_url(self) -> str:
        """
        Scheme and authority of the base URL, without any path.

        Used for endpoints that live outside the versioned path prefix.
        """
        try:
            url = httpx.URL(self.base_url)
        except httpx.InvalidURL as e:
            raise ConfigurationError(
                f"Could not determine base host from {self.base_url!r}: {e}"
            ) from e

        if not url.scheme or not url.host:
            raise ConfigurationError(
                f"Could not determine base host from {self.base_url!r}"
            )
        return f"{url.scheme}://{url.netloc.decode('ascii')}"

    def __repr__(self) -> str:
        # Keep the key out of logs and tracebacks
        return (
            f"ClientConfig(api_key='***', base_url={self.base_url!r}, "
            f"timeout={self.timeout!r})"
        )


def _timeout_from_env() -> float:
    raw = os.getenv(ENV_TIMEOUT)
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{ENV_TIMEOUT} must be a number, got {raw!r}") from e
