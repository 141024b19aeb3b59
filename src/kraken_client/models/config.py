"""
Configuration models for Kraken client.

Immutable configuration structures.
"""

import base64
import binascii
from dataclasses import dataclass

from ..constants import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from ..utils import validate_url


@dataclass(frozen=True)
class ConnectionConfig:
    """Configuration for Kraken client connection."""
    api_key: str
    api_secret: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_api_key()
        self._validate_api_secret()
        self._validate_base_url()
        self._validate_timeout()

    def __repr__(self) -> str:
        return (
            f"ConnectionConfig(api_key={self.api_key!r}, api_secret='***', "
            f"base_url={self.base_url!r}, timeout={self.timeout!r})"
        )

    def _validate_api_key(self):
        """Validate API key format."""
        if not self.api_key:
            raise ValueError("API key cannot be empty")

    def _validate_api_secret(self):
        """Validate API secret is base64 without echoing it."""
        if not self.api_secret:
            raise ValueError("API secret cannot be empty")

        try:
            base64.b64decode(self.api_secret, validate=True)
        except (binascii.Error, ValueError):
            raise ValueError("API secret must be base64-encoded") from None

    def _validate_base_url(self):
        if not validate_url(self.base_url):
            raise ValueError("Base URL must be a valid HTTP/HTTPS URL")

    def _validate_timeout(self):
        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")
