"""
Authentication and signing utilities for Kraken API

Private requests carry a strictly increasing nonce and an ``API-Sign``
header computed as::

    base64(HMAC-SHA512(base64decode(secret), path + SHA256(nonce + post_data)))
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional
import base64
import binascii
import hashlib
import hmac
import threading
import time

from .constants import API_KEY_HEADER, API_SIGN_HEADER
from .exceptions import AuthError
from .models.endpoint import EndpointDescriptor


@dataclass(frozen=True)
class ApiCredentials:
    """Container for API credentials"""
    api_key: str
    api_secret: str

    def __repr__(self) -> str:
        return f"ApiCredentials(api_key={self.api_key!r}, api_secret='***')"


def _wall_clock_micros() -> int:
    return time.time_ns() // 1000


class NonceSource:
    """
    Strictly increasing nonce generator.

    Values come from a microsecond wall clock so they never regress across
    process restarts. If the clock does not advance between two calls (or
    steps backwards) the previous value is incremented instead.

    Thread-safe: concurrent callers always observe distinct, increasing values.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        """
        Initialize the nonce source.

        Args:
            clock: Callable returning the current time as an integer
                (default: wall clock in microseconds). Tests inject a
                fixed or stepping clock here.
        """
        self._clock = clock or _wall_clock_micros
        self._last = 0
        self._lock = threading.Lock()

    def next(self) -> str:
        """Return the next nonce as a digit string."""
        with self._lock:
            value = max(int(self._clock()), self._last + 1)
            self._last = value
        return str(value)


_default_source: Optional[NonceSource] = None
_default_source_lock = threading.Lock()


def default_nonce_source() -> NonceSource:
    """Process-wide nonce source, created on first use."""
    global _default_source
    if _default_source is None:
        with _default_source_lock:
            if _default_source is None:
                _default_source = NonceSource()
    return _default_source


def sign(path: str, nonce: str, post_data: str, secret_key: str) -> str:
    """
    Compute the ``API-Sign`` value for a private request.

    Args:
        path: URI path, e.g. ``/0/private/Balance``
        nonce: Nonce embedded in ``post_data``
        post_data: URL-encoded POST body
        secret_key: Base64-encoded API secret

    Returns:
        Base64-encoded HMAC-SHA512 signature

    Raises:
        AuthError: If the secret is not valid base64
    """
    try:
        key = base64.b64decode(secret_key, validate=True)
    except (binascii.Error, ValueError, TypeError):
        raise AuthError("API secret is not valid base64") from None

    digest = hashlib.sha256((nonce + post_data).encode("utf-8")).digest()
    mac = hmac.new(key, path.encode("utf-8") + digest, hashlib.sha512)
    del key
    return base64.b64encode(mac.digest()).decode("ascii")


class KrakenSigner:
    """
    Handles request signing for Kraken API authentication.

    Uses HMAC-SHA512 over the request path and the SHA256 of nonce + body.
    """

    def __init__(self, credentials: ApiCredentials, nonce_source: Optional[NonceSource] = None):
        """
        Initialize the signer with API credentials.

        Args:
            credentials: API credentials containing key and base64 secret
            nonce_source: Nonce generator for requests signed with these
                credentials (default: the process-wide source)
        """
        self.credentials = credentials
        self.nonce_source = nonce_source or default_nonce_source()

    def nonce(self) -> str:
        """Next nonce for these credentials."""
        return self.nonce_source.next()

    def sign(self, path: str, nonce: str, post_data: str) -> str:
        """Sign a request with this signer's secret."""
        return sign(path, nonce, post_data, self.credentials.api_secret)

    def get_auth_headers(self, descriptor: EndpointDescriptor) -> Dict[str, str]:
        """
        Get authentication headers for a private endpoint descriptor.

        Args:
            descriptor: Finalized private endpoint descriptor

        Returns:
            Dictionary containing ``API-Key`` and ``API-Sign``

        Raises:
            AuthError: If the descriptor is public or carries no nonce
        """
        if not descriptor.is_private:
            raise AuthError(f"Endpoint {descriptor.endpoint_name} is public and is not signed")

        nonce = descriptor.nonce
        if nonce is None:
            raise AuthError(f"Private endpoint {descriptor.endpoint_name} has no nonce")

        signature = self.sign(descriptor.url_path, nonce, descriptor.encoded_params())
        return {
            API_KEY_HEADER: self.credentials.api_key,
            API_SIGN_HEADER: signature,
        }

    def validate_credentials(self) -> bool:
        """
        Validate that the API key is present and the secret decodes.

        Returns:
            True if credentials are valid, False otherwise
        """
        if not self.credentials.api_key or not self.credentials.api_secret:
            return False
        try:
            base64.b64decode(self.credentials.api_secret, validate=True)
        except (binascii.Error, ValueError):
            return False
        return True
