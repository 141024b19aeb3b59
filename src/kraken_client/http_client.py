"""
HTTP client for Kraken API.

Turns an EndpointDescriptor into exactly one HTTP call: GET with a query
string for public endpoints, signed form-encoded POST for private ones.
Retries are left to the caller, since a replayed nonce is rejected.
"""

import asyncio
import logging
from typing import Dict, Optional, Tuple

import aiohttp
from aiohttp import ClientSession

from .auth import KrakenSigner
from .constants import DEFAULT_BASE_URL, FORM_CONTENT_TYPE
from .exceptions import AuthError, TransportError
from .models.endpoint import EndpointDescriptor

logger = logging.getLogger(__name__)


class HttpClient:
    """HTTP client specialized for Kraken API interactions."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        signer: Optional[KrakenSigner] = None,
    ):
        """
        Initialize HTTP client.

        Args:
            base_url: API root, e.g. ``https://api.kraken.com``
            signer: Signer for private endpoints; None restricts the client
                to public endpoints
        """
        self._base_url = base_url.rstrip("/")
        self._signer = signer

    @property
    def base_url(self) -> str:
        return self._base_url

    def prepare(self, descriptor: EndpointDescriptor) -> Dict[str, object]:
        """
        Build the keyword arguments for ``ClientSession.request``.

        Raises:
            AuthError: If the descriptor is private and no signer is configured
        """
        request_kwargs: Dict[str, object] = {
            "method": descriptor.http_method,
            "url": descriptor.url(self._base_url),
        }

        if descriptor.is_private:
            if self._signer is None:
                raise AuthError(
                    f"Private endpoint {descriptor.endpoint_name} requires API credentials"
                )
            headers = self._signer.get_auth_headers(descriptor)
            headers["Content-Type"] = FORM_CONTENT_TYPE
            request_kwargs["headers"] = headers
            request_kwargs["data"] = descriptor.encoded_params()
        else:
            params = descriptor.wire_params()
            if params:
                request_kwargs["params"] = params

        return request_kwargs

    async def request(
        self, session: ClientSession, descriptor: EndpointDescriptor
    ) -> Tuple[int, bytes]:
        """
        Execute a single HTTP request for a descriptor.

        Returns:
            Tuple of (HTTP status, raw response body)

        Raises:
            AuthError: If a private descriptor cannot be signed
            TransportError: On network failure
        """
        request_kwargs = self.prepare(descriptor)

        try:
            async with session.request(**request_kwargs) as response:
                body = await response.read()
                return response.status, body
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Request to {descriptor.url_path} failed: {e}")
            raise TransportError(f"Request to {descriptor.url_path} failed: {e}") from e
