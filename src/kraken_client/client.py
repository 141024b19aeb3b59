"""
Kraken Client - Main orchestration module.

The client ties the pieces together:
- Request builders in builders/ produce EndpointDescriptors
- Signing and nonces are handled by auth.py
- HTTP dispatch is handled by http_client.py
- Session management is handled by session_manager.py
- Replies decode into KrakenResult envelopes via response.py
"""

import logging
import os
from typing import Dict, Iterable, Optional, Type, TypeVar, Union

from dotenv import load_dotenv

from .auth import ApiCredentials, KrakenSigner, NonceSource
from .builders import (
    AccountBalanceBuilder,
    CancelOrderBuilder,
    ClosedOrdersBuilder,
    OpenPositionsBuilder,
    RequestBuilder,
    SpreadDataBuilder,
    TradeHistoryBuilder,
    TradeVolumeBuilder,
)
from .constants import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from .exceptions import DecodeError, TransportError
from .http_client import HttpClient
from .models import (
    AccountBalance,
    CancelOrderResult,
    ClosedOrders,
    ConnectionConfig,
    EndpointDescriptor,
    OpenPositions,
    SpreadData,
    TradeHistory,
    TradeVolume,
)
from .response import KrakenResult, decode_response
from .session_manager import SessionManager
from .utils import validate_url

load_dotenv()
logger = logging.getLogger(__name__)

T = TypeVar("T")

# Payload type decoded for each endpoint when the caller does not pass one.
PAYLOAD_TYPES: Dict[str, type] = {
    AccountBalanceBuilder.ENDPOINT: AccountBalance,
    CancelOrderBuilder.ENDPOINT: CancelOrderResult,
    ClosedOrdersBuilder.ENDPOINT: ClosedOrders,
    TradeHistoryBuilder.ENDPOINT: TradeHistory,
    TradeVolumeBuilder.ENDPOINT: TradeVolume,
    OpenPositionsBuilder.ENDPOINT: OpenPositions,
    SpreadDataBuilder.ENDPOINT: SpreadData,
}


class KrakenClient:
    """
    Main Kraken client orchestrator.

    Dispatches finalized descriptors and returns decoded envelopes. API-level
    errors come back inside the KrakenResult; only build, signing, decoding
    and transport failures raise.
    """

    def __init__(
        self,
        config: Optional[ConnectionConfig] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        nonce_source: Optional[NonceSource] = None,
    ):
        """
        Initialize Kraken client.

        Args:
            config: Connection configuration with credentials. When omitted
                the client can only dispatch public endpoints.
            base_url: API root used when no config is given
            timeout: Request timeout in seconds used when no config is given
            nonce_source: Nonce generator for builders created by this client
        """
        self._config = config
        self._signer: Optional[KrakenSigner] = None

        if config is not None:
            base_url = config.base_url
            timeout = config.timeout
            self._signer = KrakenSigner(
                ApiCredentials(api_key=config.api_key, api_secret=config.api_secret),
                nonce_source=nonce_source,
            )
        elif not validate_url(base_url):
            raise ValueError("Base URL must be a valid HTTP/HTTPS URL")

        self._nonce_source = self._signer.nonce_source if self._signer else nonce_source
        self._session_manager = SessionManager(timeout)
        self._http_client = HttpClient(base_url, self._signer)
        self._closed = False

    @classmethod
    def from_env(cls) -> "KrakenClient":
        """Create client from environment variables (a ``.env`` file is honoured)."""
        config = ConnectionConfig(
            api_key=os.getenv("KRAKEN_API_KEY", ""),
            api_secret=os.getenv("KRAKEN_API_SECRET", ""),
            base_url=os.getenv("KRAKEN_BASE_URL", DEFAULT_BASE_URL),
            timeout=float(os.getenv("KRAKEN_TIMEOUT", str(DEFAULT_TIMEOUT))),
        )
        return cls(config)

    @classmethod
    def public(cls, base_url: str = DEFAULT_BASE_URL, timeout: float = DEFAULT_TIMEOUT) -> "KrakenClient":
        """Create a client without credentials for public endpoints only."""
        return cls(None, base_url=base_url, timeout=timeout)

    @property
    def has_credentials(self) -> bool:
        return self._signer is not None

    @property
    def nonce_source(self) -> Optional[NonceSource]:
        return self._nonce_source

    # Generic dispatch
    async def request(
        self,
        request: Union[RequestBuilder, EndpointDescriptor],
        payload_type: Optional[Type[T]] = None,
    ) -> KrakenResult[T]:
        """
        Dispatch a builder or descriptor and decode the reply.

        A builder is finalized (and consumed) here. The payload type
        defaults to the one registered for the endpoint.

        Raises:
            BuildError: If the builder was already finalized
            AuthError: If a private endpoint cannot be signed
            TransportError: On network failure, or a non-JSON error status
            DecodeError: If a successful reply is malformed
        """
        if self._closed:
            raise RuntimeError("Client is closed")

        descriptor = request.finish() if isinstance(request, RequestBuilder) else request
        if payload_type is None:
            payload_type = PAYLOAD_TYPES.get(descriptor.endpoint_name)

        session = await self._session_manager.create_session()
        status, body = await self._http_client.request(session, descriptor)

        try:
            result = decode_response(body, payload_type, status_code=status)
        except DecodeError as e:
            if status >= 400:
                raise TransportError(
                    f"HTTP {status} from {descriptor.url_path}",
                    status_code=status,
                    response_text=body[:200].decode("utf-8", errors="replace"),
                ) from e
            raise

        if not result.is_success:
            logger.warning(f"{descriptor.endpoint_name} returned errors: {list(result.error)}")
        return result

    # Private endpoints
    async def get_account_balance(self) -> KrakenResult[AccountBalance]:
        """Get balances for every asset held."""
        return await self.request(AccountBalanceBuilder(nonce_source=self._nonce_source))

    async def cancel_order(self, txid: str) -> KrakenResult[CancelOrderResult]:
        """Cancel an open order by transaction ID."""
        return await self.request(CancelOrderBuilder(txid, nonce_source=self._nonce_source))

    async def get_closed_orders(
        self, builder: Optional[ClosedOrdersBuilder] = None
    ) -> KrakenResult[ClosedOrders]:
        """Get closed orders, optionally filtered by a prepared builder."""
        return await self.request(builder or ClosedOrdersBuilder(nonce_source=self._nonce_source))

    async def get_trade_history(
        self, builder: Optional[TradeHistoryBuilder] = None
    ) -> KrakenResult[TradeHistory]:
        """Get trades history, optionally filtered by a prepared builder."""
        return await self.request(builder or TradeHistoryBuilder(nonce_source=self._nonce_source))

    async def get_trade_volume(
        self, pairs: Optional[Iterable[str]] = None, fee_info: bool = False
    ) -> KrakenResult[TradeVolume]:
        """Get 30-day trade volume and, if requested, fee tiers for pairs."""
        builder = TradeVolumeBuilder(nonce_source=self._nonce_source)
        if pairs:
            builder.with_pair_list(pairs)
        if fee_info:
            builder.with_fee_info(True)
        return await self.request(builder)

    async def get_open_positions(
        self, txids: Iterable[str], docalcs: bool = False
    ) -> KrakenResult[OpenPositions]:
        """Get open margin positions for the given transaction IDs."""
        builder = OpenPositionsBuilder.from_list(txids, nonce_source=self._nonce_source)
        if docalcs:
            builder.do_calcs(True)
        return await self.request(builder)

    # Public endpoints
    async def get_spread_data(self, pair: str, since: Optional[int] = None) -> KrakenResult[SpreadData]:
        """Get recent spreads for an asset pair."""
        builder = SpreadDataBuilder(pair)
        if since is not None:
            builder.since(since)
        return await self.request(builder)

    async def close(self) -> None:
        """Close client and cleanup resources."""
        if not self._closed:
            await self._session_manager.close_session()
            self._closed = True
            logger.info("Kraken client closed")

    # Context manager support
    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()


def create_kraken_client(
    api_key: str,
    api_secret: str,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
    nonce_source: Optional[NonceSource] = None,
) -> KrakenClient:
    """
    Factory function to create Kraken client with common configuration.

    Args:
        api_key: API key for authentication
        api_secret: Base64-encoded API secret
        base_url: Base URL for API endpoints
        timeout: Request timeout in seconds
        nonce_source: Optional nonce generator (default: process-wide)

    Returns:
        Configured KrakenClient instance
    """
    config = ConnectionConfig(
        api_key=api_key,
        api_secret=api_secret,
        base_url=base_url,
        timeout=timeout,
    )

    return KrakenClient(config, nonce_source=nonce_source)
