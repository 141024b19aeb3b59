"""
Kraken Client - Python client for the Kraken exchange REST API.

This package provides typed request builders, request signing with
strictly increasing nonces, and a generic ``{error, result}`` response
envelope for the Kraken HTTP API.
"""

from .auth import ApiCredentials, KrakenSigner, NonceSource, default_nonce_source, sign
from .builders import (
    AccountBalanceBuilder,
    CancelOrderBuilder,
    ClosedOrdersBuilder,
    OpenPositionsBuilder,
    OrderCloseTime,
    RequestBuilder,
    SpreadDataBuilder,
    TradeHistoryBuilder,
    TradeHistoryType,
    TradeVolumeBuilder,
)
from .client import KrakenClient, create_kraken_client
from .exceptions import (
    ApiError,
    AuthError,
    BuildError,
    DecodeError,
    KrakenClientError,
    TransportError,
)
from .models import (
    # Configuration
    ConnectionConfig,
    # Endpoints
    EndpointDescriptor,
    MethodType,
    # Payloads
    AccountBalance,
    CancelOrderResult,
    ClosedOrders,
    OpenPositions,
    SpreadData,
    TradeHistory,
    TradeVolume,
)
from .params import ParameterList
from .response import KrakenResult, decode_response

__all__ = [
    # Main Client
    "KrakenClient",
    "create_kraken_client",
    "ConnectionConfig",
    # Request construction
    "ParameterList",
    "RequestBuilder",
    "EndpointDescriptor",
    "MethodType",
    "AccountBalanceBuilder",
    "CancelOrderBuilder",
    "ClosedOrdersBuilder",
    "TradeHistoryBuilder",
    "TradeVolumeBuilder",
    "OpenPositionsBuilder",
    "SpreadDataBuilder",
    "OrderCloseTime",
    "TradeHistoryType",
    # Authentication
    "ApiCredentials",
    "KrakenSigner",
    "NonceSource",
    "default_nonce_source",
    "sign",
    # Responses
    "KrakenResult",
    "decode_response",
    "AccountBalance",
    "CancelOrderResult",
    "ClosedOrders",
    "TradeHistory",
    "TradeVolume",
    "OpenPositions",
    "SpreadData",
    # Errors
    "KrakenClientError",
    "BuildError",
    "AuthError",
    "DecodeError",
    "ApiError",
    "TransportError",
]
