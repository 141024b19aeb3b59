# -*- coding: utf-8 -*-
"""
Shared fixtures and utilities for testing Kraken client.
"""

import itertools
import json

import aiohttp
import pytest
from unittest.mock import AsyncMock, MagicMock, Mock
from typing import Any, Dict

from kraken_client.auth import ApiCredentials, KrakenSigner, NonceSource
from kraken_client.client import KrakenClient
from kraken_client.models import ConnectionConfig


# Credentials from the exchange's published signing example
TEST_API_KEY = "test-api-key-0123456789abcdef"
TEST_API_SECRET = (
    "kQH5HW/8p1uGOVjbgWA7FunAmGO8lsSUXNsu3eow76sz84Q18fWxnyRzBHCd3pd5nE9qa99HAZtuZuj6F1huXg=="
)
TEST_BASE_URL = "https://test-api.example.com"


@pytest.fixture
def api_credentials() -> ApiCredentials:
    """Valid API credentials."""
    return ApiCredentials(api_key=TEST_API_KEY, api_secret=TEST_API_SECRET)


@pytest.fixture
def stepping_nonce_source() -> NonceSource:
    """Nonce source driven by a deterministic clock: 1000, 1001, 1002, ..."""
    counter = itertools.count(1000)
    return NonceSource(clock=lambda: next(counter))


@pytest.fixture
def frozen_nonce_source() -> NonceSource:
    """Nonce source whose clock never advances."""
    return NonceSource(clock=lambda: 5000)


@pytest.fixture
def signer(api_credentials, stepping_nonce_source) -> KrakenSigner:
    return KrakenSigner(api_credentials, nonce_source=stepping_nonce_source)


@pytest.fixture
def connection_config() -> ConnectionConfig:
    """Connection config pointing at a test host."""
    return ConnectionConfig(
        api_key=TEST_API_KEY,
        api_secret=TEST_API_SECRET,
        base_url=TEST_BASE_URL,
        timeout=10.0,
    )


@pytest.fixture
def kraken_client(connection_config, stepping_nonce_source) -> KrakenClient:
    """Authenticated client with a deterministic nonce source."""
    return KrakenClient(connection_config, nonce_source=stepping_nonce_source)


# Mock response data
@pytest.fixture
def cancel_order_body() -> bytes:
    return b'{"error":[],"result":{"count":3,"pending":0}}'


@pytest.fixture
def invalid_arguments_body() -> bytes:
    return b'{"error":["EGeneral:Invalid arguments"],"result":null}'


@pytest.fixture
def order_info_data() -> Dict[str, Any]:
    """A closed order as returned by the ClosedOrders endpoint."""
    return {
        "refid": None,
        "userref": 0,
        "status": "closed",
        "reason": None,
        "opentm": 1688666559.8974,
        "closetm": 1688666559.9086,
        "starttm": 0,
        "expiretm": 0,
        "descr": {
            "pair": "XBTUSD",
            "type": "buy",
            "ordertype": "limit",
            "price": "30010.0",
            "price2": "0",
            "leverage": "none",
            "order": "buy 0.00100000 XBTUSD @ limit 30010.0",
            "close": "",
        },
        "vol": "0.00100000",
        "vol_exec": "0.00100000",
        "cost": "27.9",
        "fee": "0.0",
        "price": "27929.3",
        "stopprice": "0.00000",
        "limitprice": "0.00000",
        "misc": "",
        "oflags": "fciq",
        "trades": ["TZX2WP-XSEOP-FP7WYR"],
        "some_future_field": "ignored",
    }


@pytest.fixture
def trade_data() -> Dict[str, Any]:
    return {
        "ordertxid": "OQCLML-BW3P3-BUCMWZ",
        "postxid": "TKH2SE-M7IF5-CFI7LT",
        "pair": "XXBTZUSD",
        "time": 1688667796.8802,
        "type": "buy",
        "ordertype": "limit",
        "price": "30010.00000",
        "cost": "600.20000",
        "fee": "0.00000",
        "vol": "0.02000000",
        "margin": "0.00000",
        "misc": "",
    }


@pytest.fixture
def position_data() -> Dict[str, Any]:
    return {
        "ordertxid": "OQCLML-BW3P3-BUCMWZ",
        "posstatus": "open",
        "pair": "XXBTZUSD",
        "time": 1605280097.8294,
        "type": "buy",
        "ordertype": "limit",
        "cost": "104610.52842",
        "fee": "289.06565",
        "vol": "8.82412861",
        "vol_closed": "0.20200000",
        "margin": "20922.10568",
        "value": "258797.5",
        "net": "+154186.9728",
        "terms": "0.0100% per 4 hours",
        "misc": "",
        "oflags": "",
    }


def envelope(result: Any = None, error: Any = ()) -> bytes:
    """Encode a reply body the way the exchange sends it."""
    return json.dumps({"error": list(error), "result": result}).encode("utf-8")


def make_mock_session(status: int = 200, body: bytes = b'{"error":[],"result":{}}') -> Mock:
    """Mock aiohttp ClientSession whose request() yields one canned response."""
    response = Mock()
    response.status = status
    response.read = AsyncMock(return_value=body)

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=False)

    session = Mock(spec=aiohttp.ClientSession)
    session.request = Mock(return_value=context)
    session.close = AsyncMock()
    session.closed = False
    return session
