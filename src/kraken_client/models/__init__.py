"""
Data models for Kraken client.

This package contains the endpoint descriptor, connection configuration
and the immutable payload types every endpoint's reply decodes into.
"""

from .config import ConnectionConfig
from .endpoint import EndpointDescriptor, MethodType
from .orders import (
    CancelOrderResult,
    OrderDescription,
    OrderInfo,
    ClosedOrders,
    TradeData,
    TradeHistory,
)
from .account import AccountBalance, FeeInfo, TradeVolume, PositionInfo, OpenPositions
from .market import SpreadInfo, SpreadData

__all__ = [
    # Configuration
    "ConnectionConfig",
    # Endpoints
    "EndpointDescriptor",
    "MethodType",
    # Orders
    "CancelOrderResult",
    "OrderDescription",
    "OrderInfo",
    "ClosedOrders",
    "TradeData",
    "TradeHistory",
    # Account
    "AccountBalance",
    "FeeInfo",
    "TradeVolume",
    "PositionInfo",
    "OpenPositions",
    # Market
    "SpreadInfo",
    "SpreadData",
]
