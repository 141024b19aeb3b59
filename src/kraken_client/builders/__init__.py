"""
Per-endpoint request builders.
"""

from .base import ListParameterMixin, RequestBuilder
from .private import (
    AccountBalanceBuilder,
    CancelOrderBuilder,
    ClosedOrdersBuilder,
    OpenPositionsBuilder,
    OrderCloseTime,
    TradeHistoryBuilder,
    TradeHistoryType,
    TradeVolumeBuilder,
)
from .public import SpreadDataBuilder

__all__ = [
    "RequestBuilder",
    "ListParameterMixin",
    # Private
    "AccountBalanceBuilder",
    "CancelOrderBuilder",
    "ClosedOrdersBuilder",
    "TradeHistoryBuilder",
    "TradeVolumeBuilder",
    "OpenPositionsBuilder",
    "OrderCloseTime",
    "TradeHistoryType",
    # Public
    "SpreadDataBuilder",
]
