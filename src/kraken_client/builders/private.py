"""
Request builders for private (authenticated) Kraken endpoints.

Every builder here injects a nonce when finalized.
"""

from enum import Enum
from typing import Iterable, Optional

from ..auth import NonceSource
from ..exceptions import BuildError
from ..models.endpoint import MethodType
from .base import ListParameterMixin, RequestBuilder


class OrderCloseTime(Enum):
    """Which timestamp closed-order queries filter on."""
    OPEN = "open"
    CLOSE = "close"
    BOTH = "both"


class TradeHistoryType(Enum):
    """Trade history filter."""
    ALL = "all"
    ANY_POSITION = "any position"
    CLOSED_POSITION = "closed position"
    CLOSING_POSITION = "closing position"
    NO_POSITION = "no position"


def _flag(value: bool) -> str:
    return "true" if value else "false"


class AccountBalanceBuilder(RequestBuilder):
    """Request builder for the Get Account Balance endpoint."""

    ENDPOINT = "Balance"
    METHOD_TYPE = MethodType.PRIVATE


class CancelOrderBuilder(RequestBuilder):
    """Request builder for the Cancel Open Order endpoint."""

    ENDPOINT = "CancelOrder"
    METHOD_TYPE = MethodType.PRIVATE

    def __init__(self, txid: str, nonce_source: Optional[NonceSource] = None):
        """
        Args:
            txid: Transaction ID of the order to cancel
            nonce_source: Optional nonce generator
        """
        super().__init__(nonce_source)
        self.with_txid(txid)

    def with_txid(self, txid: str) -> "CancelOrderBuilder":
        """Replace the transaction ID, e.g. when iterating over several orders."""
        return self.update_input("txid", txid)


class _HistoryFilters:
    """Time / txid range and offset filters shared by the history endpoints."""

    def with_trade_info(self, include_trades: bool):
        """Include trade details in the output. False removes the field."""
        return self.update_input("trades", "true" if include_trades else "")

    def starting_timestamp(self, timestamp: int):
        """Starting Unix timestamp, exclusive."""
        return self.update_input("start", int(timestamp))

    def ending_timestamp(self, timestamp: int):
        """Ending Unix timestamp, inclusive."""
        return self.update_input("end", int(timestamp))

    def starting_txid(self, txid: str):
        """Starting transaction ID, exclusive."""
        return self.update_input("start", txid)

    def ending_txid(self, txid: str):
        """Ending transaction ID, inclusive."""
        return self.update_input("end", txid)

    def with_offset(self, offset: int):
        """Result offset for pagination."""
        return self.update_input("ofs", int(offset))


class ClosedOrdersBuilder(_HistoryFilters, RequestBuilder):
    """Request builder for the Get Closed Orders endpoint."""

    ENDPOINT = "ClosedOrders"
    METHOD_TYPE = MethodType.PRIVATE

    def with_userref(self, userref: int) -> "ClosedOrdersBuilder":
        """Restrict results to orders placed with this user reference id."""
        return self.update_input("userref", int(userref))

    def with_closetime(self, closetime: OrderCloseTime) -> "ClosedOrdersBuilder":
        return self.update_input("closetime", OrderCloseTime(closetime).value)


class TradeHistoryBuilder(_HistoryFilters, RequestBuilder):
    """Request builder for the Get Trades History endpoint."""

    ENDPOINT = "TradesHistory"
    METHOD_TYPE = MethodType.PRIVATE

    def with_trade_type(self, trade_type: TradeHistoryType) -> "TradeHistoryBuilder":
        return self.update_input("type", TradeHistoryType(trade_type).value)


class TradeVolumeBuilder(ListParameterMixin, RequestBuilder):
    """Request builder for the Get Trade Volume endpoint."""

    ENDPOINT = "TradeVolume"
    METHOD_TYPE = MethodType.PRIVATE
    LIST_NAME = "pair"

    def with_pair(self, pair: str) -> "TradeVolumeBuilder":
        """Add an asset pair to query fee info for."""
        return self.with_item(pair)

    def with_pair_list(self, pairs: Iterable[str]) -> "TradeVolumeBuilder":
        return self.with_item_list(pairs)

    def clear_pair_list(self) -> "TradeVolumeBuilder":
        """Drop any asset pairs; the endpoint does not require one."""
        return self.clear_list()

    def with_fee_info(self, fee_info: bool) -> "TradeVolumeBuilder":
        return self.update_input("fee-info", _flag(fee_info))


class OpenPositionsBuilder(ListParameterMixin, RequestBuilder):
    """Request builder for the Get Open Positions endpoint."""

    ENDPOINT = "OpenPositions"
    METHOD_TYPE = MethodType.PRIVATE
    LIST_NAME = "txid"

    def __init__(self, txid: str, nonce_source: Optional[NonceSource] = None):
        """
        Args:
            txid: Transaction ID of a position to query
            nonce_source: Optional nonce generator
        """
        super().__init__(nonce_source)
        self.with_item(txid)

    @classmethod
    def from_list(
        cls, txids: Iterable[str], nonce_source: Optional[NonceSource] = None
    ) -> "OpenPositionsBuilder":
        """Build from several transaction IDs. At least one is required."""
        txids = list(txids)
        if not txids:
            raise BuildError("OpenPositionsBuilder.from_list() requires at least one txid")
        builder = cls(txids[0], nonce_source)
        return builder.with_item_list(txids[1:])

    def update_transaction_list(self, txids: Iterable[str]) -> "OpenPositionsBuilder":
        """Replace the transaction ID list."""
        return self.replace_list(txids)

    def do_calcs(self, docalcs: bool) -> "OpenPositionsBuilder":
        """Include profit/loss calculations."""
        return self.update_input("docalcs", _flag(docalcs))

    def consolidate(self) -> "OpenPositionsBuilder":
        """Consolidate output by market pair."""
        return self.update_input("consolidation", "market")
