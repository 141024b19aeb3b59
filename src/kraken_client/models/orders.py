"""
Order-related models for Kraken client.

Immutable payloads for the order and trade endpoints. Unknown fields in
the exchange's reply are ignored; missing required fields raise DecodeError.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from ..utils import (
    optional_decimal,
    require,
    require_decimal,
    require_mapping,
    to_float,
    to_int,
)


@dataclass(frozen=True)
class CancelOrderResult:
    """Response from the Cancel Open Order endpoint."""
    count: int  # number of orders cancelled
    pending: int  # if set, order(s) pending cancellation

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CancelOrderResult":
        return cls(
            count=to_int(require(data, "count"), "count"),
            pending=to_int(data.get("pending", 0), "pending"),
        )


@dataclass(frozen=True)
class OrderDescription:
    """Human-readable order description."""
    pair: str
    side: str  # "buy" or "sell"
    order_type: str
    order: str
    price: Optional[Decimal] = None
    price2: Optional[Decimal] = None
    leverage: Optional[str] = None
    close: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrderDescription":
        return cls(
            pair=require(data, "pair"),
            side=require(data, "type"),
            order_type=require(data, "ordertype"),
            order=require(data, "order"),
            price=optional_decimal(data, "price"),
            price2=optional_decimal(data, "price2"),
            leverage=data.get("leverage"),
            close=data.get("close") or None,
        )


@dataclass(frozen=True)
class OrderInfo:
    """Order info as returned by the open/closed order endpoints."""
    status: str
    open_time: float
    description: OrderDescription
    volume: Decimal
    volume_executed: Decimal
    cost: Decimal
    fee: Decimal
    price: Decimal
    misc: str = ""
    oflags: str = ""
    refid: Optional[str] = None
    userref: Optional[int] = None
    start_time: Optional[float] = None
    expire_time: Optional[float] = None
    close_time: Optional[float] = None
    stop_price: Optional[Decimal] = None
    limit_price: Optional[Decimal] = None
    reason: Optional[str] = None
    trades: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrderInfo":
        userref = data.get("userref")
        return cls(
            status=require(data, "status"),
            open_time=to_float(require(data, "opentm"), "opentm"),
            description=OrderDescription.from_dict(require_mapping(require(data, "descr"), "descr")),
            volume=require_decimal(data, "vol"),
            volume_executed=require_decimal(data, "vol_exec"),
            cost=require_decimal(data, "cost"),
            fee=require_decimal(data, "fee"),
            price=require_decimal(data, "price"),
            misc=data.get("misc", ""),
            oflags=data.get("oflags", ""),
            refid=data.get("refid"),
            userref=to_int(userref, "userref") if userref is not None else None,
            start_time=_optional_time(data, "starttm"),
            expire_time=_optional_time(data, "expiretm"),
            close_time=_optional_time(data, "closetm"),
            stop_price=optional_decimal(data, "stopprice"),
            limit_price=optional_decimal(data, "limitprice"),
            reason=data.get("reason"),
            trades=list(data.get("trades") or []),
        )


@dataclass(frozen=True)
class ClosedOrders:
    """Response from the Get Closed Orders endpoint."""
    closed: Dict[str, OrderInfo]  # keyed by order transaction ID
    count: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClosedOrders":
        closed = require_mapping(require(data, "closed"), "closed")
        return cls(
            closed={
                txid: OrderInfo.from_dict(require_mapping(info, txid))
                for txid, info in closed.items()
            },
            count=to_int(require(data, "count"), "count"),
        )


@dataclass(frozen=True)
class TradeData:
    """A single trade from the trades history."""
    order_txid: str
    pair: str
    time: float
    side: str
    order_type: str
    price: Decimal
    cost: Decimal
    fee: Decimal
    volume: Decimal
    margin: Decimal
    misc: str = ""
    position_txid: Optional[str] = None
    position_status: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TradeData":
        return cls(
            order_txid=require(data, "ordertxid"),
            pair=require(data, "pair"),
            time=to_float(require(data, "time"), "time"),
            side=require(data, "type"),
            order_type=require(data, "ordertype"),
            price=require_decimal(data, "price"),
            cost=require_decimal(data, "cost"),
            fee=require_decimal(data, "fee"),
            volume=require_decimal(data, "vol"),
            margin=require_decimal(data, "margin"),
            misc=data.get("misc", ""),
            position_txid=data.get("postxid"),
            position_status=data.get("posstatus"),
        )


@dataclass(frozen=True)
class TradeHistory:
    """Response from the Get Trades History endpoint."""
    trades: Dict[str, TradeData]  # keyed by trade transaction ID
    count: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TradeHistory":
        trades = require_mapping(require(data, "trades"), "trades")
        return cls(
            trades={
                txid: TradeData.from_dict(require_mapping(info, txid))
                for txid, info in trades.items()
            },
            count=to_int(require(data, "count"), "count"),
        )


def _optional_time(data: Dict[str, Any], name: str) -> Optional[float]:
    value = data.get(name)
    if value is None:
        return None
    return to_float(value, name)
