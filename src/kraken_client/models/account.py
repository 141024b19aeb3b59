"""
Account-related models for Kraken client.

Immutable data structures for balances, fee tiers and open positions.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

from ..utils import (
    optional_decimal,
    require,
    require_decimal,
    require_mapping,
    to_decimal,
    to_float,
)


@dataclass(frozen=True)
class AccountBalance:
    """Response from the Get Account Balance endpoint."""
    balances: Dict[str, Decimal]  # asset name -> balance

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AccountBalance":
        data = require_mapping(data, "result")
        return cls(balances={asset: to_decimal(amount, asset) for asset, amount in data.items()})


@dataclass(frozen=True)
class FeeInfo:
    """Taker fee tier info for one pair."""
    fee: Decimal
    min_fee: Optional[Decimal] = None
    max_fee: Optional[Decimal] = None
    next_fee: Optional[Decimal] = None
    next_volume: Optional[Decimal] = None
    tier_volume: Optional[Decimal] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeeInfo":
        return cls(
            fee=require_decimal(data, "fee"),
            min_fee=optional_decimal(data, "minfee"),
            max_fee=optional_decimal(data, "maxfee"),
            next_fee=optional_decimal(data, "nextfee"),
            next_volume=optional_decimal(data, "nextvolume"),
            tier_volume=optional_decimal(data, "tiervolume"),
        )


@dataclass(frozen=True)
class TradeVolume:
    """Response from the Get Trade Volume endpoint."""
    currency: str
    volume: Decimal
    fees: Optional[Dict[str, FeeInfo]] = None
    fees_maker: Optional[Dict[str, FeeInfo]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TradeVolume":
        return cls(
            currency=require(data, "currency"),
            volume=require_decimal(data, "volume"),
            fees=_fee_map(data, "fees"),
            fees_maker=_fee_map(data, "fees_maker"),
        )


@dataclass(frozen=True)
class PositionInfo:
    """Open margin position."""
    order_txid: str  # order responsible for the position
    pair: str
    time: float
    side: str
    order_type: str
    cost: Decimal
    fee: Decimal
    volume: Decimal
    volume_closed: Decimal
    misc: str = ""
    margin: Optional[Decimal] = None
    value: Optional[Decimal] = None
    net: Optional[Decimal] = None
    oflags: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PositionInfo":
        return cls(
            order_txid=require(data, "ordertxid"),
            pair=require(data, "pair"),
            time=to_float(require(data, "time"), "time"),
            side=require(data, "type"),
            order_type=require(data, "ordertype"),
            cost=require_decimal(data, "cost"),
            fee=require_decimal(data, "fee"),
            volume=require_decimal(data, "vol"),
            volume_closed=require_decimal(data, "vol_closed"),
            misc=data.get("misc", ""),
            margin=optional_decimal(data, "margin"),
            value=optional_decimal(data, "value"),
            net=optional_decimal(data, "net"),
            oflags=data.get("oflags"),
        )


@dataclass(frozen=True)
class OpenPositions:
    """Response from the Get Open Positions endpoint."""
    positions: Dict[str, PositionInfo]  # position transaction ID -> position

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OpenPositions":
        data = require_mapping(data, "result")
        return cls(
            positions={
                txid: PositionInfo.from_dict(require_mapping(info, txid))
                for txid, info in data.items()
            }
        )


def _fee_map(data: Dict[str, Any], name: str) -> Optional[Dict[str, FeeInfo]]:
    value = data.get(name)
    if value is None:
        return None
    return {
        pair: FeeInfo.from_dict(require_mapping(info, pair))
        for pair, info in require_mapping(value, name).items()
    }
