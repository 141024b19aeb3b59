"""
Market-related models for Kraken client.

Immutable data structures for public market data.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List

from ..exceptions import DecodeError
from ..utils import require, require_mapping, to_decimal, to_int


@dataclass(frozen=True)
class SpreadInfo:
    """Best bid/ask at a point in time."""
    time: int
    bid: Decimal
    ask: Decimal

    @classmethod
    def from_raw(cls, entry: Any) -> "SpreadInfo":
        """Decode a ``[time, bid, ask]`` triple (or the equivalent object)."""
        if isinstance(entry, dict):
            entry = [require(entry, "time"), require(entry, "bid"), require(entry, "ask")]
        if not isinstance(entry, (list, tuple)) or len(entry) < 3:
            raise DecodeError(f"Spread entry must be [time, bid, ask], got {entry!r}")
        return cls(
            time=to_int(entry[0], "time"),
            bid=to_decimal(entry[1], "bid"),
            ask=to_decimal(entry[2], "ask"),
        )


@dataclass(frozen=True)
class SpreadData:
    """Response from the Get Recent Spreads endpoint."""
    pairs: Dict[str, List[SpreadInfo]]  # asset pair -> spreads
    last: int  # pass to SpreadDataBuilder.since() on the next poll

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SpreadData":
        data = require_mapping(data, "result")
        last = to_int(require(data, "last"), "last")
        pairs = {}
        for pair, entries in data.items():
            if pair == "last":
                continue
            if not isinstance(entries, list):
                raise DecodeError(f"Spread data for '{pair}' must be a list", field=pair)
            pairs[pair] = [SpreadInfo.from_raw(entry) for entry in entries]
        return cls(pairs=pairs, last=last)
