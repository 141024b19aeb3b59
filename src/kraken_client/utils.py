"""
Utility functions for Kraken client.

Helpers for pulling typed fields out of decoded JSON payloads.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional, Union

from .exceptions import DecodeError

_MISSING = object()


def require(data: Mapping[str, Any], field: str) -> Any:
    """Return ``data[field]`` or raise DecodeError naming the missing field."""
    if not isinstance(data, Mapping):
        raise DecodeError(
            f"Expected an object containing '{field}', got {type(data).__name__}", field=field
        )
    value = data.get(field, _MISSING)
    if value is _MISSING or value is None:
        raise DecodeError(f"Missing required field '{field}'", field=field)
    return value


def to_decimal(value: Union[Decimal, float, int, str], field: str) -> Decimal:
    """Convert a numeric value (usually a string from the API) to Decimal."""
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise DecodeError(f"Field '{field}' is not numeric: {value!r}", field=field) from e


def to_int(value: Any, field: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Field '{field}' is not an integer: {value!r}", field=field) from e


def to_float(value: Any, field: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Field '{field}' is not a number: {value!r}", field=field) from e


def require_decimal(data: Mapping[str, Any], field: str) -> Decimal:
    return to_decimal(require(data, field), field)


def optional_decimal(data: Mapping[str, Any], field: str) -> Optional[Decimal]:
    value = data.get(field)
    if value is None or value == "":
        return None
    return to_decimal(value, field)


def require_mapping(data: Any, field: str) -> Dict[str, Any]:
    """Ensure a value is a JSON object."""
    if not isinstance(data, Mapping):
        raise DecodeError(
            f"Field '{field}' must be an object, got {type(data).__name__}", field=field
        )
    return dict(data)


def validate_url(url: str) -> bool:
    """Validate URL format."""
    if not url or not isinstance(url, str):
        return False
    return url.startswith(("http://", "https://")) and "." in url
