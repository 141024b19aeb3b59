"""
Generic response envelope for Kraken API replies.

Every reply is ``{"error": [...], "result": ...}``. A non-empty error list
means the call failed, whatever ``result`` holds. Error strings are kept
verbatim; their leading category token (``E`` for errors, ``W`` for
warnings, e.g. ``EGeneral:Invalid arguments``) is left for the caller to
interpret.
"""

import json
import logging
from dataclasses import dataclass
from typing import Generic, Optional, Tuple, Type, TypeVar, Union

from .exceptions import ApiError, DecodeError

logger = logging.getLogger(__name__)

T = TypeVar("T")

ERROR_PREFIX = "E"
WARNING_PREFIX = "W"


@dataclass(frozen=True)
class KrakenResult(Generic[T]):
    """Decoded ``{error, result}`` envelope. Check ``error`` before ``result``."""
    error: Tuple[str, ...] = ()
    result: Optional[T] = None
    status_code: Optional[int] = None

    @property
    def is_success(self) -> bool:
        return not self.error

    @property
    def errors(self) -> Tuple[str, ...]:
        """Entries carrying the error category prefix."""
        return tuple(entry for entry in self.error if entry.startswith(ERROR_PREFIX))

    @property
    def warnings(self) -> Tuple[str, ...]:
        """Entries carrying the warning category prefix."""
        return tuple(entry for entry in self.error if entry.startswith(WARNING_PREFIX))

    @property
    def api_error(self) -> Optional[ApiError]:
        """The error list as an ApiError value, or None on success."""
        if self.is_success:
            return None
        return ApiError(self.error, status_code=self.status_code)

    def unwrap(self) -> T:
        """
        Return the result, raising ApiError if the error list is non-empty.

        Raises:
            ApiError: If the server reported any error or warning
            DecodeError: If the call succeeded but carried no result
        """
        if not self.is_success:
            raise ApiError(self.error, status_code=self.status_code)
        if self.result is None:
            raise DecodeError("Successful response carried no result", field="result")
        return self.result


def decode_response(
    raw: Union[bytes, str],
    payload_type: Optional[Type[T]] = None,
    status_code: Optional[int] = None,
) -> KrakenResult[T]:
    """
    Decode a raw reply body into a KrakenResult.

    Args:
        raw: Response body
        payload_type: Class with a ``from_dict`` classmethod used to decode
            ``result``; None keeps the decoded JSON as-is
        status_code: HTTP status, carried through for diagnostics

    Returns:
        KrakenResult holding the verbatim error list and the typed result

    Raises:
        DecodeError: If the body is not a JSON object, ``error`` is not a
            list of strings, or a required payload field is missing on a
            successful reply
    """
    try:
        body = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
        raise DecodeError(f"Invalid JSON response: {e}") from e

    if not isinstance(body, dict):
        raise DecodeError(f"Response must be a JSON object, got {type(body).__name__}")

    errors = body.get("error")
    if errors is None:
        errors = []
    if not isinstance(errors, list) or not all(isinstance(entry, str) for entry in errors):
        raise DecodeError("Response 'error' must be a list of strings", field="error")
    errors = tuple(errors)

    raw_result = body.get("result")
    if raw_result is None:
        return KrakenResult(error=errors, result=None, status_code=status_code)

    if payload_type is None:
        return KrakenResult(error=errors, result=raw_result, status_code=status_code)

    if not errors:
        return KrakenResult(
            error=errors, result=payload_type.from_dict(raw_result), status_code=status_code
        )

    # The error list is authoritative; a partial result is best-effort.
    try:
        result = payload_type.from_dict(raw_result)
    except DecodeError as e:
        logger.debug(f"Discarding undecodable result alongside API errors {errors}: {e}")
        result = None
    return KrakenResult(error=errors, result=result, status_code=status_code)
