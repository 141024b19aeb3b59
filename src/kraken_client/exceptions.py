"""
Exception hierarchy for the Kraken client.

Builder, signing and decoding failures are raised where they happen.
Server-side error lists are carried as data on the response envelope;
``ApiError`` is only raised when a caller explicitly unwraps a result.
"""

from typing import Iterable, Optional


class KrakenClientError(Exception):
    """Base exception for all Kraken client errors."""
    pass


class BuildError(KrakenClientError):
    """Invalid parameter value, or reuse of an already finalized builder."""
    pass


class AuthError(KrakenClientError):
    """Malformed secret key or missing signing input."""
    pass


class DecodeError(KrakenClientError):
    """Malformed response payload or missing required field."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ApiError(KrakenClientError):
    """Non-empty ``error`` list returned by the exchange."""

    def __init__(self, errors: Iterable[str], status_code: Optional[int] = None):
        self.errors = tuple(errors)
        self.status_code = status_code
        super().__init__("; ".join(self.errors))


class TransportError(KrakenClientError):
    """HTTP or network failure while dispatching a request."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text
