"""
Request builders for public (unauthenticated) Kraken endpoints.
"""

from ..models.endpoint import MethodType
from .base import RequestBuilder


class SpreadDataBuilder(RequestBuilder):
    """Request builder for the Get Recent Spreads endpoint."""

    ENDPOINT = "Spread"
    METHOD_TYPE = MethodType.PUBLIC

    def __init__(self, pair: str):
        """
        Args:
            pair: Asset pair to query spread data for, e.g. ``XXBTZUSD``
        """
        super().__init__()
        self.update_pair(pair)

    def update_pair(self, pair: str) -> "SpreadDataBuilder":
        return self.update_input("pair", pair)

    def since(self, last: int) -> "SpreadDataBuilder":
        """Only return spreads newer than ``last``, the id returned by a previous query."""
        return self.update_input("since", last)
