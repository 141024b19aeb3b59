"""
Shared aiohttp session for KrakenClient.

The session is opened on first use and reused until close_session().
"""

import logging
from typing import Optional

import aiohttp

from .constants import (
    DEFAULT_TIMEOUT,
    DNS_CACHE_TTL,
    POOL_LIMIT,
    POOL_LIMIT_PER_HOST,
    USER_AGENT,
)

logger = logging.getLogger(__name__)


class SessionManager:
    """Owns the client's single aiohttp.ClientSession."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self._timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def create_session(self) -> aiohttp.ClientSession:
        """Return the open session, creating it on first call or after close."""
        if self._session is None or self._session.closed:
            logger.debug(f"Opening HTTP session (timeout={self._timeout}s)")
            self._session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(
                    limit=POOL_LIMIT,
                    limit_per_host=POOL_LIMIT_PER_HOST,
                    ttl_dns_cache=DNS_CACHE_TTL,
                ),
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            )
        return self._session

    async def close_session(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    @property
    def session(self) -> Optional[aiohttp.ClientSession]:
        """Current session, or None when none is open."""
        return self._session
