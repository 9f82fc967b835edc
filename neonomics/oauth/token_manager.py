"""Credential store holding the current token pair of an API instance"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from .models import TokenPair
from .storage import TokenStorage

logger = logging.getLogger(__name__)

Refresher = Callable[[TokenPair], Awaitable[TokenPair]]


class TokenManager:
    """Owns the token pair used to authenticate requests

    The pair is only ever replaced as a whole. Refreshes are serialized with
    a lock; a refresh requested for an access token that has already been
    replaced is skipped, so concurrent 401s trigger a single exchange.
    """

    def __init__(self, token: TokenPair, storage: Optional[TokenStorage] = None):
        self._token = token
        self._lock = asyncio.Lock()
        self.storage = storage

    @property
    def token(self) -> TokenPair:
        return self._token

    @property
    def access_token(self) -> str:
        return self._token.access_token

    def replace(self, token: TokenPair) -> None:
        """Swap in a new token pair and persist it if a storage is attached"""
        self._token = token
        if self.storage is not None:
            self.storage.save_token(token)

    async def refresh(
        self,
        refresher: Refresher,
        rejected_access_token: Optional[str] = None
    ) -> TokenPair:
        """Refresh the token pair using ``refresher``

        Args:
            refresher: Coroutine function exchanging a token pair for a new one
            rejected_access_token: The access token the server just rejected

        Returns:
            The token pair in effect after the refresh
        """
        async with self._lock:
            current = self._token
            if rejected_access_token is not None and current.access_token != rejected_access_token:
                logger.debug("Token was refreshed by a concurrent call, reusing it")
                return current

            new_token = await refresher(current)
            self.replace(new_token)
            return new_token
