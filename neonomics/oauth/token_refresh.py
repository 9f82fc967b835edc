"""OAuth token refresh functionality"""

import logging

import httpx

from ..errors import InvalidAuthRequestError
from .models import TokenPair
from .token_exchange import exchange_token

logger = logging.getLogger(__name__)


async def refresh_access_token(
    http: httpx.AsyncClient,
    token_url: str,
    client_id: str,
    client_secret: str,
    token: TokenPair
) -> TokenPair:
    """Exchange the refresh token of ``token`` for a fresh token pair

    The given token is left untouched; callers decide whether to store
    the result.

    Raises:
        InvalidAuthRequestError: If ``token`` carries no refresh token
    """
    if token is None or not token.refresh_token:
        raise InvalidAuthRequestError("auth: invalid refresh token")

    logger.info("Attempting to refresh access token...")
    form = {
        "client_id": client_id,
        "client_secret": client_secret,
        "refresh_token": token.refresh_token,
        "grant_type": "refresh_token",
    }
    new_token = await exchange_token(http, token_url, form)
    logger.info("Successfully refreshed access token")
    return new_token
