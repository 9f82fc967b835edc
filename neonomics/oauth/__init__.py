"""OAuth authentication package for the Neonomics API"""

import httpx

from settings import NEO_AUTH_REALM, TOKEN_PATH_TEMPLATE
from .models import TokenPair
from .storage import TokenStorage
from .token_exchange import exchange_token, request_access_token
from .token_refresh import refresh_access_token
from .token_manager import TokenManager


class Authenticator:
    """Client-credential and refresh-token exchanges against the token endpoint

    Stateless apart from the client identity: results are returned to the
    caller, who decides where to keep them.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        base_url: str,
        client_id: str,
        client_secret: str,
        realm: str = NEO_AUTH_REALM
    ):
        self.http = http
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_url = base_url.rstrip("/") + TOKEN_PATH_TEMPLATE.format(realm=realm)

    async def exchange(self, form) -> TokenPair:
        """Post an arbitrary grant form to the token endpoint"""
        return await exchange_token(self.http, self.token_url, form)

    async def access_token(self) -> TokenPair:
        """Obtain a token pair with the client credentials grant"""
        return await request_access_token(
            self.http, self.token_url, self.client_id, self.client_secret
        )

    async def refresh(self, token: TokenPair) -> TokenPair:
        """Exchange the refresh token of ``token`` for a fresh pair"""
        return await refresh_access_token(
            self.http, self.token_url, self.client_id, self.client_secret, token
        )


__all__ = [
    "Authenticator",
    "TokenPair",
    "TokenStorage",
    "TokenManager",
    "exchange_token",
    "request_access_token",
    "refresh_access_token",
]
