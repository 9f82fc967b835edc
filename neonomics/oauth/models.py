"""Data models for Neonomics OAuth authentication"""

from pydantic import BaseModel


class TokenPair(BaseModel):
    """Token response from the platform's OpenID Connect token endpoint

    Attributes:
        access_token: Bearer token for API authentication
        token_type: Token type reported by the server (usually "bearer")
        expires_in: Access token lifetime in seconds
        refresh_token: Token for refreshing expired access tokens
        refresh_expires_in: Refresh token lifetime in seconds
        session_state: Keycloak session state
    """
    access_token: str
    token_type: str = ""
    expires_in: int = 0
    refresh_token: str = ""
    refresh_expires_in: int = 0
    session_state: str = ""
