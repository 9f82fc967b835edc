"""OAuth token exchange functionality"""

import logging
from typing import Mapping
from urllib.parse import urlencode

import httpx

from headers import CONTENT_TYPE_FORM_URLENCODED, HEADER_CONTENT_TYPE
from ..errors import InvalidAuthRequestError, TransportError, UnexpectedStatusError
from ..models import decode_model
from .models import TokenPair

logger = logging.getLogger(__name__)


async def exchange_token(
    http: httpx.AsyncClient,
    token_url: str,
    form: Mapping[str, str]
) -> TokenPair:
    """Post a grant to the token endpoint and decode the resulting token pair

    Args:
        http: HTTP client used for the exchange
        token_url: Absolute URL of the token endpoint
        form: Form fields, sent as application/x-www-form-urlencoded

    Returns:
        The new token pair

    Raises:
        InvalidAuthRequestError: If the form is empty
        TransportError: If the request could not be sent
        UnexpectedStatusError: If the server did not answer 200
        DecodeError: If the token response is malformed
    """
    if not form:
        raise InvalidAuthRequestError()

    grant_type = form.get("grant_type", "")
    logger.debug(f"Requesting token with grant_type={grant_type}")

    try:
        response = await http.post(
            token_url,
            content=urlencode(dict(form)),
            headers={HEADER_CONTENT_TYPE: CONTENT_TYPE_FORM_URLENCODED},
        )
    except httpx.RequestError as e:
        raise TransportError(f"neo: invalid auth request: {e}") from e

    if response.status_code != 200:
        logger.error(f"Token exchange failed with status {response.status_code}")
        raise UnexpectedStatusError(response.status_code, response.reason_phrase, token_url)

    return decode_model(TokenPair, response.content, "an access token")


async def request_access_token(
    http: httpx.AsyncClient,
    token_url: str,
    client_id: str,
    client_secret: str
) -> TokenPair:
    """Obtain a token pair with the client credentials grant

    Args:
        http: HTTP client used for the exchange
        token_url: Absolute URL of the token endpoint
        client_id: Client identifier issued by the platform
        client_secret: Client secret issued by the platform

    Returns:
        The new token pair
    """
    form = {
        "client_id": client_id,
        "client_secret": client_secret,
        "grant_type": "client_credentials",
    }
    token = await exchange_token(http, token_url, form)
    logger.info("Obtained access token with client credentials")
    return token
