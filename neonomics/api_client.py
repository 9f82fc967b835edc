"""Neonomics API HTTP client

NeoClient holds the client identity and the HTTP transport. NeoAPI is an
authenticated session on top of it: every call goes through
NeoAPI.execute, which attaches the bearer token, refreshes it once on a
401 and turns step-up responses into resumption handles.
"""

import json
import logging
from typing import Dict, List, Optional, Union

import httpx

from headers import (
    CONTENT_TYPE_JSON,
    HEADER_ACCEPT,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    HEADER_DEVICE_ID,
    SENSITIVE_HEADERS,
    STEP_UP_STATUS_CODES,
)
from settings import (
    CONNECT_TIMEOUT,
    NEO_AUTH_REALM,
    NEO_CLIENT_ID,
    NEO_CLIENT_SECRET,
    NEO_DEVICE_ID,
    PRODUCTION_BASE_URL,
    REQUEST_TIMEOUT,
    SANDBOX_BASE_URL,
    default_base_url,
)
from . import accounts, banks, consent, payments, resumption, session, transactions
from .errors import (
    AuthenticationError,
    NeoError,
    PlatformError,
    TransportError,
    UnexpectedStatusError,
)
from .models import (
    Bank,
    ErrorPayload,
    PaymentCreated,
    PaymentRequest,
    PaymentType,
    Session,
    SessionStatus,
    decode_model,
    decode_result,
)
from .oauth import Authenticator, TokenManager, TokenPair, TokenStorage
from .request import PreparedRequest, RequestOption
from .sca import (
    Continuation,
    Outcome,
    ResumptionHandle,
    StepUpDescriptor,
    StepUpResolver,
    resolve_step_up,
)

logger = logging.getLogger(__name__)


def _redacted(headers: Dict[str, str]) -> Dict[str, str]:
    return {k: ("***" if k in SENSITIVE_HEADERS else v) for k, v in headers.items()}


class NeoClient:
    """Client identity, base URL and HTTP transport"""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        base_url: Optional[str] = None,
        http: Optional[httpx.AsyncClient] = None,
        realm: str = NEO_AUTH_REALM,
        storage: Optional[TokenStorage] = None
    ):
        """
        Args:
            client_id: Client identifier issued by the platform
            client_secret: Client secret issued by the platform
            base_url: API base URL (default: from settings)
            http: HTTP client to send requests with; one is created if omitted
            realm: Realm of the token endpoint
            storage: Optional storage persisting every token obtained
        """
        self.base_url = (base_url or default_base_url()).rstrip("/")
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            timeout=httpx.Timeout(REQUEST_TIMEOUT, connect=CONNECT_TIMEOUT)
        )
        self.authenticator = Authenticator(self.http, self.base_url, client_id, client_secret, realm)
        self.storage = storage

    @classmethod
    def production(cls, client_id: str, client_secret: str, **kwargs) -> "NeoClient":
        return cls(client_id, client_secret, PRODUCTION_BASE_URL, **kwargs)

    @classmethod
    def sandbox(cls, client_id: str, client_secret: str, **kwargs) -> "NeoClient":
        return cls(client_id, client_secret, SANDBOX_BASE_URL, **kwargs)

    @classmethod
    def from_settings(cls, **kwargs) -> "NeoClient":
        """Build a client from NEO_* configuration values"""
        return cls(NEO_CLIENT_ID, NEO_CLIENT_SECRET, **kwargs)

    async def access_token(self) -> TokenPair:
        """Obtain an access token and a refresh token with the client credentials"""
        token = await self.authenticator.access_token()
        if self.storage is not None:
            self.storage.save_token(token)
        return token

    async def refresh_token(self, token: TokenPair) -> TokenPair:
        """Return a fresh token pair for ``token``"""
        return await self.authenticator.refresh(token)

    async def api(
        self,
        device_id: str = NEO_DEVICE_ID,
        token: Optional[TokenPair] = None,
        resolver: Optional[StepUpResolver] = resolve_step_up
    ) -> "NeoAPI":
        """Create an authenticated API instance

        Args:
            device_id: Value of the x-device-id header
            token: Token pair to start with; obtained with the client
                credentials if omitted
            resolver: Step-up resolver; None turns step-up responses into
                PlatformError
        """
        if token is None:
            token = await self.access_token()
        return NeoAPI(self, TokenManager(token, self.storage), device_id, resolver)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "NeoClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


class NeoAPI:
    """Authenticated access to the Neonomics API"""

    def __init__(
        self,
        client: NeoClient,
        tokens: TokenManager,
        device_id: str = NEO_DEVICE_ID,
        resolver: Optional[StepUpResolver] = resolve_step_up
    ):
        self.client = client
        self.tokens = tokens
        self.device_id = device_id
        self.resolver = resolver

    @property
    def token(self) -> TokenPair:
        return self.tokens.token

    def url(self, target: str) -> str:
        if target.startswith("http"):
            return target
        return self.client.base_url + target

    def authorized_headers(self, request: PreparedRequest) -> Dict[str, str]:
        """Headers for sending ``request`` with the current token

        The fixed headers are set last so that caller-supplied headers of
        the same name are overwritten.
        """
        headers = {HEADER_DEVICE_ID: self.device_id}
        for name, value in request.headers.items():
            headers[name.lower()] = value
        headers[HEADER_ACCEPT] = CONTENT_TYPE_JSON
        headers[HEADER_AUTHORIZATION] = f"Bearer {self.tokens.access_token}"
        headers[HEADER_CONTENT_TYPE] = CONTENT_TYPE_JSON
        return headers

    def _build(self, request: PreparedRequest, headers: Dict[str, str]) -> httpx.Request:
        content = None
        if request.body is not None:
            content = json.dumps(request.body).encode("utf-8")
        return self.client.http.build_request(
            request.method, self.url(request.target), content=content, headers=headers
        )

    async def _send(self, outgoing: httpx.Request) -> httpx.Response:
        try:
            response = await self.client.http.send(outgoing, stream=True)
        except httpx.RequestError as e:
            raise TransportError(f"{outgoing.url} err: {e}") from e
        try:
            await response.aread()
        except httpx.RequestError as e:
            await response.aclose()
            raise TransportError(f"{outgoing.url} err: {e}") from e
        return response

    async def _refresh(self, rejected_access_token: str) -> None:
        try:
            await self.tokens.refresh(self.client.authenticator.refresh, rejected_access_token)
        except NeoError as e:
            logger.error(f"Token refresh failed: {e}")
            raise AuthenticationError(f"neo: failed to refresh token: {e}") from e

    async def execute(
        self,
        request: PreparedRequest,
        expected_status: int,
        result_type: Optional[str] = None,
        *,
        step_up: bool = True
    ) -> Outcome:
        """Send ``request`` and interpret the response

        Args:
            request: The call to make
            expected_status: Status code signalling success
            result_type: Name of the result type to decode the body into,
                or None to ignore the body
            step_up: Whether step-up responses may suspend the call

        Returns:
            Outcome holding either the decoded value or a resumption handle

        Raises:
            TransportError: If the request could not be sent
            AuthenticationError: If the token could not be refreshed, or the
                refreshed token was rejected as well
            PlatformError: For step-up responses that cannot be resolved
            UnexpectedStatusError: For any other status
            DecodeError: If a body could not be decoded
        """
        refreshed = False
        while True:
            access_token = self.tokens.access_token
            headers = self.authorized_headers(request)
            outgoing = self._build(request, headers)
            logger.debug(f"{request.method} {outgoing.url} headers={_redacted(headers)}")

            response = await self._send(outgoing)
            try:
                status = response.status_code

                if status == expected_status:
                    value = None
                    if result_type is not None:
                        value = decode_result(result_type, response.content)
                    return Outcome(value=value)

                if status == 401:
                    if refreshed:
                        logger.error(f"Refreshed token rejected for {request.method} {outgoing.url}")
                        raise AuthenticationError("neo: refreshed access token was rejected")
                    logger.info("Access token rejected, refreshing")
                    await self._refresh(access_token)
                    refreshed = True
                    continue

                if status in STEP_UP_STATUS_CODES:
                    error = decode_model(ErrorPayload, response.content, "neo.Error")
                    descriptor = await self._resolve(error, headers, step_up)
                    logger.info(f"Step-up required ({error.type} {error.error_code}), call suspended")
                    continuation = Continuation(
                        request=request,
                        expected_status=expected_status,
                        result_type=result_type,
                    )
                    return Outcome(handle=ResumptionHandle(descriptor=descriptor, continuation=continuation))

                raise UnexpectedStatusError(status, response.reason_phrase, str(outgoing.url))
            finally:
                await response.aclose()

    async def _resolve(
        self,
        error: ErrorPayload,
        headers: Dict[str, str],
        step_up: bool
    ) -> StepUpDescriptor:
        if not step_up or self.resolver is None:
            raise PlatformError(error)
        if not (error.is_consent_error() or error.is_payment_auth_error()):
            raise PlatformError(error)
        return await self.resolver(self.client.http, headers, error)

    async def resume(self, handle: ResumptionHandle, into: Optional[PaymentCreated] = None) -> Outcome:
        """Re-enter a suspended call once the end-user completed the step-up"""
        return await resumption.resume(self, handle, into)

    # Banks

    async def banks(self) -> List[Bank]:
        return await banks.list_banks(self)

    async def banks_by_country(self, country_code: str) -> List[Bank]:
        return await banks.banks_by_country(self, country_code)

    async def banks_by_name(self, name: str) -> List[Bank]:
        return await banks.banks_by_name(self, name)

    async def bank_by_id(self, bank_id: str) -> Bank:
        return await banks.bank_by_id(self, bank_id)

    # Sessions & consent

    async def new_session(self, bank_id: str) -> Session:
        return await session.new_session(self, bank_id)

    async def session_status(self, session_id: str) -> SessionStatus:
        return await session.session_status(self, session_id)

    async def delete_session(self, session_id: str) -> None:
        await session.delete_session(self, session_id)

    async def consent(self, session_id: str, *options: RequestOption) -> Outcome:
        return await consent.get_consent(self, session_id, *options)

    # Accounts & transactions

    async def accounts(self, session_id: str, *options: RequestOption) -> Outcome:
        return await accounts.list_accounts(self, session_id, *options)

    async def account_by_id(self, session_id: str, account_id: str, *options: RequestOption) -> Outcome:
        return await accounts.account_by_id(self, session_id, account_id, *options)

    async def transactions(self, session_id: str, account_id: str, *options: RequestOption) -> Outcome:
        return await transactions.list_transactions(self, session_id, account_id, *options)

    # Payments

    async def sepa_payment(self, session_id: str, request: PaymentRequest, *options: RequestOption) -> Outcome:
        return await payments.sepa_payment(self, session_id, request, *options)

    async def sepa_scheduled_payment(self, session_id: str, request: PaymentRequest, *options: RequestOption) -> Outcome:
        return await payments.sepa_scheduled_payment(self, session_id, request, *options)

    async def domestic_payment(self, session_id: str, request: PaymentRequest, *options: RequestOption) -> Outcome:
        return await payments.domestic_payment(self, session_id, request, *options)

    async def domestic_scheduled_payment(
        self, session_id: str, request: PaymentRequest, *options: RequestOption
    ) -> Outcome:
        return await payments.domestic_scheduled_payment(self, session_id, request, *options)

    async def complete_payment(
        self, session_id: str, payment_type: Union[PaymentType, str], payment_id: str, *options: RequestOption
    ) -> Outcome:
        return await payments.complete_payment(self, session_id, payment_type, payment_id, *options)

    async def authorize_payment(
        self, session_id: str, payment_type: Union[PaymentType, str], payment_id: str, *options: RequestOption
    ) -> StepUpDescriptor:
        return await payments.authorize_payment(self, session_id, payment_type, payment_id, *options)


__all__ = [
    "NeoClient",
    "NeoAPI",
]
