"""Strong Customer Authentication (step-up) handling

When the platform answers a call with one of the step-up status codes,
the call is suspended: the caller receives a ResumptionHandle describing
where the end-user has to go, and re-enters the call later with
NeoAPI.resume once the end-user is done.

Handles are plain data. The continuation records which request to send
again (or, for payments, which completion to run), so a handle can be
stored with model_dump_json and restored with model_validate_json.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Optional
from urllib.parse import urlparse

import httpx
from pydantic import BaseModel

from settings import NEO_PLATFORM_DOMAIN
from .errors import (
    InvalidConsentError,
    InvalidStepUpDataError,
    TransportError,
    UnexpectedStatusError,
)
from .models import Consent, ErrorPayload, PaymentType, decode_model
from .request import PreparedRequest

logger = logging.getLogger(__name__)


class StepUpDescriptor(BaseModel):
    """Where the end-user has to go, and the id to thread back

    Attributes:
        url: The URL the end-user has to visit and consent at
        id: Continuation id, either a session ID or a payment ID
        error: Error returned by the platform, if any
    """
    url: str
    id: str = ""
    error: Optional[ErrorPayload] = None


class ContinuationKind(str, Enum):
    # Send the suspended request again
    INITIAL = "initial"
    # Complete the payment whose id is the descriptor id
    AWAITING_PAYMENT_COMPLETION = "awaiting_payment_completion"


class Continuation(BaseModel):
    """Everything needed to re-enter a suspended call"""
    kind: ContinuationKind = ContinuationKind.INITIAL
    request: PreparedRequest
    expected_status: int
    result_type: Optional[str] = None
    # Set on payment creation calls only
    payment_type: Optional[PaymentType] = None
    session_id: Optional[str] = None

    @property
    def is_payment_creation(self) -> bool:
        return self.payment_type is not None


class ResumptionHandle(BaseModel):
    """A suspended call awaiting step-up completion"""
    descriptor: StepUpDescriptor
    continuation: Continuation

    @property
    def url(self) -> str:
        return self.descriptor.url

    @property
    def id(self) -> str:
        return self.descriptor.id

    @property
    def error(self) -> Optional[ErrorPayload]:
        return self.descriptor.error


@dataclass
class Outcome:
    """Result of a call that may be suspended for step-up

    Exactly one of the following holds: ``handle`` is set and ``value`` is
    None (the call is suspended), or ``handle`` is None (the call completed
    and ``value`` holds its decoded result, possibly None).
    """
    value: Any = None
    handle: Optional[ResumptionHandle] = None

    @property
    def completed(self) -> bool:
        return self.handle is None


StepUpResolver = Callable[
    [httpx.AsyncClient, Mapping[str, str], ErrorPayload],
    Awaitable[StepUpDescriptor],
]


def is_platform_url(href: str, domain: str = NEO_PLATFORM_DOMAIN) -> bool:
    """Check whether ``href`` points at the platform itself"""
    host = (urlparse(href).hostname or "").lower()
    domain = domain.lower()
    return host == domain or host.endswith("." + domain)


async def resolve_step_up(
    http: httpx.AsyncClient,
    headers: Mapping[str, str],
    error: ErrorPayload,
    platform_domain: str = NEO_PLATFORM_DOMAIN
) -> StepUpDescriptor:
    """Map a consent error into a StepUpDescriptor

    Third-party links are returned as they are. Links on the platform are
    followed with the headers of the originating request to fetch the
    consent data holding the real visit URL.

    Args:
        http: HTTP client used to follow platform links
        headers: Headers of the originating, authenticated request
        error: The decoded error body
        platform_domain: Domain whose links are followed

    Raises:
        InvalidStepUpDataError: If the error carries no links
        InvalidConsentError: If the consent data carries no links
    """
    if error is None or not error.links:
        raise InvalidStepUpDataError()

    first = error.links[0]
    if not is_platform_url(first.href, platform_domain):
        logger.debug(f"Step-up link points outside {platform_domain}, handing it out as-is")
        return StepUpDescriptor(url=first.href, id=first.meta.id, error=error)

    method = (first.type or "GET").upper()
    logger.debug(f"Following step-up link: {method} {first.href}")
    try:
        response = await http.request(method, first.href, headers=dict(headers))
    except httpx.RequestError as e:
        raise TransportError(f"neo: failed to retrieve a SCA response: {e}") from e

    if response.status_code != 200:
        logger.error(f"Step-up link answered with status {response.status_code}")
        raise UnexpectedStatusError(response.status_code, response.reason_phrase, first.href)

    consent = decode_model(Consent, response.content, "consent")
    if not consent.links:
        raise InvalidConsentError()

    continuation_id = consent.payment_id or consent.links[0].meta.id
    return StepUpDescriptor(url=consent.links[0].href, id=continuation_id, error=error)
