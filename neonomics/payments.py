"""Payment initiation

Creating a payment may be suspended twice. The first step-up asks the
end-user to consent to the session; once the creation is sent again, the
bank may ask for a payment authorization, after which the payment has to
be completed through a separate endpoint. Suspended creations are tagged
with the payment type and session so that NeoAPI.resume knows which of
the two to run.
"""

import logging
from typing import TYPE_CHECKING, Union

from .errors import (
    InvalidConsentError,
    InvalidPaymentIDError,
    InvalidPaymentRequestError,
    InvalidSessionIDError,
)
from .models import PaymentRequest, PaymentType
from .request import RequestOption, build_request, session_id as session_header
from .sca import ContinuationKind, Outcome, StepUpDescriptor

if TYPE_CHECKING:
    from .api_client import NeoAPI

logger = logging.getLogger(__name__)

PAYMENT_RESULT = "PaymentCreated"


async def create_payment(
    api: "NeoAPI",
    session_id: str,
    payment_type: Union[PaymentType, str],
    request: PaymentRequest,
    *options: RequestOption
) -> Outcome:
    """Initiate a payment of the given type

    The outcome value is a PaymentCreated. If the outcome carries a handle,
    resume it with NeoAPI.resume once the end-user has visited its URL;
    repeat while new handles come back.
    """
    if not session_id:
        raise InvalidSessionIDError()
    payment_type = PaymentType.parse(payment_type)
    if request is None:
        raise InvalidPaymentRequestError()
    request.ensure_valid()

    prepared = build_request(
        "POST",
        f"/ics/v3/payments/{payment_type.value}",
        request.to_wire(),
        *options,
        session_header(session_id),
    )
    outcome = await api.execute(prepared, 201, PAYMENT_RESULT)
    return chain_payment_outcome(outcome, session_id, payment_type)


def chain_payment_outcome(outcome: Outcome, session_id: str, payment_type: PaymentType) -> Outcome:
    """Tag a suspended payment creation with what resuming it has to do

    A payment authorization error means the payment exists and only needs
    completing; anything else means the creation has to be sent again.
    """
    if outcome.handle is None:
        return outcome

    handle = outcome.handle
    update = {"payment_type": payment_type, "session_id": session_id}
    if handle.error is not None and handle.error.is_payment_auth_error():
        logger.info(f"Payment {handle.id} awaits authorization, resuming will complete it")
        update["kind"] = ContinuationKind.AWAITING_PAYMENT_COMPLETION

    continuation = handle.continuation.model_copy(update=update)
    return Outcome(handle=handle.model_copy(update={"continuation": continuation}))


async def complete_payment(
    api: "NeoAPI",
    session_id: str,
    payment_type: Union[PaymentType, str],
    payment_id: str,
    *options: RequestOption
) -> Outcome:
    """Complete an authorized payment; the outcome value is a PaymentCreated"""
    if not session_id:
        raise InvalidSessionIDError()
    payment_type = PaymentType.parse(payment_type)
    if not payment_id:
        raise InvalidPaymentIDError()

    uri = f"/ics/v3/payments/{payment_type.value}/{payment_id}/complete"
    request = build_request("POST", uri, None, *options, session_header(session_id))
    return await api.execute(request, 201, PAYMENT_RESULT)


async def authorize_payment(
    api: "NeoAPI",
    session_id: str,
    payment_type: Union[PaymentType, str],
    payment_id: str,
    *options: RequestOption
) -> StepUpDescriptor:
    """Fetch the authorization URL of an existing payment"""
    if not session_id:
        raise InvalidSessionIDError()
    payment_type = PaymentType.parse(payment_type)
    if not payment_id:
        raise InvalidPaymentIDError()

    uri = f"/ics/v3/payments/{payment_type.value}/{payment_id}/authorize"
    request = build_request("GET", uri, None, *options, session_header(session_id))
    outcome = await api.execute(request, 200, "Consent", step_up=False)
    consent = outcome.value
    if not consent.links:
        raise InvalidConsentError()
    return StepUpDescriptor(url=consent.links[0].href, id=consent.payment_id)


async def sepa_payment(api: "NeoAPI", session_id: str, request: PaymentRequest, *options: RequestOption) -> Outcome:
    return await create_payment(api, session_id, PaymentType.SEPA, request, *options)


async def sepa_scheduled_payment(
    api: "NeoAPI", session_id: str, request: PaymentRequest, *options: RequestOption
) -> Outcome:
    _require_execution_date(request)
    return await create_payment(api, session_id, PaymentType.SEPA_SCHEDULED, request, *options)


async def domestic_payment(
    api: "NeoAPI", session_id: str, request: PaymentRequest, *options: RequestOption
) -> Outcome:
    return await create_payment(api, session_id, PaymentType.DOMESTIC, request, *options)


async def domestic_scheduled_payment(
    api: "NeoAPI", session_id: str, request: PaymentRequest, *options: RequestOption
) -> Outcome:
    _require_execution_date(request)
    return await create_payment(api, session_id, PaymentType.DOMESTIC_SCHEDULED, request, *options)


def _require_execution_date(request: PaymentRequest) -> None:
    if request is None or request.requested_execution_date is None:
        raise InvalidPaymentRequestError("scheduled payments need a requested execution date")
