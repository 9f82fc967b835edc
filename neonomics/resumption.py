"""Re-entering calls suspended for step-up authentication"""

import logging
from typing import TYPE_CHECKING, Optional

from . import payments
from .models import PaymentCreated
from .request import with_headers
from .sca import ContinuationKind, Outcome, ResumptionHandle

if TYPE_CHECKING:
    from .api_client import NeoAPI

logger = logging.getLogger(__name__)


async def resume(
    api: "NeoAPI",
    handle: ResumptionHandle,
    into: Optional[PaymentCreated] = None
) -> Outcome:
    """Run the continuation of ``handle``

    The caller is responsible for waiting until the end-user has completed
    the step-up; nothing here polls. The result may be yet another handle.

    Args:
        api: API instance to send requests with
        handle: The suspended call
        into: For payment calls, the PaymentCreated returned by the
            original call; the final payment result is copied into it
    """
    continuation = handle.continuation
    logger.debug(f"Resuming {continuation.kind.value} continuation for {continuation.request.target}")

    if continuation.kind == ContinuationKind.AWAITING_PAYMENT_COMPLETION:
        return await _complete_payment(api, handle, into)

    outcome = await api.execute(
        continuation.request,
        continuation.expected_status,
        continuation.result_type,
    )
    if continuation.is_payment_creation:
        outcome = payments.chain_payment_outcome(outcome, continuation.session_id, continuation.payment_type)
    # Also covers a completion request that needed another step-up
    if outcome.completed and into is not None and isinstance(outcome.value, PaymentCreated):
        return Outcome(value=_copy_payment(outcome.value, into))
    return outcome


async def _complete_payment(
    api: "NeoAPI",
    handle: ResumptionHandle,
    into: Optional[PaymentCreated]
) -> Outcome:
    continuation = handle.continuation
    outcome = await payments.complete_payment(
        api,
        continuation.session_id,
        continuation.payment_type,
        handle.id,
        with_headers(continuation.request.headers),
    )
    if outcome.handle is not None:
        return outcome

    completed = outcome.value
    logger.info(f"Payment {completed.payment_id} completed with status {completed.status}")
    return Outcome(value=_copy_payment(completed, into if into is not None else PaymentCreated()))


def _copy_payment(source: PaymentCreated, target: PaymentCreated) -> PaymentCreated:
    target.payment_id = source.payment_id
    target.status = source.status
    target.created_at = source.created_at
    return target
