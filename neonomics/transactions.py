"""Account transactions"""

from typing import TYPE_CHECKING

from .errors import InvalidAccountIDError, InvalidSessionIDError
from .request import RequestOption, build_request, session_id as session_header
from .sca import Outcome

if TYPE_CHECKING:
    from .api_client import NeoAPI


async def list_transactions(
    api: "NeoAPI",
    session_id: str,
    account_id: str,
    *options: RequestOption
) -> Outcome:
    """List the transactions of the given account

    The outcome value is a list of Transaction.
    """
    if not session_id:
        raise InvalidSessionIDError()
    if not account_id:
        raise InvalidAccountIDError()
    uri = f"/ics/v3/accounts/{account_id}/transactions"
    request = build_request("GET", uri, None, *options, session_header(session_id))
    return await api.execute(request, 200, "TransactionList")
