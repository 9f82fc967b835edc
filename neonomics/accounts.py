"""Account information"""

from typing import TYPE_CHECKING

from .errors import InvalidAccountIDError, InvalidSessionIDError
from .request import RequestOption, build_request, session_id as session_header
from .sca import Outcome

if TYPE_CHECKING:
    from .api_client import NeoAPI


async def list_accounts(api: "NeoAPI", session_id: str, *options: RequestOption) -> Outcome:
    """List all accounts available in the given session

    The outcome value is a list of Account, unless the bank asks for
    consent first.
    """
    if not session_id:
        raise InvalidSessionIDError()
    request = build_request("GET", "/ics/v3/accounts", None, *options, session_header(session_id))
    return await api.execute(request, 200, "AccountList")


async def account_by_id(
    api: "NeoAPI",
    session_id: str,
    account_id: str,
    *options: RequestOption
) -> Outcome:
    """Return the account with the given ID"""
    if not session_id:
        raise InvalidSessionIDError()
    if not account_id:
        raise InvalidAccountIDError()
    request = build_request("GET", f"/ics/v3/accounts/{account_id}", None, *options, session_header(session_id))
    return await api.execute(request, 200, "Account")
