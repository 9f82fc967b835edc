"""Consent lookups"""

from typing import TYPE_CHECKING

from .errors import InvalidSessionIDError
from .request import RequestOption, build_request
from .sca import Outcome

if TYPE_CHECKING:
    from .api_client import NeoAPI


async def get_consent(api: "NeoAPI", session_id: str, *options: RequestOption) -> Outcome:
    """Return what the end-user needs to consent to for the given session

    The outcome value is a Consent.
    """
    if not session_id:
        raise InvalidSessionIDError()
    request = build_request("GET", f"/ics/v3/consent/{session_id}", None, *options)
    return await api.execute(request, 200, "Consent")
