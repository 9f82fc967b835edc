"""Bank session lifecycle"""

from typing import TYPE_CHECKING

from .errors import InvalidBankIDError, InvalidSessionIDError
from .models import Session, SessionStatus
from .request import build_request

if TYPE_CHECKING:
    from .api_client import NeoAPI


async def new_session(api: "NeoAPI", bank_id: str) -> Session:
    """Create a new session for the given bank ID"""
    if not bank_id:
        raise InvalidBankIDError()
    request = build_request("POST", "/ics/v3/session", {"bankId": bank_id})
    outcome = await api.execute(request, 201, "Session", step_up=False)
    return outcome.value


async def session_status(api: "NeoAPI", session_id: str) -> SessionStatus:
    """Return the details of the given session"""
    if not session_id:
        raise InvalidSessionIDError()
    request = build_request("GET", f"/ics/v3/session/{session_id}")
    outcome = await api.execute(request, 200, "SessionStatus", step_up=False)
    return outcome.value


async def delete_session(api: "NeoAPI", session_id: str) -> None:
    """Delete and invalidate the given session"""
    if not session_id:
        raise InvalidSessionIDError()
    request = build_request("DELETE", f"/ics/v3/session/{session_id}")
    await api.execute(request, 204, step_up=False)
