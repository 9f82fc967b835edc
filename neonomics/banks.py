"""Bank directory lookups"""

from typing import TYPE_CHECKING, List
from urllib.parse import quote_plus

from .errors import InvalidBankIDError
from .models import Bank
from .request import PreparedRequest, build_request

if TYPE_CHECKING:
    from .api_client import NeoAPI


async def list_banks(api: "NeoAPI") -> List[Bank]:
    """Return all available banks"""
    return await _banks(api, build_request("GET", "/ics/v3/banks"))


async def banks_by_country(api: "NeoAPI", country_code: str) -> List[Bank]:
    """Return all available banks for the given country code"""
    request = build_request("GET", f"/ics/v3/banks?countryCode={quote_plus(country_code)}")
    return await _banks(api, request)


async def banks_by_name(api: "NeoAPI", name: str) -> List[Bank]:
    """Return all available banks with the given name"""
    request = build_request("GET", f"/ics/v3/banks?name={quote_plus(name)}")
    return await _banks(api, request)


async def bank_by_id(api: "NeoAPI", bank_id: str) -> Bank:
    if not bank_id:
        raise InvalidBankIDError()
    outcome = await api.execute(build_request("GET", f"/ics/v3/banks/{bank_id}"), 200, "Bank", step_up=False)
    return outcome.value


async def _banks(api: "NeoAPI", request: PreparedRequest) -> List[Bank]:
    outcome = await api.execute(request, 200, "BankList", step_up=False)
    return available_only(outcome.value)


def available_only(banks: List[Bank]) -> List[Bank]:
    return [b for b in banks if b.available]
