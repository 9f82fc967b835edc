"""Tests for the bank, session, consent, account and transaction calls."""

import pytest

from neonomics import (
    InvalidAccountIDError,
    InvalidBankIDError,
    InvalidSessionIDError,
    PlatformError,
    psu_id,
)

from tests.conftest import consent_error

BANKS = [
    {"id": "dnb", "bankDisplayName": "DNB", "countryCode": "NO", "status": "AVAILABLE",
     "supportedServices": ["AIS", "PIS"], "bic": "DNBANOKK"},
    {"id": "old", "bankDisplayName": "Old Bank", "countryCode": "NO", "status": "UNAVAILABLE"},
]


@pytest.mark.asyncio
async def test_banks_only_available(server, api):
    server.add("GET", "/ics/v3/banks", (200, BANKS))

    banks = await api.banks()

    assert [b.id for b in banks] == ["dnb"]
    assert banks[0].supported_services == ["AIS", "PIS"]


@pytest.mark.asyncio
async def test_banks_by_country_and_name(server, api):
    server.add("GET", "/ics/v3/banks", (200, BANKS))

    await api.banks_by_country("NO")
    await api.banks_by_name("Sparebank 1")

    assert server.requests[0].url.params["countryCode"] == "NO"
    assert server.requests[1].url.params["name"] == "Sparebank 1"


@pytest.mark.asyncio
async def test_bank_by_id(server, api):
    server.add("GET", "/ics/v3/banks/dnb", (200, BANKS[0]))

    bank = await api.bank_by_id("dnb")

    assert bank.bic == "DNBANOKK"


@pytest.mark.asyncio
async def test_empty_identifiers_are_rejected(server, api):
    with pytest.raises(InvalidBankIDError):
        await api.bank_by_id("")
    with pytest.raises(InvalidBankIDError):
        await api.new_session("")
    with pytest.raises(InvalidSessionIDError):
        await api.session_status("")
    with pytest.raises(InvalidSessionIDError):
        await api.accounts("")
    with pytest.raises(InvalidAccountIDError):
        await api.account_by_id("s-1", "")
    with pytest.raises(InvalidAccountIDError):
        await api.transactions("s-1", "")
    assert server.requests == []


@pytest.mark.asyncio
async def test_session_lifecycle(server, api):
    server.add("POST", "/ics/v3/session", (201, {"sessionId": "abc"}))
    server.add("GET", "/ics/v3/session/abc", (200, {"bankId": "dnb", "bankName": "DNB", "createdAt": "1600000000"}))
    server.add("DELETE", "/ics/v3/session/abc", (204, None))

    session = await api.new_session("dnb")
    status = await api.session_status(session.id)
    await api.delete_session(session.id)

    assert session.id == "abc"
    assert status.bank_name == "DNB"
    assert [r.method for r in server.requests] == ["POST", "GET", "DELETE"]


@pytest.mark.asyncio
async def test_session_step_up_is_a_platform_error(server, api):
    links = [{"type": "GET", "href": "https://bank.example.com", "meta": {"id": "s"}}]
    server.add("POST", "/ics/v3/session", (510, consent_error(links=links)))

    with pytest.raises(PlatformError):
        await api.new_session("dnb")


@pytest.mark.asyncio
async def test_consent(server, api):
    server.add("GET", "/ics/v3/consent/s-1", (200, {"links": [{"href": "https://visit", "meta": {"id": "s-1"}}]}))

    outcome = await api.consent("s-1")

    assert outcome.value.links[0].href == "https://visit"


@pytest.mark.asyncio
async def test_account_by_id_with_psu_id(server, api):
    server.add("GET", "/ics/v3/accounts/acc-1", (200, {
        "id": "acc-1",
        "iban": "NO9386011117947",
        "balances": [{"amount": "100.50", "currency": "NOK", "type": "CLBD"}],
    }))

    outcome = await api.account_by_id("s-1", "acc-1", psu_id("encrypted"))

    assert outcome.value.balances[0].amount == "100.50"
    sent = server.requests[0]
    assert sent.headers["x-psu-id"] == "encrypted"
    assert sent.headers["x-session-id"] == "s-1"


@pytest.mark.asyncio
async def test_transactions(server, api):
    server.add("GET", "/ics/v3/accounts/acc-1/transactions", (200, [{
        "id": "tx-1",
        "transactionAmount": {"currency": "NOK", "value": "12.00"},
        "creditDebitIndicator": "DBIT",
        "bookingDate": "2020-10-01T00:00:00Z",
        "counterpartyName": "Shop",
    }]))

    outcome = await api.transactions("s-1", "acc-1")

    tx = outcome.value[0]
    assert tx.transaction_amount.value == "12.00"
    assert tx.booking_date.day == 1
    assert tx.counterparty_name == "Shop"
