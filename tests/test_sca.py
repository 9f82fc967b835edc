"""Tests for step-up resolution."""

import pytest

from neonomics import (
    ErrorPayload,
    InvalidConsentError,
    InvalidStepUpDataError,
    UnexpectedStatusError,
    resolve_step_up,
)
from neonomics.sca import is_platform_url

from tests.conftest import consent_error

HEADERS = {"authorization": "Bearer access-1", "x-device-id": "device-1", "x-session-id": "s1"}


def error_with(*links) -> ErrorPayload:
    return ErrorPayload.model_validate(consent_error(links=list(links)))


@pytest.mark.parametrize("href, expected", [
    ("https://neonomics.io/x", True),
    ("https://sandbox.neonomics.io/x", True),
    ("https://API.Neonomics.io/x", True),
    ("https://bank.example.com/neonomics.io", False),
    ("https://neonomics.io.evil.example/x", False),
    ("https://notneonomics.io/x", False),
    ("not a url", False),
])
def test_is_platform_url(href, expected):
    assert is_platform_url(href, "neonomics.io") is expected


@pytest.mark.asyncio
async def test_third_party_link_is_handed_out(server, http):
    error = error_with({"type": "GET", "href": "https://bank.example.com/auth", "meta": {"id": "s9"}})

    descriptor = await resolve_step_up(http, HEADERS, error)

    assert descriptor.url == "https://bank.example.com/auth"
    assert descriptor.id == "s9"
    assert descriptor.error == error
    assert server.requests == []


@pytest.mark.asyncio
async def test_platform_link_is_followed(server, http):
    server.add("GET", "/x", (200, {"message": "", "paymentId": "", "links": [
        {"href": "https://visit", "meta": {"id": "s1"}},
    ]}))
    error = error_with({"type": "GET", "href": "https://sandbox.neonomics.io/x", "meta": {"id": "s1"}})

    descriptor = await resolve_step_up(http, HEADERS, error)

    assert descriptor.url == "https://visit"
    assert descriptor.id == "s1"
    assert len(server.requests) == 1
    followed = server.requests[0]
    assert followed.headers["authorization"] == "Bearer access-1"
    assert followed.headers["x-session-id"] == "s1"


@pytest.mark.asyncio
async def test_link_type_is_the_method(server, http):
    server.add("POST", "/sca", (200, {"links": [{"href": "https://visit", "meta": {"id": "s1"}}]}))
    error = error_with({"type": "post", "href": "https://sandbox.neonomics.io/sca", "meta": {"id": "s1"}})

    descriptor = await resolve_step_up(http, HEADERS, error)

    assert descriptor.url == "https://visit"
    assert server.requests[0].method == "POST"


@pytest.mark.asyncio
async def test_payment_id_wins_over_link_id(server, http):
    server.add("GET", "/payment-sca", (200, {"paymentId": "pay-1", "links": [
        {"href": "https://bank.example.com/sign", "meta": {"id": "s1"}},
    ]}))
    error = error_with({"type": "GET", "href": "https://sandbox.neonomics.io/payment-sca", "meta": {"id": "s1"}})

    descriptor = await resolve_step_up(http, HEADERS, error)

    assert descriptor.url == "https://bank.example.com/sign"
    assert descriptor.id == "pay-1"


@pytest.mark.asyncio
async def test_error_without_links(server, http):
    with pytest.raises(InvalidStepUpDataError):
        await resolve_step_up(http, HEADERS, error_with())
    assert server.requests == []


@pytest.mark.asyncio
async def test_consent_without_links(server, http):
    server.add("GET", "/x", (200, {"message": "nothing to see", "links": []}))
    error = error_with({"type": "GET", "href": "https://sandbox.neonomics.io/x", "meta": {"id": "s1"}})

    with pytest.raises(InvalidConsentError):
        await resolve_step_up(http, HEADERS, error)


@pytest.mark.asyncio
async def test_consent_endpoint_failure(server, http):
    server.add("GET", "/x", (503, None))
    error = error_with({"type": "GET", "href": "https://sandbox.neonomics.io/x", "meta": {"id": "s1"}})

    with pytest.raises(UnexpectedStatusError):
        await resolve_step_up(http, HEADERS, error)


@pytest.mark.asyncio
async def test_executor_follows_platform_link_with_its_own_headers(server, api):
    links = [{"type": "GET", "href": "https://sandbox.neonomics.io/ics/v3/consent/s1", "meta": {"id": "s1"}}]
    server.add("GET", "/ics/v3/accounts", (510, consent_error(links=links)))
    server.add("GET", "/ics/v3/consent/s1", (200, {"links": [{"href": "https://visit", "meta": {"id": "s1"}}]}))

    outcome = await api.accounts("s1")

    assert outcome.handle.url == "https://visit"
    assert outcome.handle.id == "s1"
    followed = server.sent("GET", "/ics/v3/consent/s1")[0]
    assert followed.headers["authorization"] == "Bearer access-1"
    assert followed.headers["x-device-id"] == "device-1"
    assert followed.headers["x-session-id"] == "s1"
