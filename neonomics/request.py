"""Prepared requests and the options callers use to adjust them

An option is a callable that sets headers on the request being built.
In most cases one of the provided helpers is enough: session_id,
redirect_url, psu_id, psu_ip, device_id.
"""

from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from headers import (
    HEADER_DEVICE_ID,
    HEADER_PSU_ID,
    HEADER_PSU_IP,
    HEADER_REDIRECT_URL,
    HEADER_SESSION_ID,
)

RequestOption = Callable[[Dict[str, str]], None]


class PreparedRequest(BaseModel):
    """Immutable description of one API call

    ``target`` is either a path relative to the client base URL or an
    absolute URL. ``body`` is any JSON-serializable value.
    """
    model_config = ConfigDict(frozen=True)

    method: str
    target: str
    body: Optional[Any] = None
    headers: Dict[str, str] = Field(default_factory=dict)


def build_request(
    method: str,
    target: str,
    body: Optional[Any] = None,
    *options: RequestOption
) -> PreparedRequest:
    """Apply ``options`` in order and freeze the result"""
    headers: Dict[str, str] = {}
    for option in options:
        option(headers)
    return PreparedRequest(method=method.upper(), target=target, body=body, headers=headers)


def _set(name: str, value: str) -> RequestOption:
    def option(headers: Dict[str, str]) -> None:
        headers[name] = value
    return option


def session_id(value: str) -> RequestOption:
    """Set the x-session-id header"""
    return _set(HEADER_SESSION_ID, value)


def redirect_url(value: str) -> RequestOption:
    """Set the x-redirect-url header"""
    return _set(HEADER_REDIRECT_URL, value)


def psu_id(value: str) -> RequestOption:
    """Set the payment service user ID header

    The value is sent as given; the platform expects it encrypted.
    """
    return _set(HEADER_PSU_ID, value)


def psu_ip(value: str) -> RequestOption:
    """Set the payment service user IP header"""
    return _set(HEADER_PSU_IP, value)


def device_id(value: str) -> RequestOption:
    """Override the device ID header of the API instance"""
    return _set(HEADER_DEVICE_ID, value)


def with_headers(values: Dict[str, str]) -> RequestOption:
    """Copy every header from ``values``"""
    def option(headers: Dict[str, str]) -> None:
        headers.update(values)
    return option
