"""HTTP headers and constants package for the Neonomics client"""

from .constants import (
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_FORM_URLENCODED,
    HEADER_ACCEPT,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    HEADER_SESSION_ID,
    HEADER_REDIRECT_URL,
    HEADER_PSU_ID,
    HEADER_PSU_IP,
    HEADER_DEVICE_ID,
    STEP_UP_STATUS_CODES,
    SENSITIVE_HEADERS,
)

__all__ = [
    "CONTENT_TYPE_JSON",
    "CONTENT_TYPE_FORM_URLENCODED",
    "HEADER_ACCEPT",
    "HEADER_AUTHORIZATION",
    "HEADER_CONTENT_TYPE",
    "HEADER_SESSION_ID",
    "HEADER_REDIRECT_URL",
    "HEADER_PSU_ID",
    "HEADER_PSU_IP",
    "HEADER_DEVICE_ID",
    "STEP_UP_STATUS_CODES",
    "SENSITIVE_HEADERS",
]
