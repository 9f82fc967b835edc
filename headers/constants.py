"""HTTP header names, content types and status codes used by the Neonomics API"""

from typing import FrozenSet

# Content types
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_FORM_URLENCODED = "application/x-www-form-urlencoded"

# Fixed headers, always set last on outgoing requests
HEADER_ACCEPT = "accept"
HEADER_AUTHORIZATION = "authorization"
HEADER_CONTENT_TYPE = "content-type"

# Caller-settable headers
HEADER_SESSION_ID = "x-session-id"
HEADER_REDIRECT_URL = "x-redirect-url"
HEADER_PSU_ID = "x-psu-id"
HEADER_PSU_IP = "x-psu-ip-address"
HEADER_DEVICE_ID = "x-device-id"

# Platform-specific status codes signalling that Strong Customer
# Authentication is required before the call can complete
STEP_UP_STATUS_CODES: FrozenSet[int] = frozenset({510, 520, 530})

# Headers whose values are never written to logs
SENSITIVE_HEADERS: FrozenSet[str] = frozenset({HEADER_AUTHORIZATION, HEADER_PSU_ID})
