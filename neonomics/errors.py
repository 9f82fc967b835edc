"""Exception hierarchy for the Neonomics client

Every error raised by the client derives from NeoError. Validation errors
are raised before any network traffic takes place; all other errors are
terminal results for the call that raised them.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import ErrorPayload


class NeoError(Exception):
    """Base class for all client errors"""


class ValidationError(NeoError, ValueError):
    """A required argument is missing or malformed"""

    default_message = "invalid request"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class InvalidAuthRequestError(ValidationError):
    default_message = "invalid auth request"


class InvalidBankIDError(ValidationError):
    default_message = "invalid bank ID"


class InvalidSessionIDError(ValidationError):
    default_message = "invalid session ID"


class InvalidAccountIDError(ValidationError):
    default_message = "invalid account ID"


class InvalidPaymentRequestError(ValidationError):
    default_message = "invalid payment request"


class InvalidAccountInfoError(ValidationError):
    default_message = "invalid account info"


class InvalidRemittanceInfoError(ValidationError):
    default_message = "invalid remittance info"


class InvalidPaymentTypeError(ValidationError):
    default_message = "invalid payment type"


class InvalidPaymentIDError(ValidationError):
    default_message = "invalid payment ID"


class TransportError(NeoError):
    """The request never produced an HTTP response"""


class DecodeError(NeoError):
    """A response body could not be decoded"""


class AuthenticationError(NeoError):
    """The token could not be refreshed, or the refreshed token was rejected"""


class UnexpectedStatusError(NeoError):
    """The server answered with a status the call does not handle"""

    def __init__(self, status_code: int, reason: str = "", url: str = ""):
        self.status_code = status_code
        self.reason = reason
        self.url = url
        status = f"{status_code} {reason}".strip()
        message = f"unexpected HTTP response: {status}"
        if url:
            message = f"{message} ({url})"
        super().__init__(message)


class StepUpProtocolError(NeoError):
    """The platform's step-up data violates the expected contract"""

    default_message = "invalid step-up data"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class InvalidStepUpDataError(StepUpProtocolError):
    default_message = "invalid SCA data"


class InvalidConsentError(StepUpProtocolError):
    default_message = "invalid consent"


class PlatformError(NeoError):
    """Business error reported by the platform

    Raised for step-up status responses that cannot be turned into a
    resumption handle.
    """

    def __init__(self, payload: "ErrorPayload"):
        self.payload = payload
        super().__init__(f"{payload.type} error {payload.error_code}: {payload.message}")

    @property
    def error_code(self) -> str:
        return self.payload.error_code

    @property
    def type(self) -> str:
        return self.payload.type
