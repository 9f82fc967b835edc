"""Client for the Neonomics open-banking API"""

from .errors import (
    NeoError,
    ValidationError,
    InvalidAuthRequestError,
    InvalidBankIDError,
    InvalidSessionIDError,
    InvalidAccountIDError,
    InvalidPaymentRequestError,
    InvalidAccountInfoError,
    InvalidRemittanceInfoError,
    InvalidPaymentTypeError,
    InvalidPaymentIDError,
    TransportError,
    DecodeError,
    AuthenticationError,
    UnexpectedStatusError,
    StepUpProtocolError,
    InvalidStepUpDataError,
    InvalidConsentError,
    PlatformError,
)
from .models import (
    Account,
    AccountInfo,
    Address,
    Agent,
    Balance,
    Bank,
    Consent,
    ErrorPayload,
    Link,
    LinkMeta,
    Money,
    PaymentCode,
    PaymentCreated,
    PaymentMetadata,
    PaymentRequest,
    PaymentType,
    RemittanceInfoStructured,
    Session,
    SessionStatus,
    Transaction,
)
from .request import (
    PreparedRequest,
    RequestOption,
    build_request,
    session_id,
    redirect_url,
    psu_id,
    psu_ip,
    device_id,
)
from .sca import (
    ContinuationKind,
    Continuation,
    Outcome,
    ResumptionHandle,
    StepUpDescriptor,
    resolve_step_up,
)
from .oauth import Authenticator, TokenManager, TokenPair, TokenStorage
from .api_client import NeoAPI, NeoClient

__all__ = [
    "NeoClient",
    "NeoAPI",
    "Authenticator",
    "TokenManager",
    "TokenPair",
    "TokenStorage",
    "PreparedRequest",
    "RequestOption",
    "build_request",
    "session_id",
    "redirect_url",
    "psu_id",
    "psu_ip",
    "device_id",
    "ContinuationKind",
    "Continuation",
    "Outcome",
    "ResumptionHandle",
    "StepUpDescriptor",
    "resolve_step_up",
    "Account",
    "AccountInfo",
    "Address",
    "Agent",
    "Balance",
    "Bank",
    "Consent",
    "ErrorPayload",
    "Link",
    "LinkMeta",
    "Money",
    "PaymentCode",
    "PaymentCreated",
    "PaymentMetadata",
    "PaymentRequest",
    "PaymentType",
    "RemittanceInfoStructured",
    "Session",
    "SessionStatus",
    "Transaction",
    "NeoError",
    "ValidationError",
    "InvalidAuthRequestError",
    "InvalidBankIDError",
    "InvalidSessionIDError",
    "InvalidAccountIDError",
    "InvalidPaymentRequestError",
    "InvalidAccountInfoError",
    "InvalidRemittanceInfoError",
    "InvalidPaymentTypeError",
    "InvalidPaymentIDError",
    "TransportError",
    "DecodeError",
    "AuthenticationError",
    "UnexpectedStatusError",
    "StepUpProtocolError",
    "InvalidStepUpDataError",
    "InvalidConsentError",
    "PlatformError",
]
