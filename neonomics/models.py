"""Pydantic models for the Neonomics API"""

from datetime import datetime
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .errors import (
    DecodeError,
    InvalidAccountInfoError,
    InvalidPaymentRequestError,
    InvalidPaymentTypeError,
    InvalidRemittanceInfoError,
)


class NeoModel(BaseModel):
    """Base model: camelCase on the wire, snake_case in Python"""
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# Links & errors

class LinkMeta(NeoModel):
    id: str = ""


class Link(NeoModel):
    """Hypermedia link; ``type`` is the HTTP method used to follow it"""
    type: str = ""
    rel: str = ""
    href: str = ""
    meta: LinkMeta = Field(default_factory=LinkMeta)


class ErrorPayload(NeoModel):
    """Error body returned alongside a step-up status code"""
    id: str = ""
    error_code: str = Field(default="", alias="errorCode")
    message: str = ""
    source: str = ""
    type: str = ""
    timestamp: int = 0
    links: List[Link] = Field(default_factory=list)

    def is_consent_error(self) -> bool:
        return self.type == "CONSENT" and self.error_code == "1426"

    def is_payment_auth_error(self) -> bool:
        return self.type == "CONSENT" and self.error_code == "1428"


class Consent(NeoModel):
    message: str = ""
    # Only present on payment consents
    payment_id: str = Field(default="", alias="paymentId")
    links: List[Link] = Field(default_factory=list)


# Banks & sessions

class Bank(NeoModel):
    country_code: str = Field(default="", alias="countryCode")
    banking_group_name: str = Field(default="", alias="bankingGroupName")
    # The platform sends this either as a JSON bool or as "true"/"false"
    identification_required: bool = Field(default=False, alias="personalIdentificationRequired")
    id: str = ""
    bank_display_name: str = Field(default="", alias="bankDisplayName")
    supported_services: List[str] = Field(default_factory=list, alias="supportedServices")
    bic: str = ""
    bank_official_name: str = Field(default="", alias="bankOfficialName")
    status: str = ""

    @property
    def available(self) -> bool:
        return self.status == "AVAILABLE"


class Session(NeoModel):
    id: str = Field(default="", alias="sessionId")


class SessionStatus(NeoModel):
    bank_id: str = Field(default="", alias="bankId")
    bank_name: str = Field(default="", alias="bankName")
    created_at: str = Field(default="", alias="createdAt")
    provider_id: str = Field(default="", alias="providerId")


# Accounts & transactions

class Balance(NeoModel):
    amount: str = ""
    currency: str = ""
    type: str = ""


class Account(NeoModel):
    id: str = ""
    bban: str = ""
    iban: str = ""
    sort_code_account_number: str = Field(default="", alias="sortCodeAccountNumber")
    account_name: str = Field(default="", alias="accountName")
    account_type: str = Field(default="", alias="accountType")
    owner_name: str = Field(default="", alias="ownerName")
    display_name: str = Field(default="", alias="displayName")
    balances: List[Balance] = Field(default_factory=list)


class Money(NeoModel):
    currency: str = ""
    value: str = ""


class Transaction(NeoModel):
    id: str = ""
    transaction_reference: str = Field(default="", alias="transactionReference")
    transaction_amount: Optional[Money] = Field(default=None, alias="transactionAmount")
    credit_debit_indicator: str = Field(default="", alias="creditDebitIndicator")
    booking_date: Optional[datetime] = Field(default=None, alias="bookingDate")
    value_date: Optional[datetime] = Field(default=None, alias="valueDate")
    counterparty_account: str = Field(default="", alias="counterpartyAccount")
    counterparty_name: str = Field(default="", alias="counterpartyName")
    counterparty_agent: str = Field(default="", alias="counterpartyAgent")


# Payments

class PaymentType(str, Enum):
    DOMESTIC = "domestic-transfer"
    DOMESTIC_SCHEDULED = "domestic-scheduled-transfer"
    SEPA = "sepa-credit"
    SEPA_SCHEDULED = "sepa-scheduled-credit"

    @classmethod
    def parse(cls, value: Any) -> "PaymentType":
        try:
            return cls(value)
        except ValueError:
            raise InvalidPaymentTypeError(f"invalid payment type: {value!r}") from None


class PaymentCode(str, Enum):
    COMMERCIAL = "GDDS"
    INVOICE = "IVPT"
    P2P = "MP2P"
    OTHER = "OTHR"
    ELECTRONIC = "SCVE"


class AccountInfo(NeoModel):
    bban: Optional[str] = None
    iban: Optional[str] = None
    sort_code_account_number: Optional[str] = Field(default=None, alias="sortCodeAccountNumber")

    def ensure_valid(self) -> None:
        if not (self.bban or self.iban or self.sort_code_account_number):
            raise InvalidAccountInfoError()


class RemittanceInfoStructured(NeoModel):
    reference: Optional[str] = None
    issuer: Optional[str] = Field(default=None, alias="referenceIssuer")
    type: Optional[str] = Field(default=None, alias="referenceType")

    def ensure_valid(self) -> None:
        if not (self.reference or self.issuer or self.type):
            raise InvalidRemittanceInfoError()


class Address(NeoModel):
    street_name: str = Field(default="", alias="streetName")
    building_number: str = Field(default="", alias="buildingNumber")
    postal_code: str = Field(default="", alias="postalCode")
    city: str = ""
    country: str = ""


class Agent(NeoModel):
    id: str = Field(default="", alias="identification")
    id_type: str = Field(default="", alias="identificationType")


class PaymentMetadata(NeoModel):
    address: Optional[Address] = Field(default=None, alias="creditorAddress")
    agent: Optional[Agent] = Field(default=None, alias="creditorAgent")
    code: Optional[PaymentCode] = Field(default=None, alias="paymentContextCode")
    merchant_category_code: Optional[str] = Field(default=None, alias="merchantCategoryCode")
    merchant_customer_id: Optional[str] = Field(default=None, alias="merchantCustomerIdentification")


class PaymentRequest(NeoModel):
    debtor_account: Optional[AccountInfo] = Field(default=None, alias="debtorAccount")
    debtor_name: str = Field(default="", alias="debtorName")
    creditor_account: Optional[AccountInfo] = Field(default=None, alias="creditorAccount")
    creditor_name: str = Field(default="", alias="creditorName")
    remittance_info_unstructured: Optional[str] = Field(default=None, alias="remittanceInformationUnstructured")
    remittance_info_structured: Optional[RemittanceInfoStructured] = Field(
        default=None, alias="remittanceInformationStructured"
    )
    instrumented_amount: str = Field(default="", alias="instrumentedAmount")
    currency: str = ""
    end_to_end_identification: str = Field(default="", alias="endToEndIdentification")
    payment_metadata: Optional[PaymentMetadata] = Field(default=None, alias="paymentMetadata")
    requested_execution_date: Optional[datetime] = Field(default=None, alias="requestedExecutionDate")

    def ensure_valid(self) -> None:
        """Raise a ValidationError subclass if the request cannot be sent

        Exactly one of the unstructured and structured remittance fields
        must be provided, and both accounts must carry an identifier.
        """
        required = (
            self.debtor_name,
            self.creditor_name,
            self.instrumented_amount,
            self.currency,
            self.end_to_end_identification,
        )
        if not all(required):
            raise InvalidPaymentRequestError()

        if not self.remittance_info_unstructured:
            if self.remittance_info_structured is None:
                raise InvalidRemittanceInfoError()
            self.remittance_info_structured.ensure_valid()
        elif self.remittance_info_structured is not None:
            raise InvalidPaymentRequestError("both structured and unstructured remittance info given")

        if self.debtor_account is None or self.creditor_account is None:
            raise InvalidAccountInfoError()
        self.debtor_account.ensure_valid()
        self.creditor_account.ensure_valid()


class PaymentCreated(NeoModel):
    payment_id: str = Field(default="", alias="paymentId")
    status: str = ""
    created_at: Optional[datetime] = Field(default=None, alias="creationDateTime")


# Result decoding
#
# Result types are referenced by name so that suspended calls stay
# serializable.

RESULT_TYPES: Dict[str, Any] = {
    "Account": Account,
    "AccountList": List[Account],
    "Bank": Bank,
    "BankList": List[Bank],
    "Consent": Consent,
    "PaymentCreated": PaymentCreated,
    "Session": Session,
    "SessionStatus": SessionStatus,
    "TransactionList": List[Transaction],
}


def register_result_type(name: str, tp: Any) -> None:
    """Make ``tp`` available as a result type under ``name``"""
    RESULT_TYPES[name] = tp
    _adapter.cache_clear()


@lru_cache(maxsize=None)
def _adapter(name: str) -> TypeAdapter:
    try:
        return TypeAdapter(RESULT_TYPES[name])
    except KeyError:
        raise ValueError(f"unknown result type: {name!r}") from None


def decode_result(name: str, content: bytes) -> Any:
    """Decode a JSON body into the result type registered as ``name``"""
    try:
        return _adapter(name).validate_json(content)
    except PydanticValidationError as e:
        raise DecodeError(f"neo: failed to decode JSON into {name}: {e}") from e


def decode_model(model: type, content: bytes, what: str) -> Any:
    try:
        return model.model_validate_json(content)
    except PydanticValidationError as e:
        raise DecodeError(f"neo: failed to decode {what}: {e}") from e
