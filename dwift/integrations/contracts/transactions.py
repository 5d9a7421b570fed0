"""
Transaction contract: serialization of send requests and the enum value
tables shared by requests and parsed transaction listings.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from .interfaces import DestinationType, SendRequest, TransactionStatus, TransactionType
from .keys import RequestKeys

E = TypeVar("E", bound=Enum)

# ---------------------------------------------------------------------------
# Enum <-> JSON value tables
# ---------------------------------------------------------------------------

JSON_VALUES: Dict[Enum, str] = {
    DestinationType.DWOLLA: "dwolla",
    DestinationType.EMAIL: "email",
    DestinationType.PHONE: "phone",
    DestinationType.TWITTER: "twitter",
    DestinationType.FACEBOOK: "facebook",
    DestinationType.LINKEDIN: "linkedin",
    TransactionStatus.PENDING: "pending",
    TransactionStatus.PROCESSED: "processed",
    TransactionStatus.FAILED: "failed",
    TransactionStatus.CANCELLED: "cancelled",
    TransactionStatus.RECLAIMED: "reclaimed",
    TransactionType.MONEY_SENT: "money_sent",
    TransactionType.MONEY_RECEIVED: "money_received",
    TransactionType.DEPOSIT: "deposit",
    TransactionType.WITHDRAWAL: "withdrawal",
    TransactionType.FEE: "fee",
}


def to_json_value(value: Any) -> str:
    """Return the wire string for an enum member; unknown values map to ""."""
    return JSON_VALUES.get(value, "")


def from_json_value(enum_type: Type[E], raw: Any) -> Optional[E]:
    """Reverse lookup, case-insensitive. Returns None for unrecognised values."""
    if not isinstance(raw, str):
        return None
    wanted = raw.strip().lower()
    for member in enum_type:
        if JSON_VALUES.get(member) == wanted:
            return member
    return None


# ---------------------------------------------------------------------------
# Send request
# ---------------------------------------------------------------------------

def send_request_to_json(request: SendRequest) -> Dict[str, Any]:
    """Serialize a SendRequest. Optional fields are omitted when unset."""
    body: Dict[str, Any] = {
        RequestKeys.DESTINATION_ID: request.destination_id,
        RequestKeys.PIN: request.pin,
        RequestKeys.AMOUNT: request.amount,
    }
    optional = {
        RequestKeys.DESTINATION_TYPE: (
            to_json_value(request.destination_type) if request.destination_type is not None else None
        ),
        RequestKeys.FUNDS_SOURCE: request.funds_source,
        RequestKeys.NOTES: request.notes,
        RequestKeys.ASSUME_COSTS: request.assume_costs,
        RequestKeys.ADDITIONAL_FEES: request.additional_fees,
        RequestKeys.METADATA: dict(request.metadata) if request.metadata is not None else None,
        RequestKeys.ASSUME_ADDITIONAL_FEES: request.assume_additional_fees,
        RequestKeys.FACILITATOR_AMOUNT: request.facilitator_amount,
    }
    body.update({key: value for key, value in optional.items() if value is not None})
    return body


def is_exact_json_number(value: Decimal) -> bool:
    """True when the stdlib json encoder can write value without rounding it."""
    if not value.is_finite():
        return False
    return Decimal(repr(float(value))) == value


def validate_send_request(request: SendRequest) -> List[str]:
    """
    Return a list of validation errors.
    Empty list means the request is valid.
    """
    errors: List[str] = []

    if not isinstance(request.destination_id, str) or not request.destination_id.strip():
        errors.append("destination_id is required")
    if not isinstance(request.pin, str) or not request.pin:
        errors.append("pin is required")
    if not request.amount.is_finite() or request.amount <= 0:
        errors.append("amount must be greater than zero")
    elif not is_exact_json_number(request.amount):
        errors.append("amount has more precision than can be sent")
    if request.facilitator_amount is not None and (
        not request.facilitator_amount.is_finite() or request.facilitator_amount < 0
    ):
        errors.append("facilitator_amount must be a non-negative number")
    elif request.facilitator_amount is not None and not is_exact_json_number(request.facilitator_amount):
        errors.append("facilitator_amount has more precision than can be sent")
    if request.metadata is not None and (
        not isinstance(request.metadata, Mapping)
        or not all(isinstance(k, str) and isinstance(v, str) for k, v in request.metadata.items())
    ):
        errors.append("metadata must map strings to strings")

    return errors
