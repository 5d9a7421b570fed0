from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, ValidationError, field_validator

from dwift.integrations.contracts.interfaces import Entity, Response, Transaction, TransactionStatus, TransactionType
from dwift.integrations.contracts.transactions import from_json_value

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNKNOWN_ERROR = "Unknown error"


class IntegrationResponseError(ValueError):
    def __init__(self, message: str, *, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload


class EnvelopeModel(BaseModel):
    # Wire keys only; lower-case "success" etc. must not satisfy the envelope.
    model_config = ConfigDict(populate_by_name=False)

    success: StrictBool = Field(alias="Success")
    message: StrictStr = Field(alias="Message")
    response: Any = Field(default=None, alias="Response")


class EntityModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="Id")
    name: str = Field(default="", alias="Name")

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) and not isinstance(value, bool) else value


class TransactionModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="Id")
    amount: Decimal = Field(alias="Amount")
    status: Optional[str] = Field(default=None, alias="Status")
    type: Optional[str] = Field(default=None, alias="Type")
    date: Optional[datetime] = Field(default=None, alias="Date")
    source: Optional[EntityModel] = Field(default=None, alias="Source")
    destination: Optional[EntityModel] = Field(default=None, alias="Destination")
    notes: Optional[str] = Field(default=None, alias="Notes")
    metadata: Dict[str, Any] = Field(default_factory=dict, alias="Metadata")

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) and not isinstance(value, bool) else value

    @field_validator("amount", mode="before")
    @classmethod
    def _check_amount(cls, value: Any) -> Decimal:
        return to_amount(value)

    @field_validator("metadata", mode="before")
    @classmethod
    def _default_metadata(cls, value: Any) -> Any:
        return {} if value is None else value


def parse_envelope(body: Optional[Mapping[str, Any]], transform: Callable[[Any], T]) -> Response[T]:
    """
    Unwrap {Success, Message, Response} into a typed Response.

    A malformed envelope, or a payload the transform rejects, fails closed
    with "Unknown error". A well-formed failure envelope keeps its server
    message ("Invalid account PIN", ...) and never runs the transform, since
    a failed call carries no payload; it is not collapsed into "Unknown error".
    """
    if body is None:
        logger.warning("Empty response body; cannot read envelope")
        return Response(success=False, message=UNKNOWN_ERROR)

    try:
        envelope = EnvelopeModel.model_validate(dict(body))
    except ValidationError as exc:
        logger.warning("Malformed response envelope: %s", exc.errors())
        return Response(success=False, message=UNKNOWN_ERROR)

    if not envelope.success:
        return Response(success=False, message=envelope.message)

    try:
        payload = transform(envelope.response)
    except (IntegrationResponseError, ValueError, TypeError) as exc:
        logger.warning("Response payload rejected: %s", exc)
        return Response(success=False, message=UNKNOWN_ERROR)

    return Response(success=True, message=envelope.message, payload=payload)


# ---------------------------------------------------------------------------
# Payload transforms
# ---------------------------------------------------------------------------

def to_amount(value: Any) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise IntegrationResponseError(f"Expected a numeric amount, got {value!r}", payload=value)
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    if not amount.is_finite():
        raise IntegrationResponseError(f"Amount is not finite: {value!r}", payload=value)
    return amount


def to_transactions(value: Any) -> List[Transaction]:
    if not isinstance(value, list):
        raise IntegrationResponseError(f"Expected a list of transactions, got {type(value).__name__}", payload=value)
    return [_to_transaction(item) for item in value]


def _to_transaction(raw: Any) -> Transaction:
    if not isinstance(raw, dict):
        raise IntegrationResponseError("Transaction entry is not an object", payload=raw)
    try:
        model = TransactionModel.model_validate(raw)
    except ValidationError as exc:
        raise IntegrationResponseError(f"Transaction validation failed: {exc}", payload=raw) from exc

    return Transaction(
        id=model.id,
        amount=model.amount,
        status=from_json_value(TransactionStatus, model.status),
        type=from_json_value(TransactionType, model.type),
        date=model.date,
        source=_to_entity(model.source),
        destination=_to_entity(model.destination),
        notes=model.notes,
        metadata=model.metadata,
    )


def _to_entity(model: Optional[EntityModel]) -> Optional[Entity]:
    if model is None:
        return None
    return Entity(id=model.id, name=model.name)
