from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, TypeVar

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"


class DestinationType(str, Enum):
    DWOLLA = "Dwolla"
    EMAIL = "Email"
    PHONE = "Phone"
    TWITTER = "Twitter"
    FACEBOOK = "Facebook"
    LINKEDIN = "LinkedIn"


class TransactionStatus(str, Enum):
    PENDING = "Pending"
    PROCESSED = "Processed"
    FAILED = "Failed"
    CANCELLED = "Cancelled"
    RECLAIMED = "Reclaimed"


class TransactionType(str, Enum):
    MONEY_SENT = "MoneySent"
    MONEY_RECEIVED = "MoneyReceived"
    DEPOSIT = "Deposit"
    WITHDRAWAL = "Withdrawal"
    FEE = "Fee"


# ---------------------------------------------------------------------------
# Wire-level models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class JsonRequest:
    url: str
    method: HttpMethod = HttpMethod.GET
    headers: Mapping[str, Optional[str]] = field(default_factory=dict)
    params: Mapping[str, str] = field(default_factory=dict)
    body: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class JsonResponse:
    status: int
    headers: Mapping[str, str] = field(default_factory=dict)   # lower-cased keys
    body: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class Response(Generic[T]):
    success: bool
    message: str
    payload: Optional[T] = None


# ---------------------------------------------------------------------------
# Domain models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Entity:
    id: str
    name: str


@dataclass(frozen=True)
class SendRequest:
    destination_id: str
    pin: str
    amount: Decimal
    destination_type: Optional[DestinationType] = None
    funds_source: Optional[str] = None
    notes: Optional[str] = None
    assume_costs: Optional[bool] = None
    additional_fees: Optional[bool] = None
    metadata: Optional[Mapping[str, str]] = None
    assume_additional_fees: Optional[bool] = None
    facilitator_amount: Optional[Decimal] = None

    def __post_init__(self) -> None:
        # Amounts are carried as Decimal so cents survive serialization.
        object.__setattr__(self, "amount", _as_decimal(self.amount, "amount"))
        if self.facilitator_amount is not None:
            object.__setattr__(
                self, "facilitator_amount", _as_decimal(self.facilitator_amount, "facilitator_amount")
            )


@dataclass(frozen=True)
class Transaction:
    id: str
    amount: Decimal
    status: Optional[TransactionStatus]
    type: Optional[TransactionType]
    date: Optional[datetime] = None
    source: Optional[Entity] = None
    destination: Optional[Entity] = None
    notes: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


def _as_decimal(value: Any, label: str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise TypeError(f"{label} must be a number, got {type(value).__name__}")
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"{label} is not a valid amount: {value!r}") from exc


# ---------------------------------------------------------------------------
# Abstract client interfaces
# ---------------------------------------------------------------------------

class JsonClient(ABC):
    """Executes a JsonRequest and returns the decoded JsonResponse."""

    @abstractmethod
    async def execute(self, request: JsonRequest) -> JsonResponse:
        """Perform one round trip. Raises BuildError or TransportError."""


class DwollaApi(ABC):
    """Every Dwolla API client must implement this interface."""

    @abstractmethod
    async def send(self, request: SendRequest) -> Response[Decimal]:
        """Send money; the payload is the transaction amount."""

    @abstractmethod
    async def balance(self) -> Response[Decimal]:
        """Fetch the account balance."""

    @abstractmethod
    async def list_transactions(
        self,
        types: Optional[Sequence[TransactionType]] = None,
        limit: Optional[int] = None,
        skip: Optional[int] = None,
    ) -> Response[List[Transaction]]:
        """List the authorized account's transactions."""
