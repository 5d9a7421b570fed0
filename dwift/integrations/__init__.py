"""
Integrations layer.
This package contains all code used to communicate with the Dwolla REST API.

Key rule:
- Callers MUST NOT talk HTTP directly; they go through DwollaApiV2.
- The mock server (clients/mocks) plugs into the same HttpxJsonClient, so tests
  and demos exercise the real request building and envelope parsing.
"""

from .contracts.interfaces import (
    DestinationType,
    DwollaApi,
    Entity,
    HttpMethod,
    JsonClient,
    JsonRequest,
    JsonResponse,
    Response,
    SendRequest,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from .contracts.keys import ErrorMessages, Paths, RequestKeys, ResponseKeys
from .contracts.transactions import (
    from_json_value,
    send_request_to_json,
    to_json_value,
    validate_send_request,
)
from .errors import (
    BuildError,
    DwiftError,
    InvalidJsonError,
    InvalidUrlError,
    NetworkError,
    SerializationError,
    TransportError,
)

__all__ = [
    # interfaces
    "DestinationType", "DwollaApi", "Entity", "HttpMethod", "JsonClient",
    "JsonRequest", "JsonResponse", "Response", "SendRequest", "Transaction",
    "TransactionStatus", "TransactionType",
    # keys
    "ErrorMessages", "Paths", "RequestKeys", "ResponseKeys",
    # transactions
    "from_json_value", "send_request_to_json", "to_json_value", "validate_send_request",
    # errors
    "BuildError", "DwiftError", "InvalidJsonError", "InvalidUrlError",
    "NetworkError", "SerializationError", "TransportError",
]
