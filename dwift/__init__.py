"""
dwift - minimal async client for the Dwolla v1 money-transfer REST API.
"""

from .integrations.clients.real_http.dwolla_api import DwollaApiV2
from .integrations.contracts.interfaces import (
    DestinationType,
    Response,
    SendRequest,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from .utils.config_loader import ClientConfig, load_client_config

__all__ = [
    "DwollaApiV2",
    "DestinationType",
    "Response",
    "SendRequest",
    "Transaction",
    "TransactionStatus",
    "TransactionType",
    "ClientConfig",
    "load_client_config",
]
