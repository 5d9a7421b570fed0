"""
Dwolla v1 REST API client.

Purpose:
- Knows the service host and endpoint paths
- Builds domain requests (send money, balance, transaction listing)
- Delegates the round trip to a JsonClient and unwraps the
  {Success, Message, Response} envelope into a typed Response

Errors never propagate to callers: build, transport and envelope failures
all come back as Response(success=False, message=..., payload=None).
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, TypeVar

from dwift.error_handler import ErrorHandler
from dwift.integrations.clients.real_http.json_client import HttpxJsonClient
from dwift.integrations.contracts.interfaces import (
    DwollaApi,
    HttpMethod,
    JsonClient,
    JsonRequest,
    Response,
    SendRequest,
    Transaction,
    TransactionType,
)
from dwift.integrations.contracts.keys import Paths, RequestKeys
from dwift.integrations.contracts.transactions import send_request_to_json, to_json_value, validate_send_request
from dwift.integrations.errors import BuildError, TransportError
from dwift.integrations.policy.response_wrappers import parse_envelope, to_amount, to_transactions
from dwift.utils.config_loader import ClientConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DwollaApiV2(DwollaApi):
    def __init__(
        self,
        token: str,
        host: str = Paths.HOST,
        client: Optional[JsonClient] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        self.headers: Dict[str, Optional[str]] = {"Authorization": f"Bearer {token}"}
        self.host = host.rstrip("/")
        self.client = client or HttpxJsonClient()
        self.error_handler = error_handler or ErrorHandler()

    @classmethod
    def from_config(cls, config: ClientConfig, client: Optional[JsonClient] = None) -> "DwollaApiV2":
        return cls(
            token=config.token,
            host=config.host,
            client=client or HttpxJsonClient(timeout_seconds=config.timeout_seconds),
        )

    async def send(self, request: SendRequest) -> Response[Decimal]:
        try:
            errors = validate_send_request(request)
            body = None if errors else send_request_to_json(request)
        except Exception as exc:
            return self.error_handler.handle_exception(exc, context={"operation": "send"})
        if errors:
            return Response(success=False, message="; ".join(errors))
        return await self._post(Paths.SEND, body, to_amount)

    async def balance(self) -> Response[Decimal]:
        return await self._get(Paths.BALANCE, None, to_amount)

    async def list_transactions(
        self,
        types: Optional[Sequence[TransactionType]] = None,
        limit: Optional[int] = None,
        skip: Optional[int] = None,
    ) -> Response[List[Transaction]]:
        params: Dict[str, str] = {}
        if types:
            params[RequestKeys.TYPES] = ",".join(to_json_value(t) for t in types)
        if limit is not None:
            params[RequestKeys.LIMIT] = str(limit)
        if skip is not None:
            params[RequestKeys.SKIP] = str(skip)
        return await self._get(Paths.TRANSACTIONS, params, to_transactions)

    async def _get(
        self,
        sub_path: str,
        params: Optional[Mapping[str, str]],
        transform: Callable[[Any], T],
    ) -> Response[T]:
        json_request = JsonRequest(
            url=self.host + sub_path,
            method=HttpMethod.GET,
            headers=self.headers,
            params=params or {},
        )
        return await self._execute(json_request, transform)

    async def _post(
        self,
        sub_path: str,
        body: Mapping[str, Any],
        transform: Callable[[Any], T],
    ) -> Response[T]:
        json_request = JsonRequest(
            url=self.host + sub_path,
            method=HttpMethod.POST,
            headers=self.headers,
            body=body,
        )
        return await self._execute(json_request, transform)

    async def _execute(self, json_request: JsonRequest, transform: Callable[[Any], T]) -> Response[T]:
        try:
            json_response = await self.client.execute(json_request)
        except (BuildError, TransportError) as exc:
            logger.warning("%s %s failed: %s", json_request.method.value, json_request.url, exc)
            return Response(success=False, message=str(exc))
        except Exception as exc:
            return self.error_handler.handle_exception(
                exc, context={"method": json_request.method.value, "url": json_request.url}
            )

        return parse_envelope(json_response.body, transform)
