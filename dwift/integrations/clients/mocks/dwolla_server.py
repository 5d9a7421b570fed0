"""
Mock Dwolla server.

Purpose:
- Simulates the Dwolla v1 endpoints used by DwollaApiV2 without any network calls
- Plugged into the real HttpxJsonClient through httpx.MockTransport, so the
  request builder, transport and envelope parsing all run unchanged

Behavior:
- Bearer token must match, otherwise "Invalid access token"
- send: wrong PIN -> "Invalid account PIN"; amount above balance ->
  "Insufficient balance"; otherwise the balance is debited and the amount echoed
- balance: current balance
- transactions: sends recorded so far, newest first, honoring limit/skip/types
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

import httpx

from dwift.integrations.clients.real_http.json_client import HttpxJsonClient
from dwift.integrations.contracts.keys import ErrorMessages, Paths, RequestKeys, ResponseKeys

logger = logging.getLogger(__name__)


class MockDwollaServer:
    def __init__(
        self,
        token: str = "mock-token",
        pin: str = "1234",
        balance: Decimal = Decimal("100.00"),
        account_id: str = "812-111-1111",
    ) -> None:
        self.token = token
        self.pin = pin
        self.balance = Decimal(balance)
        self.account_id = account_id
        self.requests: List[httpx.Request] = []
        self.transactions: List[Dict[str, Any]] = []

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def json_client(self) -> HttpxJsonClient:
        return HttpxJsonClient(transport=self.transport())

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        logger.info(f"[MOCK] {request.method} {path}")

        if request.headers.get("Authorization") != f"Bearer {self.token}":
            return self._envelope(False, ErrorMessages.INVALID_ACCESS_TOKEN)

        if request.method == "POST" and path.endswith(Paths.SEND):
            return self._send(json.loads(request.content or b"{}"))
        if request.method == "GET" and path.endswith(Paths.BALANCE):
            return self._envelope(True, "Success", float(self.balance))
        if request.method == "GET" and path.endswith(Paths.TRANSACTIONS):
            return self._list(request.url.params)
        return httpx.Response(404, json={ResponseKeys.SUCCESS: False, ResponseKeys.MESSAGE: "Not found"})

    def _send(self, body: Dict[str, Any]) -> httpx.Response:
        if body.get(RequestKeys.PIN) != self.pin:
            return self._envelope(False, ErrorMessages.INVALID_ACCOUNT_PIN)

        amount = Decimal(str(body.get(RequestKeys.AMOUNT, 0)))
        if amount > self.balance:
            return self._envelope(False, ErrorMessages.INSUFFICIENT_BALANCE)

        self.balance -= amount
        self.transactions.insert(
            0,
            {
                "Id": len(self.transactions) + 1,
                "Amount": float(amount),
                "Date": datetime.now(timezone.utc).isoformat(),
                "Type": "money_sent",
                "Status": "processed",
                "Source": {"Id": self.account_id, "Name": "Mock Account"},
                "Destination": {"Id": body.get(RequestKeys.DESTINATION_ID), "Name": ""},
                "Notes": body.get(RequestKeys.NOTES),
                "Metadata": body.get(RequestKeys.METADATA),
            },
        )
        return self._envelope(True, "Success", float(amount))

    def _list(self, params: httpx.QueryParams) -> httpx.Response:
        items = self.transactions
        types = params.get(RequestKeys.TYPES)
        if types:
            wanted = set(types.split(","))
            items = [t for t in items if t["Type"] in wanted]
        skip = int(params.get(RequestKeys.SKIP, 0))
        limit: Optional[int] = int(params[RequestKeys.LIMIT]) if RequestKeys.LIMIT in params else None
        items = items[skip:]
        if limit is not None:
            items = items[:limit]
        return self._envelope(True, "Success", items)

    @staticmethod
    def _envelope(success: bool, message: str, response: Any = None) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                ResponseKeys.SUCCESS: success,
                ResponseKeys.MESSAGE: message,
                ResponseKeys.RESPONSE: response,
            },
        )
