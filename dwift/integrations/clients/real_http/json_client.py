"""
Real JSON HTTP client.

Performs exactly one awaited round trip per request using httpx. No retries:
every failure is terminal for that call and is surfaced as a TransportError.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional

import httpx

from dwift.integrations.clients.real_http.request_builder import build_request
from dwift.integrations.contracts.interfaces import JsonClient, JsonRequest, JsonResponse
from dwift.integrations.errors import InvalidJsonError, NetworkError

logger = logging.getLogger(__name__)


class HttpxJsonClient(JsonClient):
    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.http_client = http_client
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    async def execute(self, request: JsonRequest) -> JsonResponse:
        return await self.send(build_request(request))

    async def send(self, request: httpx.Request) -> JsonResponse:
        try:
            if self.http_client is not None:
                response = await self.http_client.send(request)
            else:
                async with httpx.AsyncClient(**self._client_options()) as client:
                    response = await client.send(request)
        except httpx.RequestError as exc:
            logger.warning("%s %s failed: %s", request.method, request.url, exc)
            raise NetworkError(str(exc) or exc.__class__.__name__) from exc

        logger.debug("%s %s -> %s", request.method, request.url, response.status_code)
        return JsonResponse(
            status=response.status_code,
            headers=_normalize_headers(response.headers),
            body=_parse_body(response),
        )

    def _client_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {}
        if self.timeout_seconds is not None:
            options["timeout"] = self.timeout_seconds
        if self.transport is not None:
            options["transport"] = self.transport
        return options


def _normalize_headers(headers: httpx.Headers) -> Dict[str, str]:
    return {name.lower(): value for name, value in headers.items()}


def _parse_body(response: httpx.Response) -> Optional[Mapping[str, Any]]:
    if not response.content:
        return None
    try:
        data = response.json(parse_float=Decimal)
    except ValueError as exc:
        raise InvalidJsonError(
            f"Response body is not valid JSON (HTTP {response.status_code})",
            status=response.status_code,
        ) from exc
    if not isinstance(data, dict):
        raise InvalidJsonError(
            f"Expected a JSON object, got {type(data).__name__} (HTTP {response.status_code})",
            status=response.status_code,
        )
    return data
