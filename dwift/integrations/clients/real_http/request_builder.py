"""
Request builder.

Turns a JsonRequest into a transport-ready httpx.Request:
- validates and sets the target URL (query params merged with standard escaping)
- copies the method verbatim
- applies headers, omitting any whose value is None
- serializes the body to canonical JSON and sets Content-Type / Content-Length

build_request is a pure function; nothing is carried over between calls.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any, Mapping, Optional

import httpx

from dwift.integrations.contracts.interfaces import JsonRequest
from dwift.integrations.contracts.transactions import is_exact_json_number
from dwift.integrations.errors import InvalidUrlError, SerializationError

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def build_request(json_request: JsonRequest) -> httpx.Request:
    url = build_url(json_request.url, json_request.params)
    headers = build_headers(json_request.headers)

    content: Optional[bytes] = None
    if json_request.body is not None:
        content = serialize_body(json_request.body)
        headers["Content-Type"] = JSON_CONTENT_TYPE
        headers["Content-Length"] = str(len(content))

    logger.debug("Built %s %s (%s body bytes)", json_request.method.value, url, len(content or b""))
    return httpx.Request(json_request.method.value, url, headers=headers, content=content)


def build_url(raw_url: str, params: Optional[Mapping[str, str]] = None) -> httpx.URL:
    try:
        url = httpx.URL(raw_url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise InvalidUrlError(str(raw_url), str(exc)) from exc

    if url.scheme not in ("http", "https"):
        raise InvalidUrlError(raw_url, "scheme must be http or https")
    if not url.host:
        raise InvalidUrlError(raw_url, "missing host")

    if params:
        url = url.copy_merge_params(dict(params))
    return url


def build_headers(raw_headers: Optional[Mapping[str, Optional[str]]]) -> httpx.Headers:
    headers = httpx.Headers()
    for name, value in (raw_headers or {}).items():
        if value is None:
            # A null header clears anything set under the same name.
            if name in headers:
                del headers[name]
            continue
        headers[name] = value
    return headers


def serialize_body(body: Mapping[str, Any]) -> bytes:
    try:
        text = json.dumps(
            body,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
            default=_json_default,
        )
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Request body is not JSON serializable: {exc}") from exc
    return text.encode("utf-8")


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        if not is_exact_json_number(value):
            raise ValueError(f"Decimal {value} cannot be written as a JSON number without rounding")
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
