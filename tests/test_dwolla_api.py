import json
from decimal import Decimal

import httpx
import pytest

from dwift.integrations.clients.real_http.dwolla_api import DwollaApiV2
from dwift.integrations.clients.real_http.json_client import HttpxJsonClient
from dwift.integrations.contracts.interfaces import (
    DestinationType,
    JsonClient,
    JsonRequest,
    JsonResponse,
    SendRequest,
    TransactionType,
)
from dwift.utils.config_loader import ClientConfig

HOST = "https://dwolla.test/oauth/rest"


def _api(handler, token="abc"):
    return DwollaApiV2(token=token, host=HOST, client=HttpxJsonClient(transport=httpx.MockTransport(handler)))


def _send_request(**overrides):
    fields = {"destination_id": "812-741-6790", "pin": "1234", "amount": Decimal("0.01")}
    fields.update(overrides)
    return SendRequest(**fields)


@pytest.mark.asyncio
async def test_send_posts_to_send_endpoint_with_bearer_token():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"Success": True, "Message": "ok", "Response": 0.01})

    out = await _api(handler, token="s3cret").send(_send_request(destination_type=DestinationType.DWOLLA))

    assert out.success is True
    assert out.message == "ok"
    assert out.payload == Decimal("0.01")

    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == HOST + "/transactions/send"
    assert request.headers["Authorization"] == "Bearer s3cret"
    assert json.loads(request.content) == {
        "destinationId": "812-741-6790",
        "pin": "1234",
        "amount": 0.01,
        "destinationType": "dwolla",
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "request_obj",
    [
        SendRequest(destination_id="a", pin="1", amount=Decimal("1")),
        SendRequest(destination_id="b@example.com", pin="99", amount=Decimal("250.75"),
                    destination_type=DestinationType.EMAIL, notes="rent", metadata={"k": "v"}),
    ],
)
async def test_every_request_carries_authorization(request_obj):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"Success": True, "Message": "ok", "Response": 1})

    api = _api(handler)
    await api.send(request_obj)
    await api.balance()
    await api.list_transactions()

    assert len(seen) == 3
    assert all(r.headers.get("Authorization") == "Bearer abc" for r in seen)


@pytest.mark.asyncio
async def test_non_numeric_payload_is_unknown_error():
    def handler(request):
        return httpx.Response(200, json={"Success": True, "Message": "ok", "Response": "not-a-number"})

    out = await _api(handler).send(_send_request())
    assert (out.success, out.message, out.payload) == (False, "Unknown error", None)


@pytest.mark.asyncio
async def test_network_failure_is_flattened_not_raised():
    def handler(request):
        raise httpx.ConnectError("Name or service not known", request=request)

    out = await _api(handler).send(_send_request())

    assert out.success is False
    assert out.payload is None
    assert "Name or service not known" in out.message


@pytest.mark.asyncio
async def test_invalid_json_is_flattened():
    def handler(request):
        return httpx.Response(500, text="Internal Server Error")

    out = await _api(handler).send(_send_request())
    assert out.success is False
    assert "not valid JSON" in out.message


@pytest.mark.asyncio
async def test_invalid_host_is_flattened():
    api = DwollaApiV2(token="abc", host="nowhere", client=HttpxJsonClient())
    out = await api.send(_send_request())
    assert out.success is False
    assert "Invalid URL" in out.message


@pytest.mark.asyncio
async def test_invalid_send_request_is_rejected_without_network():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"Success": True, "Message": "ok", "Response": 1})

    out = await _api(handler).send(_send_request(pin="", amount=Decimal("-1")))

    assert out.success is False
    assert "pin is required" in out.message
    assert calls == []


@pytest.mark.asyncio
async def test_unexpected_client_exception_is_flattened():
    class ExplodingClient(JsonClient):
        async def execute(self, request: JsonRequest) -> JsonResponse:
            raise RuntimeError("boom")

    api = DwollaApiV2(token="abc", host=HOST, client=ExplodingClient())
    out = await api.balance()
    assert (out.success, out.message, out.payload) == (False, "Unexpected error", None)


@pytest.mark.asyncio
async def test_list_transactions_sends_query_params():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "Success": True,
                "Message": "Success",
                "Response": [{"Id": 7, "Amount": 2.5, "Type": "deposit", "Status": "pending"}],
            },
        )

    out = await _api(handler).list_transactions(
        types=[TransactionType.MONEY_SENT, TransactionType.DEPOSIT], limit=10, skip=5
    )

    params = seen[0].url.params
    assert seen[0].url.path == "/oauth/rest/transactions"
    assert params["types"] == "money_sent,deposit"
    assert params["limit"] == "10"
    assert params["skip"] == "5"
    assert out.success is True
    assert [t.id for t in out.payload] == ["7"]
    assert out.payload[0].type is TransactionType.DEPOSIT


def test_from_config_uses_host_and_token():
    api = DwollaApiV2.from_config(ClientConfig(token="tok", host="https://example.test/rest/", timeout_seconds=3))
    assert api.host == "https://example.test/rest"
    assert api.headers["Authorization"] == "Bearer tok"
    assert api.client.timeout_seconds == 3


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"metadata": ["a"]}, "metadata must map strings to strings"),
        ({"destination_id": None}, "destination_id is required"),
        ({"amount": Decimal("12345678901234567.89")}, "amount has more precision than can be sent"),
    ],
)
async def test_send_with_malformed_fields_returns_failure(overrides, message):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"Success": True, "Message": "ok", "Response": 1})

    out = await _api(handler).send(_send_request(**overrides))

    assert out.success is False
    assert out.payload is None
    assert message in out.message
    assert calls == []


@pytest.mark.asyncio
async def test_lowercase_envelope_keys_are_unknown_error():
    def handler(request):
        return httpx.Response(200, json={"success": True, "message": "ok", "response": 0.01})

    out = await _api(handler).send(_send_request())
    assert (out.success, out.message, out.payload) == (False, "Unknown error", None)
