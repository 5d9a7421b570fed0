from decimal import Decimal

import pytest

from dwift.integrations.clients.real_http.dwolla_api import DwollaApiV2
from dwift.integrations.contracts.interfaces import JsonRequest, SendRequest, TransactionStatus, TransactionType
from dwift.integrations.contracts.keys import ErrorMessages


@pytest.mark.asyncio
async def test_happy_path_send_debits_balance(api, server):
    out = await api.send(SendRequest(destination_id="812-741-6790", pin="4321", amount=Decimal("0.01")))

    assert out.success is True
    assert out.payload == Decimal("0.01")
    assert server.balance == Decimal("99.99")

    balance = await api.balance()
    assert balance.success is True
    assert balance.payload == Decimal("99.99")


@pytest.mark.asyncio
async def test_invalid_pin(api):
    out = await api.send(SendRequest(destination_id="812-741-6790", pin="0000", amount=Decimal("0.01")))
    assert (out.success, out.message, out.payload) == (False, ErrorMessages.INVALID_ACCOUNT_PIN, None)


@pytest.mark.asyncio
async def test_insufficient_balance(api, server):
    out = await api.send(SendRequest(destination_id="812-741-6790", pin="4321", amount=Decimal("500")))
    assert (out.success, out.message) == (False, ErrorMessages.INSUFFICIENT_BALANCE)
    assert server.balance == Decimal("100.00")


@pytest.mark.asyncio
async def test_invalid_access_token(server):
    api = DwollaApiV2(token="wrong", host="https://dwolla.test/oauth/rest", client=server.json_client())
    out = await api.balance()
    assert (out.success, out.message) == (False, ErrorMessages.INVALID_ACCESS_TOKEN)


@pytest.mark.asyncio
async def test_transactions_listing_reflects_sends(api):
    for amount in ("1.00", "2.00", "3.00"):
        await api.send(SendRequest(destination_id="812-741-6790", pin="4321", amount=Decimal(amount), notes=amount))

    out = await api.list_transactions(types=[TransactionType.MONEY_SENT], limit=2, skip=1)

    assert out.success is True
    assert [t.amount for t in out.payload] == [Decimal("2.0"), Decimal("1.0")]
    assert all(t.status is TransactionStatus.PROCESSED for t in out.payload)
    assert out.payload[0].destination.id == "812-741-6790"
    assert out.payload[0].notes == "2.00"


@pytest.mark.asyncio
async def test_unknown_endpoint_returns_404(server):
    client = server.json_client()
    resp = await client.execute(
        JsonRequest(url="https://dwolla.test/oauth/rest/nope", headers={"Authorization": f"Bearer {server.token}"})
    )
    assert resp.status == 404
    assert resp.body["Success"] is False
    assert len(server.requests) == 1
