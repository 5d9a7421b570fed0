"""Pytest fixtures for the Dwolla client tests."""

import pytest

from dwift.integrations.clients.mocks import MockDwollaServer
from dwift.integrations.clients.real_http.dwolla_api import DwollaApiV2


@pytest.fixture
def server():
    """In-process mock Dwolla server."""
    return MockDwollaServer(token="t0k3n", pin="4321")


@pytest.fixture
def api(server):
    return DwollaApiV2(token=server.token, host="https://dwolla.test/oauth/rest", client=server.json_client())
