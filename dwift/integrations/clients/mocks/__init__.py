"""
Mock integration clients.

These return fake (but realistic) Dwolla responses without calling any external API.
They sit behind httpx.MockTransport, so the same HttpxJsonClient is used as in production.
"""

from .dwolla_server import MockDwollaServer

__all__ = ["MockDwollaServer"]
