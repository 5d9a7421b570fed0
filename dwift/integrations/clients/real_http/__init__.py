"""
Real HTTP integration clients.

- request_builder: JsonRequest -> httpx.Request
- json_client: one awaited round trip, JSON decoding
- dwolla_api: endpoint paths and envelope unwrapping
"""
