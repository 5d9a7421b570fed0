"""
Contracts (data models).

This folder defines the request/response shapes exchanged with Dwolla:
- wire-level JsonRequest / JsonResponse and the Response envelope result
- SendRequest and Transaction domain models
- endpoint paths, JSON keys and enum value tables

Both the real client and the mock server use these contracts.
"""
