"""
Error taxonomy for the Dwolla integration.

BuildError      - a JsonRequest could not be turned into an HTTP request
TransportError  - the round trip failed or the body was not a JSON object

Both are caught at the DwollaApiV2 boundary and flattened into a failed
Response, so callers of the facade never see them raised.
"""

from __future__ import annotations

from typing import Optional


class DwiftError(Exception):
    """Base class for errors raised below the API facade."""


class BuildError(DwiftError):
    pass


class InvalidUrlError(BuildError):
    def __init__(self, url: str, reason: Optional[str] = None) -> None:
        detail = f"Invalid URL '{url}'"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(detail)
        self.url = url


class SerializationError(BuildError):
    pass


class TransportError(DwiftError):
    pass


class NetworkError(TransportError):
    def __init__(self, details: str) -> None:
        super().__init__(f"Network failure: {details}")
        self.details = details


class InvalidJsonError(TransportError):
    def __init__(self, message: str, *, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status
