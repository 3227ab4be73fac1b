"""Custom exception hierarchy for the Discovery client."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class DiscoveryError(RuntimeError):
    """Base error for Discovery client failures."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class ValidationError(DiscoveryError):
    """Raised when a required argument is missing or malformed.

    Always raised before any request is sent.
    """


class ConstructionError(DiscoveryError):
    """Raised when a request cannot be built (bad URL or header, unencodable body)."""


class AuthenticationError(DiscoveryError):
    """Raised by `DetailedResponse.raise_for_status` when credentials are rejected (401/403)."""


class TransportError(DiscoveryError):
    """Raised when the HTTP exchange itself fails (connection, TLS, timeout)."""


class DecodeError(DiscoveryError):
    """Raised when a response body cannot be decoded into the expected shape."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        headers: Mapping[str, str] | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, details=details)
        self.headers = headers or {}


class ApiError(DiscoveryError):
    """Raised on request by `DetailedResponse.raise_for_status` for non-2xx responses."""


__all__ = [
    "DiscoveryError",
    "ValidationError",
    "ConstructionError",
    "AuthenticationError",
    "TransportError",
    "DecodeError",
    "ApiError",
]
