"""High-level Discovery client entrypoints."""
from .auth import ApiKeyAuth, BasicAuth, BearerTokenAuth, NoAuth
from .client import DiscoveryClient
from .config import ClientConfig
from .exceptions import DiscoveryError
from .http import BINARY, JSON, NO_CONTENT, DetailedResponse, ResultShape
from .request_builder import RequestBuilder

__all__ = [
    "DiscoveryClient",
    "ClientConfig",
    "DiscoveryError",
    "DetailedResponse",
    "ResultShape",
    "RequestBuilder",
    "NO_CONTENT",
    "JSON",
    "BINARY",
    "BasicAuth",
    "ApiKeyAuth",
    "BearerTokenAuth",
    "NoAuth",
]
