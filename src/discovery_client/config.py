"""Configuration helpers for the Discovery client."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_SERVICE_URL = "https://gateway.watsonplatform.net/discovery/api"
DEFAULT_VERSION = "2019-04-30"
SERVICE_NAME = "discovery"
SERVICE_VERSION = "V1"


@dataclass(slots=True)
class ClientConfig:
    """Typed configuration for `DiscoveryClient`."""

    base_url: str = DEFAULT_SERVICE_URL
    version: str = DEFAULT_VERSION
    verify_ssl: bool | str = True
    timeout: float = 30.0
    default_headers: Mapping[str, str] | None = None
    query_defaults: Mapping[str, str] | None = None

    def resolved_headers(self) -> dict[str, str]:
        return dict(self.default_headers or {})

    def resolved_query(self) -> dict[str, str]:
        query: dict[str, str] = {"version": self.version}
        for name, value in (self.query_defaults or {}).items():
            if name != "version":
                query[name] = value
        return query
