"""HTTP Basic authentication support."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass

from .base import AuthStrategy, check_credential

APIKEY_USERNAME = "apikey"


@dataclass(slots=True)
class BasicAuth(AuthStrategy):
    """Apply HTTP Basic auth headers."""

    username: str
    password: str

    def __post_init__(self) -> None:
        check_credential(self.username, "username")
        check_credential(self.password, "password")

    # pragma: no cover - requests handles encoding internally
    def apply(self, headers: MutableMapping[str, str]) -> None:
        from requests.auth import _basic_auth_str

        headers["Authorization"] = _basic_auth_str(self.username, self.password)


@dataclass(slots=True)
class ApiKeyAuth(AuthStrategy):
    """Send a service API key as Basic credentials for the `apikey` user."""

    api_key: str

    def __post_init__(self) -> None:
        check_credential(self.api_key, "API key")

    def apply(self, headers: MutableMapping[str, str]) -> None:
        from requests.auth import _basic_auth_str

        headers["Authorization"] = _basic_auth_str(APIKEY_USERNAME, self.api_key)
