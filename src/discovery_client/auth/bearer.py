"""Bearer token authentication."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass

from .base import AuthStrategy, check_credential


@dataclass(slots=True)
class BearerTokenAuth(AuthStrategy):
    """Apply an already issued access token."""

    token: str

    def __post_init__(self) -> None:
        check_credential(self.token, "bearer token")

    def apply(self, headers: MutableMapping[str, str]) -> None:
        headers["Authorization"] = f"Bearer {self.token}"

    def update_token(self, token: str) -> None:
        check_credential(token, "bearer token")
        self.token = token
