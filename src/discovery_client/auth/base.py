"""Base abstractions for auth strategies."""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import MutableMapping

from ..exceptions import ValidationError
from ..request_builder import has_bad_first_or_last_char


class AuthStrategy(ABC):
    """Interface each authentication mechanism must implement."""

    @abstractmethod
    def apply(self, headers: MutableMapping[str, str]) -> None:
        """Mutate headers in-place with the necessary credentials."""


class NoAuth(AuthStrategy):
    """Send requests without credentials (local proxies, test servers)."""

    def apply(self, headers: MutableMapping[str, str]) -> None:
        return None


def check_credential(value: str, label: str) -> None:
    if not value:
        raise ValidationError(f"The {label} shouldn't be empty")
    if has_bad_first_or_last_char(value):
        raise ValidationError(
            f"The {label} shouldn't start or end with curly brackets or quotes. "
            f'Be sure to remove any {{}} and " characters surrounding your {label}'
        )
