"""Customer data removal."""

from __future__ import annotations

from collections.abc import Mapping

from ..http import NO_CONTENT, DetailedResponse
from ..request_builder import DELETE
from .base import ResourceBase, require


class UserDataResource(ResourceBase):
    """Delete data labelled with a customer ID across the service instance."""

    def delete(self, customer_id: str, *, headers: Mapping[str, str] | None = None) -> DetailedResponse:
        require(customer_id=customer_id)
        builder = self._builder(
            DELETE,
            ["v1/user_data"],
            operation_id="DeleteUserData",
            accept=None,
            params={"customer_id": customer_id},
        )
        return self._send(builder, NO_CONTENT, headers=headers)
