"""Environment operations."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from ..http import DetailedResponse, ResultShape
from ..models import (
    DeleteEnvironmentResponse,
    Environment,
    ListCollectionFieldsResponse,
    ListEnvironmentsResponse,
)
from ..request_builder import DELETE, GET, POST, PUT
from .base import ENVIRONMENTS, ResourceBase, require


class EnvironmentsResource(ResourceBase):
    """Manage Discovery environments."""

    def create(
        self,
        name: str,
        *,
        description: str | None = None,
        size: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        """Create an environment.

        Args:
            name: Name that identifies the environment.
            description: Optional description.
            size: Optional size code (for example ``"LT"`` or ``"S"``).
        """
        require(name=name)
        builder = self._json_builder(
            POST,
            [ENVIRONMENTS],
            operation_id="CreateEnvironment",
            body={"name": name, "description": description, "size": size},
        )
        return self._send(builder, ResultShape.of(Environment), headers=headers)

    def get(self, environment_id: str, *, headers: Mapping[str, str] | None = None) -> DetailedResponse:
        require(environment_id=environment_id)
        builder = self._builder(GET, [ENVIRONMENTS], [environment_id], operation_id="GetEnvironment")
        return self._send(builder, ResultShape.of(Environment), headers=headers)

    def list(
        self, *, name: str | None = None, headers: Mapping[str, str] | None = None
    ) -> DetailedResponse:
        builder = self._builder(
            GET, [ENVIRONMENTS], operation_id="ListEnvironments", params={"name": name}
        )
        return self._send(builder, ResultShape.of(ListEnvironmentsResponse), headers=headers)

    def update(
        self,
        environment_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        size: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id)
        builder = self._json_builder(
            PUT,
            [ENVIRONMENTS],
            [environment_id],
            operation_id="UpdateEnvironment",
            body={"name": name, "description": description, "size": size},
        )
        return self._send(builder, ResultShape.of(Environment), headers=headers)

    def delete(
        self, environment_id: str, *, headers: Mapping[str, str] | None = None
    ) -> DetailedResponse:
        require(environment_id=environment_id)
        builder = self._builder(
            DELETE, [ENVIRONMENTS], [environment_id], operation_id="DeleteEnvironment"
        )
        return self._send(builder, ResultShape.of(DeleteEnvironmentResponse), headers=headers)

    def list_fields(
        self,
        environment_id: str,
        collection_ids: Sequence[str] | str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        """List the fields shared by several collections of one environment."""
        require(environment_id=environment_id, collection_ids=collection_ids)
        builder = self._builder(
            GET,
            [ENVIRONMENTS, "fields"],
            [environment_id],
            operation_id="ListFields",
            params={"collection_ids": collection_ids},
        )
        return self._send(builder, ResultShape.of(ListCollectionFieldsResponse), headers=headers)
