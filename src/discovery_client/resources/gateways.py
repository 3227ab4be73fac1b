"""Secure gateway operations."""

from __future__ import annotations

from collections.abc import Mapping

from ..http import DetailedResponse, ResultShape
from ..models import Gateway, GatewayDelete, GatewayList
from ..request_builder import DELETE, GET, POST
from .base import ENVIRONMENTS, ResourceBase, require

GATEWAYS = [ENVIRONMENTS, "gateways"]


class GatewaysResource(ResourceBase):
    """Manage gateways that connect crawlers to on-premises sources."""

    def list(
        self, environment_id: str, *, headers: Mapping[str, str] | None = None
    ) -> DetailedResponse:
        require(environment_id=environment_id)
        builder = self._builder(GET, GATEWAYS, [environment_id], operation_id="ListGateways")
        return self._send(builder, ResultShape.of(GatewayList), headers=headers)

    def create(
        self,
        environment_id: str,
        *,
        name: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id)
        builder = self._json_builder(
            POST, GATEWAYS, [environment_id], operation_id="CreateGateway", body={"name": name}
        )
        return self._send(builder, ResultShape.of(Gateway), headers=headers)

    def get(
        self,
        environment_id: str,
        gateway_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, gateway_id=gateway_id)
        builder = self._builder(
            GET, GATEWAYS, [environment_id, gateway_id], operation_id="GetGateway"
        )
        return self._send(builder, ResultShape.of(Gateway), headers=headers)

    def delete(
        self,
        environment_id: str,
        gateway_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, gateway_id=gateway_id)
        builder = self._builder(
            DELETE, GATEWAYS, [environment_id, gateway_id], operation_id="DeleteGateway"
        )
        return self._send(builder, ResultShape.of(GatewayDelete), headers=headers)
