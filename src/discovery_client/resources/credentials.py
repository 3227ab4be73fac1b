"""Source crawler credential operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..http import DetailedResponse, ResultShape
from ..models import Credentials, CredentialsList, DeleteCredentials
from ..request_builder import DELETE, GET, POST, PUT
from .base import ENVIRONMENTS, ResourceBase, require

CREDENTIALS = [ENVIRONMENTS, "credentials"]

def _credentials_body(
    source_type: str | None,
    credential_details: Mapping[str, Any] | None,
    status: str | None,
) -> dict[str, Any]:
    return {
        "source_type": source_type,
        "credential_details": credential_details,
        "status": status,
    }


class CredentialsResource(ResourceBase):
    """Manage credentials used by source crawlers (Box, Salesforce, SharePoint, ...)."""

    def create(
        self,
        environment_id: str,
        *,
        source_type: str | None = None,
        credential_details: Mapping[str, Any] | None = None,
        status: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        """Store credentials for a source crawler.

        Args:
            environment_id: Environment the credentials belong to.
            source_type: One of ``box``, ``salesforce``, ``sharepoint``,
                ``web_crawl`` or ``cloud_object_storage``.
            credential_details: Source-specific fields (``credential_type``,
                ``url``, ``username``, ...). Only the fields required by the
                chosen ``credential_type`` need to be set.
            status: ``connected`` or ``invalid``.
        """
        require(environment_id=environment_id)
        builder = self._json_builder(
            POST,
            CREDENTIALS,
            [environment_id],
            operation_id="CreateCredentials",
            body=_credentials_body(source_type, credential_details, status),
        )
        return self._send(builder, ResultShape.of(Credentials), headers=headers)

    def get(
        self,
        environment_id: str,
        credential_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, credential_id=credential_id)
        builder = self._builder(
            GET, CREDENTIALS, [environment_id, credential_id], operation_id="GetCredentials"
        )
        return self._send(builder, ResultShape.of(Credentials), headers=headers)

    def list(
        self, environment_id: str, *, headers: Mapping[str, str] | None = None
    ) -> DetailedResponse:
        require(environment_id=environment_id)
        builder = self._builder(GET, CREDENTIALS, [environment_id], operation_id="ListCredentials")
        return self._send(builder, ResultShape.of(CredentialsList), headers=headers)

    def update(
        self,
        environment_id: str,
        credential_id: str,
        *,
        source_type: str | None = None,
        credential_details: Mapping[str, Any] | None = None,
        status: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, credential_id=credential_id)
        builder = self._json_builder(
            PUT,
            CREDENTIALS,
            [environment_id, credential_id],
            operation_id="UpdateCredentials",
            body=_credentials_body(source_type, credential_details, status),
        )
        return self._send(builder, ResultShape.of(Credentials), headers=headers)

    def delete(
        self,
        environment_id: str,
        credential_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, credential_id=credential_id)
        builder = self._builder(
            DELETE, CREDENTIALS, [environment_id, credential_id], operation_id="DeleteCredentials"
        )
        return self._send(builder, ResultShape.of(DeleteCredentials), headers=headers)
