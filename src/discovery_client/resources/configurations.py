"""Configuration operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, BinaryIO

from ..http import DetailedResponse, ResultShape
from ..models import (
    Configuration,
    ConfigurationPreview,
    DeleteConfigurationResponse,
    ListConfigurationsResponse,
)
from ..request_builder import APPLICATION_JSON, DELETE, GET, POST, PUT
from .base import ENVIRONMENTS, ResourceBase, close_streams, require


def _configuration_body(
    name: str | None,
    description: str | None,
    conversions: Mapping[str, Any] | None,
    enrichments: list[Mapping[str, Any]] | None,
    normalizations: list[Mapping[str, Any]] | None,
    source: Mapping[str, Any] | None,
) -> dict[str, Any]:
    return {
        "name": name,
        "description": description,
        "conversions": conversions,
        "enrichments": enrichments,
        "normalizations": normalizations,
        "source": source,
    }


class ConfigurationsResource(ResourceBase):
    """Manage document conversion and enrichment configurations."""

    def create(
        self,
        environment_id: str,
        name: str,
        *,
        description: str | None = None,
        conversions: Mapping[str, Any] | None = None,
        enrichments: list[Mapping[str, Any]] | None = None,
        normalizations: list[Mapping[str, Any]] | None = None,
        source: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, name=name)
        builder = self._json_builder(
            POST,
            [ENVIRONMENTS, "configurations"],
            [environment_id],
            operation_id="CreateConfiguration",
            body=_configuration_body(
                name, description, conversions, enrichments, normalizations, source
            ),
        )
        return self._send(builder, ResultShape.of(Configuration), headers=headers)

    def get(
        self,
        environment_id: str,
        configuration_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, configuration_id=configuration_id)
        builder = self._builder(
            GET,
            [ENVIRONMENTS, "configurations"],
            [environment_id, configuration_id],
            operation_id="GetConfiguration",
        )
        return self._send(builder, ResultShape.of(Configuration), headers=headers)

    def list(
        self,
        environment_id: str,
        *,
        name: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id)
        builder = self._builder(
            GET,
            [ENVIRONMENTS, "configurations"],
            [environment_id],
            operation_id="ListConfigurations",
            params={"name": name},
        )
        return self._send(builder, ResultShape.of(ListConfigurationsResponse), headers=headers)

    def update(
        self,
        environment_id: str,
        configuration_id: str,
        name: str,
        *,
        description: str | None = None,
        conversions: Mapping[str, Any] | None = None,
        enrichments: list[Mapping[str, Any]] | None = None,
        normalizations: list[Mapping[str, Any]] | None = None,
        source: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        """Replace an existing configuration.

        The service replaces the whole document, so fields left as ``None``
        are dropped from the stored configuration.
        """
        require(environment_id=environment_id, configuration_id=configuration_id, name=name)
        builder = self._json_builder(
            PUT,
            [ENVIRONMENTS, "configurations"],
            [environment_id, configuration_id],
            operation_id="UpdateConfiguration",
            body=_configuration_body(
                name, description, conversions, enrichments, normalizations, source
            ),
        )
        return self._send(builder, ResultShape.of(Configuration), headers=headers)

    def delete(
        self,
        environment_id: str,
        configuration_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, configuration_id=configuration_id)
        builder = self._builder(
            DELETE,
            [ENVIRONMENTS, "configurations"],
            [environment_id, configuration_id],
            operation_id="DeleteConfiguration",
        )
        return self._send(builder, ResultShape.of(DeleteConfigurationResponse), headers=headers)

    def test(
        self,
        environment_id: str,
        *,
        configuration: str | Mapping[str, Any] | None = None,
        file: BinaryIO | bytes | None = None,
        filename: str | None = None,
        file_content_type: str | None = None,
        metadata: str | None = None,
        step: str | None = None,
        configuration_id: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        """Run a sample document through a configuration without indexing it.

        Args:
            environment_id: Environment that owns the configuration.
            configuration: Inline configuration (JSON string or mapping) to test
                instead of a stored one.
            file: Sample document. Streams are read once and closed.
            metadata: JSON string with document metadata.
            step: Return the snapshot of this processing step only
                (``html_input``, ``html_output``, ``json_output``,
                ``json_normalizations_output``, ``enrichments_output`` or
                ``normalizations_output``).
            configuration_id: Stored configuration to test.
        """
        try:
            require(environment_id=environment_id)
            builder = self._builder(
                POST,
                [ENVIRONMENTS, "preview"],
                [environment_id],
                operation_id="TestConfigurationInEnvironment",
                params={"step": step, "configuration_id": configuration_id},
            )
            builder.add_form_part(
                "configuration",
                configuration,
                content_type=APPLICATION_JSON if isinstance(configuration, Mapping) else None,
            )
            builder.add_form_part(
                "file", file, filename=filename, content_type=file_content_type
            )
            builder.add_form_part("metadata", metadata)
        except Exception:
            close_streams(file)
            raise
        return self._send(builder, ResultShape.of(ConfigurationPreview), headers=headers)
