"""Data-transfer records for Discovery API payloads.

Records mirror the JSON documents returned by the service. Fields that are
absent from a payload stay `None`; keys the record does not know about are
kept in `extra` so nothing the service sends is lost. Values are kept as the
wire format delivers them (timestamps remain RFC3339 strings).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar


@dataclass
class Model:
    """Base record with dictionary conversion helpers."""

    _nested: ClassVar[Mapping[str, type[Model]]] = {}

    extra: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Model:
        known = {f.name for f in fields(cls) if f.name != "extra"}
        values: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in payload.items():
            if key in known:
                values[key] = cls._decode_nested(key, value)
            else:
                extra[key] = value
        return cls(extra=extra, **values)

    @classmethod
    def _decode_nested(cls, key: str, value: Any) -> Any:
        nested = cls._nested.get(key)
        if nested is None or value is None:
            return value
        if isinstance(value, Mapping):
            return nested.from_dict(value)
        if isinstance(value, list):
            return [nested.from_dict(item) if isinstance(item, Mapping) else item for item in value]
        return value

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for f in fields(self):
            if f.name == "extra":
                continue
            value = getattr(self, f.name)
            if value is not None:
                data[f.name] = _unwrap(value)
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data


def _unwrap(value: Any) -> Any:
    if isinstance(value, Model):
        return value.to_dict()
    if isinstance(value, list):
        return [_unwrap(item) for item in value]
    return value


# Environments ------------------------------------------------------------------
@dataclass
class Environment(Model):
    environment_id: str | None = None
    name: str | None = None
    description: str | None = None
    created: str | None = None
    updated: str | None = None
    status: str | None = None
    read_only: bool | None = None
    size: str | None = None
    requested_size: str | None = None
    index_capacity: dict[str, Any] | None = None
    search_status: dict[str, Any] | None = None


@dataclass
class ListEnvironmentsResponse(Model):
    _nested: ClassVar[Mapping[str, type[Model]]] = {"environments": Environment}

    environments: list[Environment] | None = None


@dataclass
class DeleteEnvironmentResponse(Model):
    environment_id: str | None = None
    status: str | None = None


@dataclass
class Field(Model):
    field: str | None = None
    type: str | None = None


@dataclass
class ListCollectionFieldsResponse(Model):
    _nested: ClassVar[Mapping[str, type[Model]]] = {"fields": Field}

    fields: list[Field] | None = None


# Configurations ----------------------------------------------------------------
@dataclass
class Configuration(Model):
    configuration_id: str | None = None
    name: str | None = None
    created: str | None = None
    updated: str | None = None
    description: str | None = None
    conversions: dict[str, Any] | None = None
    enrichments: list[dict[str, Any]] | None = None
    normalizations: list[dict[str, Any]] | None = None
    source: dict[str, Any] | None = None


@dataclass
class ListConfigurationsResponse(Model):
    _nested: ClassVar[Mapping[str, type[Model]]] = {"configurations": Configuration}

    configurations: list[Configuration] | None = None


@dataclass
class DeleteConfigurationResponse(Model):
    configuration_id: str | None = None
    status: str | None = None
    notices: list[dict[str, Any]] | None = None


@dataclass
class ConfigurationPreview(Model):
    configuration_id: str | None = None
    status: str | None = None
    enriched_field_units: int | None = None
    original_media_type: str | None = None
    snapshots: list[dict[str, Any]] | None = None
    notices: list[dict[str, Any]] | None = None


# Collections -------------------------------------------------------------------
@dataclass
class Collection(Model):
    collection_id: str | None = None
    name: str | None = None
    description: str | None = None
    created: str | None = None
    updated: str | None = None
    status: str | None = None
    configuration_id: str | None = None
    language: str | None = None
    document_counts: dict[str, Any] | None = None
    disk_usage: dict[str, Any] | None = None
    training_status: dict[str, Any] | None = None
    crawl_status: dict[str, Any] | None = None
    smart_document_understanding: dict[str, Any] | None = None


@dataclass
class ListCollectionsResponse(Model):
    _nested: ClassVar[Mapping[str, type[Model]]] = {"collections": Collection}

    collections: list[Collection] | None = None


@dataclass
class DeleteCollectionResponse(Model):
    collection_id: str | None = None
    status: str | None = None


@dataclass
class Expansion(Model):
    input_terms: list[str] | None = None
    expanded_terms: list[str] | None = None


@dataclass
class Expansions(Model):
    _nested: ClassVar[Mapping[str, type[Model]]] = {"expansions": Expansion}

    expansions: list[Expansion] | None = None


@dataclass
class TokenizationRule(Model):
    text: str | None = None
    tokens: list[str] | None = None
    readings: list[str] | None = None
    part_of_speech: str | None = None


@dataclass
class TokenDictStatusResponse(Model):
    status: str | None = None
    type: str | None = None


# Documents ---------------------------------------------------------------------
@dataclass
class DocumentAccepted(Model):
    document_id: str | None = None
    status: str | None = None
    notices: list[dict[str, Any]] | None = None


@dataclass
class DocumentStatus(Model):
    document_id: str | None = None
    configuration_id: str | None = None
    status: str | None = None
    status_description: str | None = None
    filename: str | None = None
    file_type: str | None = None
    sha1: str | None = None
    notices: list[dict[str, Any]] | None = None


@dataclass
class DeleteDocumentResponse(Model):
    document_id: str | None = None
    status: str | None = None


# Queries -----------------------------------------------------------------------
@dataclass
class QueryResponse(Model):
    matching_results: int | None = None
    results: list[dict[str, Any]] | None = None
    aggregations: list[dict[str, Any]] | None = None
    passages: list[dict[str, Any]] | None = None
    duplicates_removed: int | None = None
    session_token: str | None = None
    retrieval_details: dict[str, Any] | None = None
    suggested_query: str | None = None


@dataclass
class QueryNoticesResponse(Model):
    matching_results: int | None = None
    results: list[dict[str, Any]] | None = None
    aggregations: list[dict[str, Any]] | None = None
    passages: list[dict[str, Any]] | None = None
    duplicates_removed: int | None = None


@dataclass
class Completions(Model):
    completions: list[str] | None = None


# Training ----------------------------------------------------------------------
@dataclass
class TrainingExample(Model):
    document_id: str | None = None
    cross_reference: str | None = None
    relevance: int | None = None


@dataclass
class TrainingExampleList(Model):
    _nested: ClassVar[Mapping[str, type[Model]]] = {"examples": TrainingExample}

    examples: list[TrainingExample] | None = None


@dataclass
class TrainingQuery(Model):
    _nested: ClassVar[Mapping[str, type[Model]]] = {"examples": TrainingExample}

    query_id: str | None = None
    natural_language_query: str | None = None
    filter: str | None = None
    examples: list[TrainingExample] | None = None


@dataclass
class TrainingDataSet(Model):
    _nested: ClassVar[Mapping[str, type[Model]]] = {"queries": TrainingQuery}

    environment_id: str | None = None
    collection_id: str | None = None
    queries: list[TrainingQuery] | None = None


# Credentials -------------------------------------------------------------------
@dataclass
class Credentials(Model):
    credential_id: str | None = None
    source_type: str | None = None
    credential_details: dict[str, Any] | None = None
    status: dict[str, Any] | str | None = None


@dataclass
class CredentialsList(Model):
    _nested: ClassVar[Mapping[str, type[Model]]] = {"credentials": Credentials}

    credentials: list[Credentials] | None = None


@dataclass
class DeleteCredentials(Model):
    credential_id: str | None = None
    status: str | None = None


# Gateways ----------------------------------------------------------------------
@dataclass
class Gateway(Model):
    gateway_id: str | None = None
    name: str | None = None
    status: str | None = None
    token: str | None = None
    token_id: str | None = None


@dataclass
class GatewayList(Model):
    _nested: ClassVar[Mapping[str, type[Model]]] = {"gateways": Gateway}

    gateways: list[Gateway] | None = None


@dataclass
class GatewayDelete(Model):
    gateway_id: str | None = None
    status: str | None = None


# Events, logs and metrics --------------------------------------------------------
@dataclass
class CreateEventResponse(Model):
    type: str | None = None
    data: dict[str, Any] | None = None


@dataclass
class LogQueryResponse(Model):
    matching_results: int | None = None
    results: list[dict[str, Any]] | None = None


@dataclass
class MetricResponse(Model):
    aggregations: list[dict[str, Any]] | None = None


@dataclass
class MetricTokenResponse(Model):
    aggregations: list[dict[str, Any]] | None = None
