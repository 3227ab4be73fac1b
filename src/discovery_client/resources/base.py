"""Common helpers for resource wrappers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from ..common import get_sdk_headers
from ..exceptions import ValidationError
from ..http import JSON, DetailedResponse, ResultShape
from ..request_builder import ACCEPT, APPLICATION_JSON, CONTENT_TYPE, RequestBuilder

if TYPE_CHECKING:  # pragma: no cover - import-time guard
    from ..client import DiscoveryClient

ENVIRONMENTS = "v1/environments"


def require(**values: Any) -> None:
    """Raise `ValidationError` for the first argument that is missing."""

    for name, value in values.items():
        if value is None or (isinstance(value, (str, list, tuple)) and len(value) == 0):
            raise ValidationError(f"{name} must be provided")


def require_any(**values: Any) -> None:
    if all(value is None for value in values.values()):
        names = " or ".join(values)
        raise ValidationError(f"At least one of {names} must be supplied")


def close_streams(*values: Any) -> None:
    """Close caller-supplied streams that never made it into a request body."""

    for value in values:
        close = getattr(value, "close", None)
        if callable(getattr(value, "read", None)) and callable(close):
            close()


def join_values(value: Any) -> Any:
    """Comma-join sequence values the way the service expects multi-value fields."""

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return ",".join(str(item) for item in value)
    return value


class ResourceBase:
    """Provide shared helpers for resource modules."""

    def __init__(self, client: DiscoveryClient) -> None:
        self._client = client

    def _builder(
        self,
        method: str,
        path_segments: Sequence[str],
        path_parameters: Sequence[Any] | None = None,
        *,
        operation_id: str,
        accept: str | None = APPLICATION_JSON,
        params: Mapping[str, Any] | None = None,
    ) -> RequestBuilder:
        config = self._client.config
        builder = RequestBuilder(method).construct_url(
            config.base_url, path_segments, path_parameters
        )
        builder.add_headers(get_sdk_headers(operation_id))
        builder.add_headers(config.resolved_headers())
        if accept:
            builder.add_header(ACCEPT, accept)
        builder.add_queries(config.resolved_query())
        builder.add_queries(params)
        return builder

    def _json_builder(
        self,
        method: str,
        path_segments: Sequence[str],
        path_parameters: Sequence[Any] | None = None,
        *,
        operation_id: str,
        body: Mapping[str, Any],
        params: Mapping[str, Any] | None = None,
    ) -> RequestBuilder:
        builder = self._builder(
            method, path_segments, path_parameters, operation_id=operation_id, params=params
        )
        builder.add_header(CONTENT_TYPE, APPLICATION_JSON)
        builder.set_json_body(body)
        return builder

    def _send(
        self,
        builder: RequestBuilder,
        shape: ResultShape = JSON,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        try:
            builder.add_headers(headers)
        except Exception:
            builder.release()
            raise
        return self._client.send(builder, shape)
