"""Usage metrics over time."""

from __future__ import annotations

from collections.abc import Mapping

from ..http import DetailedResponse, ResultShape
from ..models import MetricResponse, MetricTokenResponse
from ..request_builder import GET
from .base import ResourceBase

METRICS = "v1/metrics"


class MetricsResource(ResourceBase):
    """Aggregate query and event counts.

    ``start_time`` and ``end_time`` are RFC3339 timestamps passed to the
    service verbatim; ``result_type`` narrows the counted results to
    ``document``.
    """

    def _time_series(
        self,
        path: str,
        operation_id: str,
        start_time: str | None,
        end_time: str | None,
        result_type: str | None,
        headers: Mapping[str, str] | None,
    ) -> DetailedResponse:
        builder = self._builder(
            GET,
            [f"{METRICS}/{path}"],
            operation_id=operation_id,
            params={"start_time": start_time, "end_time": end_time, "result_type": result_type},
        )
        return self._send(builder, ResultShape.of(MetricResponse), headers=headers)

    def query(
        self,
        *,
        start_time: str | None = None,
        end_time: str | None = None,
        result_type: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        """Number of queries over time."""
        return self._time_series(
            "number_of_queries", "GetMetricsQuery", start_time, end_time, result_type, headers
        )

    def query_event(
        self,
        *,
        start_time: str | None = None,
        end_time: str | None = None,
        result_type: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        """Number of queries that were followed by at least one event."""
        return self._time_series(
            "number_of_queries_with_event",
            "GetMetricsQueryEvent",
            start_time,
            end_time,
            result_type,
            headers,
        )

    def query_no_results(
        self,
        *,
        start_time: str | None = None,
        end_time: str | None = None,
        result_type: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        """Number of queries that returned no results."""
        return self._time_series(
            "number_of_queries_with_no_search_results",
            "GetMetricsQueryNoResults",
            start_time,
            end_time,
            result_type,
            headers,
        )

    def event_rate(
        self,
        *,
        start_time: str | None = None,
        end_time: str | None = None,
        result_type: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        """Fraction of queries followed by an event."""
        return self._time_series(
            "event_rate", "GetMetricsEventRate", start_time, end_time, result_type, headers
        )

    def query_token_event(
        self, *, count: int | None = None, headers: Mapping[str, str] | None = None
    ) -> DetailedResponse:
        """Most frequent query tokens with their event rate."""
        builder = self._builder(
            GET,
            [f"{METRICS}/top_query_tokens_with_event_rate"],
            operation_id="GetMetricsQueryTokenEvent",
            params={"count": count},
        )
        return self._send(builder, ResultShape.of(MetricTokenResponse), headers=headers)
