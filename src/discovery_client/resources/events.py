"""Usage events and the query log."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ..http import DetailedResponse, ResultShape
from ..models import CreateEventResponse, LogQueryResponse
from ..request_builder import GET, POST
from .base import ResourceBase, require


class EventsResource(ResourceBase):
    """Record user interaction events and search the query log."""

    def create(
        self,
        type: str,
        data: Mapping[str, Any],
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        """Record an event, such as a click on a query result.

        ``data`` carries ``environment_id``, ``session_token``,
        ``collection_id`` and ``document_id``, plus the optional
        ``client_timestamp``, ``display_rank`` and ``query_id``.
        """
        require(type=type, data=data)
        builder = self._json_builder(
            POST, ["v1/events"], operation_id="CreateEvent", body={"type": type, "data": data}
        )
        return self._send(builder, ResultShape.of(CreateEventResponse), headers=headers)

    def query_log(
        self,
        *,
        filter: str | None = None,
        query: str | None = None,
        count: int | None = None,
        offset: int | None = None,
        sort: Sequence[str] | str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        builder = self._builder(
            GET,
            ["v1/logs"],
            operation_id="QueryLog",
            params={
                "filter": filter,
                "query": query,
                "count": count,
                "offset": offset,
                "sort": sort,
            },
        )
        return self._send(builder, ResultShape.of(LogQueryResponse), headers=headers)
