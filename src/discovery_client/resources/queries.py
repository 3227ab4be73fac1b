"""Query operations."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ..http import DetailedResponse, ResultShape
from ..models import Completions, QueryNoticesResponse, QueryResponse
from ..request_builder import GET, POST
from .base import ENVIRONMENTS, ResourceBase, join_values, require

LOGGING_OPT_OUT_HEADER = "X-Watson-Logging-Opt-Out"

StrList = Sequence[str] | str


def _query_body(
    *,
    filter: str | None,
    query: str | None,
    natural_language_query: str | None,
    passages: bool | None,
    aggregation: str | None,
    count: int | None,
    return_fields: StrList | None,
    offset: int | None,
    sort: StrList | None,
    highlight: bool | None,
    passages_fields: StrList | None,
    passages_count: int | None,
    passages_characters: int | None,
    deduplicate: bool | None,
    deduplicate_field: str | None,
    similar: bool | None,
    similar_document_ids: StrList | None,
    similar_fields: StrList | None,
    bias: str | None,
    spelling_suggestions: bool | None,
) -> dict[str, Any]:
    return {
        "filter": filter,
        "query": query,
        "natural_language_query": natural_language_query,
        "passages": passages,
        "aggregation": aggregation,
        "count": count,
        "return": join_values(return_fields),
        "offset": offset,
        "sort": join_values(sort),
        "highlight": highlight,
        "passages.fields": join_values(passages_fields),
        "passages.count": passages_count,
        "passages.characters": passages_characters,
        "deduplicate": deduplicate,
        "deduplicate.field": deduplicate_field,
        "similar": similar,
        "similar.document_ids": join_values(similar_document_ids),
        "similar.fields": join_values(similar_fields),
        "bias": bias,
        "spelling_suggestions": spelling_suggestions,
    }


def _notices_params(
    *,
    filter: str | None,
    query: str | None,
    natural_language_query: str | None,
    aggregation: str | None,
    count: int | None,
    return_fields: StrList | None,
    offset: int | None,
    sort: StrList | None,
    highlight: bool | None,
    deduplicate_field: str | None,
    similar: bool | None,
    similar_document_ids: StrList | None,
    similar_fields: StrList | None,
) -> dict[str, Any]:
    return {
        "filter": filter,
        "query": query,
        "natural_language_query": natural_language_query,
        "aggregation": aggregation,
        "count": count,
        "return": return_fields,
        "offset": offset,
        "sort": sort,
        "highlight": highlight,
        "deduplicate.field": deduplicate_field,
        "similar": similar,
        "similar.document_ids": similar_document_ids,
        "similar.fields": similar_fields,
    }


class QueriesResource(ResourceBase):
    """Search collections and their ingestion notices."""

    def query(
        self,
        environment_id: str,
        collection_id: str,
        *,
        filter: str | None = None,
        query: str | None = None,
        natural_language_query: str | None = None,
        passages: bool | None = None,
        aggregation: str | None = None,
        count: int | None = None,
        return_fields: StrList | None = None,
        offset: int | None = None,
        sort: StrList | None = None,
        highlight: bool | None = None,
        passages_fields: StrList | None = None,
        passages_count: int | None = None,
        passages_characters: int | None = None,
        deduplicate: bool | None = None,
        deduplicate_field: str | None = None,
        similar: bool | None = None,
        similar_document_ids: StrList | None = None,
        similar_fields: StrList | None = None,
        bias: str | None = None,
        spelling_suggestions: bool | None = None,
        logging_opt_out: bool | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        """Query one collection.

        Multi-value arguments (``return_fields``, ``sort``,
        ``passages_fields``, ``similar_document_ids``, ``similar_fields``)
        accept a list or an already comma-separated string.
        ``logging_opt_out`` sets the ``X-Watson-Logging-Opt-Out`` header.
        """
        require(environment_id=environment_id, collection_id=collection_id)
        builder = self._json_builder(
            POST,
            [ENVIRONMENTS, "collections", "query"],
            [environment_id, collection_id],
            operation_id="Query",
            body=_query_body(
                filter=filter,
                query=query,
                natural_language_query=natural_language_query,
                passages=passages,
                aggregation=aggregation,
                count=count,
                return_fields=return_fields,
                offset=offset,
                sort=sort,
                highlight=highlight,
                passages_fields=passages_fields,
                passages_count=passages_count,
                passages_characters=passages_characters,
                deduplicate=deduplicate,
                deduplicate_field=deduplicate_field,
                similar=similar,
                similar_document_ids=similar_document_ids,
                similar_fields=similar_fields,
                bias=bias,
                spelling_suggestions=spelling_suggestions,
            ),
        )
        builder.add_header(LOGGING_OPT_OUT_HEADER, logging_opt_out)
        return self._send(builder, ResultShape.of(QueryResponse), headers=headers)

    def query_notices(
        self,
        environment_id: str,
        collection_id: str,
        *,
        filter: str | None = None,
        query: str | None = None,
        natural_language_query: str | None = None,
        passages: bool | None = None,
        aggregation: str | None = None,
        count: int | None = None,
        return_fields: StrList | None = None,
        offset: int | None = None,
        sort: StrList | None = None,
        highlight: bool | None = None,
        passages_fields: StrList | None = None,
        passages_count: int | None = None,
        passages_characters: int | None = None,
        deduplicate_field: str | None = None,
        similar: bool | None = None,
        similar_document_ids: StrList | None = None,
        similar_fields: StrList | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        """Query the notices (warnings and errors) raised while ingesting a collection."""
        require(environment_id=environment_id, collection_id=collection_id)
        params = _notices_params(
            filter=filter,
            query=query,
            natural_language_query=natural_language_query,
            aggregation=aggregation,
            count=count,
            return_fields=return_fields,
            offset=offset,
            sort=sort,
            highlight=highlight,
            deduplicate_field=deduplicate_field,
            similar=similar,
            similar_document_ids=similar_document_ids,
            similar_fields=similar_fields,
        )
        params.update(
            {
                "passages": passages,
                "passages.fields": passages_fields,
                "passages.count": passages_count,
                "passages.characters": passages_characters,
            }
        )
        builder = self._builder(
            GET,
            [ENVIRONMENTS, "collections", "notices"],
            [environment_id, collection_id],
            operation_id="QueryNotices",
            params=params,
        )
        return self._send(builder, ResultShape.of(QueryNoticesResponse), headers=headers)

    def federated_query(
        self,
        environment_id: str,
        collection_ids: StrList,
        *,
        filter: str | None = None,
        query: str | None = None,
        natural_language_query: str | None = None,
        passages: bool | None = None,
        aggregation: str | None = None,
        count: int | None = None,
        return_fields: StrList | None = None,
        offset: int | None = None,
        sort: StrList | None = None,
        highlight: bool | None = None,
        passages_fields: StrList | None = None,
        passages_count: int | None = None,
        passages_characters: int | None = None,
        deduplicate: bool | None = None,
        deduplicate_field: str | None = None,
        similar: bool | None = None,
        similar_document_ids: StrList | None = None,
        similar_fields: StrList | None = None,
        bias: str | None = None,
        logging_opt_out: bool | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        """Query several collections of one environment at once."""
        require(environment_id=environment_id, collection_ids=collection_ids)
        body = _query_body(
            filter=filter,
            query=query,
            natural_language_query=natural_language_query,
            passages=passages,
            aggregation=aggregation,
            count=count,
            return_fields=return_fields,
            offset=offset,
            sort=sort,
            highlight=highlight,
            passages_fields=passages_fields,
            passages_count=passages_count,
            passages_characters=passages_characters,
            deduplicate=deduplicate,
            deduplicate_field=deduplicate_field,
            similar=similar,
            similar_document_ids=similar_document_ids,
            similar_fields=similar_fields,
            bias=bias,
            spelling_suggestions=None,
        )
        body["collection_ids"] = join_values(collection_ids)
        builder = self._json_builder(
            POST,
            [ENVIRONMENTS, "query"],
            [environment_id],
            operation_id="FederatedQuery",
            body=body,
        )
        builder.add_header(LOGGING_OPT_OUT_HEADER, logging_opt_out)
        return self._send(builder, ResultShape.of(QueryResponse), headers=headers)

    def federated_query_notices(
        self,
        environment_id: str,
        collection_ids: StrList,
        *,
        filter: str | None = None,
        query: str | None = None,
        natural_language_query: str | None = None,
        aggregation: str | None = None,
        count: int | None = None,
        return_fields: StrList | None = None,
        offset: int | None = None,
        sort: StrList | None = None,
        highlight: bool | None = None,
        deduplicate_field: str | None = None,
        similar: bool | None = None,
        similar_document_ids: StrList | None = None,
        similar_fields: StrList | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, collection_ids=collection_ids)
        params = {"collection_ids": collection_ids}
        params.update(
            _notices_params(
                filter=filter,
                query=query,
                natural_language_query=natural_language_query,
                aggregation=aggregation,
                count=count,
                return_fields=return_fields,
                offset=offset,
                sort=sort,
                highlight=highlight,
                deduplicate_field=deduplicate_field,
                similar=similar,
                similar_document_ids=similar_document_ids,
                similar_fields=similar_fields,
            )
        )
        builder = self._builder(
            GET,
            [ENVIRONMENTS, "notices"],
            [environment_id],
            operation_id="FederatedQueryNotices",
            params=params,
        )
        return self._send(builder, ResultShape.of(QueryNoticesResponse), headers=headers)

    def autocompletion(
        self,
        environment_id: str,
        collection_id: str,
        prefix: str,
        *,
        field: str | None = None,
        count: int | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        """Return completions for a query prefix."""
        require(environment_id=environment_id, collection_id=collection_id, prefix=prefix)
        builder = self._builder(
            GET,
            [ENVIRONMENTS, "collections", "autocompletion"],
            [environment_id, collection_id],
            operation_id="GetAutocompletion",
            params={"prefix": prefix, "field": field, "count": count},
        )
        return self._send(builder, ResultShape.of(Completions), headers=headers)
