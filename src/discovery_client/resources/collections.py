"""Collection operations, including query expansions and word lists."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, BinaryIO

from ..http import NO_CONTENT, DetailedResponse, ResultShape
from ..models import (
    Collection,
    DeleteCollectionResponse,
    Expansions,
    ListCollectionFieldsResponse,
    ListCollectionsResponse,
    TokenDictStatusResponse,
)
from ..request_builder import DELETE, GET, POST, PUT
from .base import ENVIRONMENTS, ResourceBase, close_streams, require

COLLECTIONS = [ENVIRONMENTS, "collections"]


class CollectionsResource(ResourceBase):
    """Manage collections and their collection-level word lists."""

    def create(
        self,
        environment_id: str,
        name: str,
        *,
        description: str | None = None,
        configuration_id: str | None = None,
        language: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, name=name)
        builder = self._json_builder(
            POST,
            COLLECTIONS,
            [environment_id],
            operation_id="CreateCollection",
            body={
                "name": name,
                "description": description,
                "configuration_id": configuration_id,
                "language": language,
            },
        )
        return self._send(builder, ResultShape.of(Collection), headers=headers)

    def get(
        self,
        environment_id: str,
        collection_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, collection_id=collection_id)
        builder = self._builder(
            GET, COLLECTIONS, [environment_id, collection_id], operation_id="GetCollection"
        )
        return self._send(builder, ResultShape.of(Collection), headers=headers)

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
            COLLECTIONS,
            [environment_id],
            operation_id="ListCollections",
            params={"name": name},
        )
        return self._send(builder, ResultShape.of(ListCollectionsResponse), headers=headers)

    def update(
        self,
        environment_id: str,
        collection_id: str,
        name: str,
        *,
        description: str | None = None,
        configuration_id: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, collection_id=collection_id, name=name)
        builder = self._json_builder(
            PUT,
            COLLECTIONS,
            [environment_id, collection_id],
            operation_id="UpdateCollection",
            body={
                "name": name,
                "description": description,
                "configuration_id": configuration_id,
            },
        )
        return self._send(builder, ResultShape.of(Collection), headers=headers)

    def delete(
        self,
        environment_id: str,
        collection_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, collection_id=collection_id)
        builder = self._builder(
            DELETE, COLLECTIONS, [environment_id, collection_id], operation_id="DeleteCollection"
        )
        return self._send(builder, ResultShape.of(DeleteCollectionResponse), headers=headers)

    def list_fields(
        self,
        environment_id: str,
        collection_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, collection_id=collection_id)
        builder = self._builder(
            GET,
            [*COLLECTIONS, "fields"],
            [environment_id, collection_id],
            operation_id="ListCollectionFields",
        )
        return self._send(builder, ResultShape.of(ListCollectionFieldsResponse), headers=headers)

    # Query expansions ----------------------------------------------------------
    def create_expansions(
        self,
        environment_id: str,
        collection_id: str,
        expansions: Sequence[Mapping[str, Any]],
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        """Replace the expansion list of a collection.

        Each expansion carries ``expanded_terms`` and, for one-way
        expansions, ``input_terms``.
        """
        require(
            environment_id=environment_id, collection_id=collection_id, expansions=expansions
        )
        builder = self._json_builder(
            POST,
            [*COLLECTIONS, "expansions"],
            [environment_id, collection_id],
            operation_id="CreateExpansions",
            body={"expansions": list(expansions)},
        )
        return self._send(builder, ResultShape.of(Expansions), headers=headers)

    def list_expansions(
        self,
        environment_id: str,
        collection_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, collection_id=collection_id)
        builder = self._builder(
            GET,
            [*COLLECTIONS, "expansions"],
            [environment_id, collection_id],
            operation_id="ListExpansions",
        )
        return self._send(builder, ResultShape.of(Expansions), headers=headers)

    def delete_expansions(
        self,
        environment_id: str,
        collection_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, collection_id=collection_id)
        builder = self._builder(
            DELETE,
            [*COLLECTIONS, "expansions"],
            [environment_id, collection_id],
            operation_id="DeleteExpansions",
            accept=None,
        )
        return self._send(builder, NO_CONTENT, headers=headers)

    # Tokenization dictionary ---------------------------------------------------
    def create_tokenization_dictionary(
        self,
        environment_id: str,
        collection_id: str,
        *,
        tokenization_rules: Sequence[Mapping[str, Any]] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, collection_id=collection_id)
        builder = self._json_builder(
            POST,
            [*COLLECTIONS, "word_lists/tokenization_dictionary"],
            [environment_id, collection_id],
            operation_id="CreateTokenizationDictionary",
            body={
                "tokenization_rules": list(tokenization_rules)
                if tokenization_rules is not None
                else None
            },
        )
        return self._send(builder, ResultShape.of(TokenDictStatusResponse), headers=headers)

    def get_tokenization_dictionary_status(
        self,
        environment_id: str,
        collection_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, collection_id=collection_id)
        builder = self._builder(
            GET,
            [*COLLECTIONS, "word_lists/tokenization_dictionary"],
            [environment_id, collection_id],
            operation_id="GetTokenizationDictionaryStatus",
        )
        return self._send(builder, ResultShape.of(TokenDictStatusResponse), headers=headers)

    def delete_tokenization_dictionary(
        self,
        environment_id: str,
        collection_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, collection_id=collection_id)
        builder = self._builder(
            DELETE,
            [*COLLECTIONS, "word_lists/tokenization_dictionary"],
            [environment_id, collection_id],
            operation_id="DeleteTokenizationDictionary",
            accept=None,
        )
        return self._send(builder, NO_CONTENT, headers=headers)

    # Stopwords -----------------------------------------------------------------
    def create_stopword_list(
        self,
        environment_id: str,
        collection_id: str,
        stopword_file: BinaryIO | bytes | str,
        stopword_filename: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        """Upload a newline-separated stopword file for the collection."""
        try:
            require(
                environment_id=environment_id,
                collection_id=collection_id,
                stopword_file=stopword_file,
                stopword_filename=stopword_filename,
            )
            builder = self._builder(
                POST,
                [*COLLECTIONS, "word_lists/stopwords"],
                [environment_id, collection_id],
                operation_id="CreateStopwordList",
            )
            builder.add_form_part(
                "stopword_file",
                stopword_file,
                filename=stopword_filename,
                content_type="application/octet-stream",
            )
        except Exception:
            close_streams(stopword_file)
            raise
        return self._send(builder, ResultShape.of(TokenDictStatusResponse), headers=headers)

    def get_stopword_list_status(
        self,
        environment_id: str,
        collection_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, collection_id=collection_id)
        builder = self._builder(
            GET,
            [*COLLECTIONS, "word_lists/stopwords"],
            [environment_id, collection_id],
            operation_id="GetStopwordListStatus",
        )
        return self._send(builder, ResultShape.of(TokenDictStatusResponse), headers=headers)

    def delete_stopword_list(
        self,
        environment_id: str,
        collection_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, collection_id=collection_id)
        builder = self._builder(
            DELETE,
            [*COLLECTIONS, "word_lists/stopwords"],
            [environment_id, collection_id],
            operation_id="DeleteStopwordList",
            accept=None,
        )
        return self._send(builder, NO_CONTENT, headers=headers)
