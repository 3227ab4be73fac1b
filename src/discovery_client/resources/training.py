"""Relevancy training data operations."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ..http import NO_CONTENT, DetailedResponse, ResultShape
from ..models import TrainingDataSet, TrainingExample, TrainingExampleList, TrainingQuery
from ..request_builder import DELETE, GET, POST, PUT
from .base import ENVIRONMENTS, ResourceBase, require

TRAINING_DATA = [ENVIRONMENTS, "collections", "training_data"]
EXAMPLES = [*TRAINING_DATA, "examples"]


class TrainingResource(ResourceBase):
    """Manage training queries and their rated examples."""

    def list(
        self,
        environment_id: str,
        collection_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, collection_id=collection_id)
        builder = self._builder(
            GET, TRAINING_DATA, [environment_id, collection_id], operation_id="ListTrainingData"
        )
        return self._send(builder, ResultShape.of(TrainingDataSet), headers=headers)

    def add(
        self,
        environment_id: str,
        collection_id: str,
        *,
        natural_language_query: str | None = None,
        filter: str | None = None,
        examples: Sequence[TrainingExample | Mapping[str, Any]] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, collection_id=collection_id)
        builder = self._json_builder(
            POST,
            TRAINING_DATA,
            [environment_id, collection_id],
            operation_id="AddTrainingData",
            body={
                "natural_language_query": natural_language_query,
                "filter": filter,
                "examples": list(examples) if examples is not None else None,
            },
        )
        return self._send(builder, ResultShape.of(TrainingQuery), headers=headers)

    def delete_all(
        self,
        environment_id: str,
        collection_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, collection_id=collection_id)
        builder = self._builder(
            DELETE,
            TRAINING_DATA,
            [environment_id, collection_id],
            operation_id="DeleteAllTrainingData",
            accept=None,
        )
        return self._send(builder, NO_CONTENT, headers=headers)

    def get(
        self,
        environment_id: str,
        collection_id: str,
        query_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, collection_id=collection_id, query_id=query_id)
        builder = self._builder(
            GET,
            TRAINING_DATA,
            [environment_id, collection_id, query_id],
            operation_id="GetTrainingData",
        )
        return self._send(builder, ResultShape.of(TrainingQuery), headers=headers)

    def delete(
        self,
        environment_id: str,
        collection_id: str,
        query_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, collection_id=collection_id, query_id=query_id)
        builder = self._builder(
            DELETE,
            TRAINING_DATA,
            [environment_id, collection_id, query_id],
            operation_id="DeleteTrainingData",
            accept=None,
        )
        return self._send(builder, NO_CONTENT, headers=headers)

    # Examples -------------------------------------------------------------------
    def list_examples(
        self,
        environment_id: str,
        collection_id: str,
        query_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, collection_id=collection_id, query_id=query_id)
        builder = self._builder(
            GET,
            EXAMPLES,
            [environment_id, collection_id, query_id],
            operation_id="ListTrainingExamples",
        )
        return self._send(builder, ResultShape.of(TrainingExampleList), headers=headers)

    def create_example(
        self,
        environment_id: str,
        collection_id: str,
        query_id: str,
        *,
        document_id: str | None = None,
        cross_reference: str | None = None,
        relevance: int | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(environment_id=environment_id, collection_id=collection_id, query_id=query_id)
        builder = self._json_builder(
            POST,
            EXAMPLES,
            [environment_id, collection_id, query_id],
            operation_id="CreateTrainingExample",
            body={
                "document_id": document_id,
                "cross_reference": cross_reference,
                "relevance": relevance,
            },
        )
        return self._send(builder, ResultShape.of(TrainingExample), headers=headers)

    def get_example(
        self,
        environment_id: str,
        collection_id: str,
        query_id: str,
        example_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(
            environment_id=environment_id,
            collection_id=collection_id,
            query_id=query_id,
            example_id=example_id,
        )
        builder = self._builder(
            GET,
            EXAMPLES,
            [environment_id, collection_id, query_id, example_id],
            operation_id="GetTrainingExample",
        )
        return self._send(builder, ResultShape.of(TrainingExample), headers=headers)

    def update_example(
        self,
        environment_id: str,
        collection_id: str,
        query_id: str,
        example_id: str,
        *,
        cross_reference: str | None = None,
        relevance: int | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(
            environment_id=environment_id,
            collection_id=collection_id,
            query_id=query_id,
            example_id=example_id,
        )
        builder = self._json_builder(
            PUT,
            EXAMPLES,
            [environment_id, collection_id, query_id, example_id],
            operation_id="UpdateTrainingExample",
            body={"cross_reference": cross_reference, "relevance": relevance},
        )
        return self._send(builder, ResultShape.of(TrainingExample), headers=headers)

    def delete_example(
        self,
        environment_id: str,
        collection_id: str,
        query_id: str,
        example_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(
            environment_id=environment_id,
            collection_id=collection_id,
            query_id=query_id,
            example_id=example_id,
        )
        builder = self._builder(
            DELETE,
            EXAMPLES,
            [environment_id, collection_id, query_id, example_id],
            operation_id="DeleteTrainingExample",
            accept=None,
        )
        return self._send(builder, NO_CONTENT, headers=headers)
