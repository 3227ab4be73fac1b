"""Document ingestion operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, BinaryIO

from ..http import DetailedResponse, ResultShape
from ..models import DeleteDocumentResponse, DocumentAccepted, DocumentStatus
from ..request_builder import APPLICATION_JSON, DELETE, GET, POST, RequestBuilder
from .base import ENVIRONMENTS, ResourceBase, close_streams, require, require_any

DOCUMENTS = [ENVIRONMENTS, "collections", "documents"]


def _add_document_parts(
    builder: RequestBuilder,
    file: BinaryIO | bytes | str | None,
    filename: str | None,
    file_content_type: str | None,
    metadata: str | Mapping[str, Any] | None,
) -> None:
    builder.add_form_part("file", file, filename=filename, content_type=file_content_type)
    builder.add_form_part(
        "metadata",
        metadata,
        content_type=APPLICATION_JSON if isinstance(metadata, Mapping) else None,
    )


class DocumentsResource(ResourceBase):
    """Add, replace, inspect and remove documents in a collection."""

    def add(
        self,
        environment_id: str,
        collection_id: str,
        *,
        file: BinaryIO | bytes | str | None = None,
        filename: str | None = None,
        file_content_type: str | None = None,
        metadata: str | Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        """Add a document to a collection with optional metadata.

        At least one of ``file`` or ``metadata`` is required. A stream passed
        as ``file`` is read once and closed, including when the call fails
        before anything is sent.
        When ``filename`` is omitted the stream's own name is used.

        Returns:
            A `DetailedResponse` whose result is a `DocumentAccepted` record.
        """
        try:
            require(environment_id=environment_id, collection_id=collection_id)
            require_any(file=file, metadata=metadata)
            builder = self._builder(
                POST,
                DOCUMENTS,
                [environment_id, collection_id],
                operation_id="AddDocument",
            )
            _add_document_parts(builder, file, filename, file_content_type, metadata)
        except Exception:
            close_streams(file)
            raise
        return self._send(builder, ResultShape.of(DocumentAccepted), headers=headers)

    def update(
        self,
        environment_id: str,
        collection_id: str,
        document_id: str,
        *,
        file: BinaryIO | bytes | str | None = None,
        filename: str | None = None,
        file_content_type: str | None = None,
        metadata: str | Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        """Replace an existing document, or create it under the given id."""
        try:
            require(
                environment_id=environment_id,
                collection_id=collection_id,
                document_id=document_id,
            )
            require_any(file=file, metadata=metadata)
            builder = self._builder(
                POST,
                DOCUMENTS,
                [environment_id, collection_id, document_id],
                operation_id="UpdateDocument",
            )
            _add_document_parts(builder, file, filename, file_content_type, metadata)
        except Exception:
            close_streams(file)
            raise
        return self._send(builder, ResultShape.of(DocumentAccepted), headers=headers)

    def get_status(
        self,
        environment_id: str,
        collection_id: str,
        document_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(
            environment_id=environment_id, collection_id=collection_id, document_id=document_id
        )
        builder = self._builder(
            GET,
            DOCUMENTS,
            [environment_id, collection_id, document_id],
            operation_id="GetDocumentStatus",
        )
        return self._send(builder, ResultShape.of(DocumentStatus), headers=headers)

    def delete(
        self,
        environment_id: str,
        collection_id: str,
        document_id: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> DetailedResponse:
        require(
            environment_id=environment_id, collection_id=collection_id, document_id=document_id
        )
        builder = self._builder(
            DELETE,
            DOCUMENTS,
            [environment_id, collection_id, document_id],
            operation_id="DeleteDocument",
        )
        return self._send(builder, ResultShape.of(DeleteDocumentResponse), headers=headers)
