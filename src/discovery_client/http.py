"""HTTP utilities: response envelope, result shapes and decoding."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from requests import PreparedRequest, Response, Session

from .exceptions import ApiError, AuthenticationError, DecodeError

logger = logging.getLogger(__name__)

_NONE = "none"
_JSON = "json"
_BINARY = "binary"


@dataclass(frozen=True, slots=True)
class ResultShape:
    """Describe what an operation expects in a successful response body."""

    kind: str = _JSON
    model: type | None = None

    @classmethod
    def of(cls, model: type) -> ResultShape:
        return cls(kind=_JSON, model=model)

    @property
    def expects_body(self) -> bool:
        return self.kind != _NONE


NO_CONTENT = ResultShape(kind=_NONE)
JSON = ResultShape(kind=_JSON)
BINARY = ResultShape(kind=_BINARY)


@dataclass(slots=True)
class DetailedResponse:
    """Uniform envelope returned by every operation."""

    status_code: int
    headers: Mapping[str, str]
    result: Any = None

    @property
    def ok(self) -> bool:
        return is_success(self.status_code)

    def raise_for_status(self) -> DetailedResponse:
        """Raise for non-2xx responses, otherwise return self.

        401 and 403 raise `AuthenticationError`; every other failure raises
        `ApiError`.
        """

        if self.ok:
            return self
        error_cls = AuthenticationError if self.status_code in (401, 403) else ApiError
        raise error_cls(
            f"Discovery API error {self.status_code}: {_error_message(self.result)}",
            status_code=self.status_code,
            details=self.result,
        )

    def to_dict(self) -> dict[str, Any]:
        result = self.result
        if hasattr(result, "to_dict"):
            result = result.to_dict()
        elif isinstance(result, list):
            result = [item.to_dict() if hasattr(item, "to_dict") else item for item in result]
        elif isinstance(result, (bytes, bytearray)):
            result = f"<{len(result)} bytes>"
        return {
            "status_code": self.status_code,
            "headers": dict(self.headers),
            "result": result,
        }

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), indent=4, default=str)


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def parse_json(response: Response) -> Any:
    """Parse JSON with helpful error context."""

    try:
        return response.json()
    except ValueError as exc:
        raise DecodeError(
            f"Response from {response.url} did not contain valid JSON",
            status_code=response.status_code,
            headers=response.headers,
            details=response.text[:500],
        ) from exc


def decode_response(response: Response, shape: ResultShape = JSON) -> DetailedResponse:
    """Wrap a raw response into a `DetailedResponse`.

    Status code and headers are always carried over. Non-2xx bodies are
    surfaced as decoded JSON when possible, otherwise as text; they never
    raise here.
    """

    envelope = DetailedResponse(status_code=response.status_code, headers=response.headers)
    if not is_success(response.status_code):
        envelope.result = _error_payload(response)
        return envelope
    if not shape.expects_body:
        if response.content:
            logger.debug("Ignoring %d byte body on no-content response", len(response.content))
        return envelope
    if not response.content:
        return envelope
    if shape.kind == _BINARY:
        envelope.result = response.content
        return envelope

    payload = parse_json(response)
    if shape.model is not None:
        envelope.result = _to_model(shape.model, payload, response)
    else:
        envelope.result = payload
    return envelope


def send(
    session: Session,
    prepared: PreparedRequest,
    *,
    shape: ResultShape = JSON,
    timeout: float | tuple[float, float] | None = None,
    verify: bool | str = True,
) -> DetailedResponse:
    """Send a prepared request and return the decoded envelope."""

    response = session.send(prepared, timeout=timeout, verify=verify)
    return decode_response(response, shape)


def _to_model(model: type, payload: Any, response: Response) -> Any:
    if isinstance(payload, Mapping):
        return model.from_dict(payload)
    if isinstance(payload, list) and all(isinstance(item, Mapping) for item in payload):
        return [model.from_dict(item) for item in payload]
    raise DecodeError(
        f"Expected a JSON object for {model.__name__}, got {type(payload).__name__}",
        status_code=response.status_code,
        headers=response.headers,
        details=payload,
    )


def _error_payload(response: Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_message(payload: Any) -> str:
    if isinstance(payload, Mapping):
        for key in ("error", "errorMessage", "message", "description"):
            value = payload.get(key)
            if value:
                return str(value)
    if payload is None:
        return "no response body"
    return str(payload)[:200]


__all__ = [
    "DetailedResponse",
    "ResultShape",
    "NO_CONTENT",
    "JSON",
    "BINARY",
    "decode_response",
    "parse_json",
    "send",
    "is_success",
]
