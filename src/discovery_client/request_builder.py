"""Request construction: URL, query string, headers and body composition."""

from __future__ import annotations

import json
import os
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote, urlencode, urlparse

import requests
from requests.structures import CaseInsensitiveDict
from urllib3.fields import RequestField
from urllib3.filepost import encode_multipart_formdata

from .exceptions import ConstructionError

GET = "GET"
POST = "POST"
PUT = "PUT"
PATCH = "PATCH"
DELETE = "DELETE"
_METHODS = frozenset({GET, POST, PUT, PATCH, DELETE})

ACCEPT = "Accept"
CONTENT_TYPE = "Content-Type"
APPLICATION_JSON = "application/json"
FORM_URLENCODED = "application/x-www-form-urlencoded"

_JSON_MIME = re.compile(r"^application/((json)|(merge-patch\+json))(;.*)?$", re.IGNORECASE)
_JSON_PATCH_MIME = re.compile(r"^application/json-patch\+json(;.*)?$", re.IGNORECASE)
_BAD_EDGE_CHARS = ("{", "}", '"')


def is_json_mime_type(mime_type: str | None) -> bool:
    return bool(mime_type) and bool(
        _JSON_MIME.match(mime_type) or _JSON_PATCH_MIME.match(mime_type)
    )


def has_bad_first_or_last_char(value: str) -> bool:
    """Flag values pasted with surrounding braces or quotes."""

    return bool(value) and (value.startswith(_BAD_EDGE_CHARS) or value.endswith(_BAD_EDGE_CHARS))


def prune_none(value: Any) -> Any:
    """Drop `None` entries from mappings, recursively, so they never serialize as null."""

    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        value = to_dict()
    if isinstance(value, Mapping):
        return {key: prune_none(item) for key, item in value.items() if item is not None}
    if isinstance(value, (list, tuple)):
        return [prune_none(item) for item in value]
    return value


def format_query_value(value: Any) -> str:
    """Render a query value using the service conventions.

    Sequences are comma-joined and booleans are lower-case. Sets are sorted
    first so the same values always render the same way.
    """

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (set, frozenset)):
        value = sorted(value, key=format_query_value)
    if isinstance(value, (list, tuple)):
        return ",".join(format_query_value(item) for item in value)
    return str(value)


@dataclass(slots=True)
class FormPart:
    """One field of a multipart/form-data body."""

    name: str
    content: Any
    filename: str | None = None
    content_type: str | None = None
    released: bool = False

    @property
    def is_stream(self) -> bool:
        return callable(getattr(self.content, "read", None))

    def release(self) -> None:
        """Close the underlying stream once."""

        if self.released or not self.is_stream:
            return
        self.released = True
        close = getattr(self.content, "close", None)
        if callable(close):
            close()

    def read(self) -> bytes:
        if self.is_stream:
            try:
                data = self.content.read()
            finally:
                self.release()
        elif is_json_mime_type(self.content_type) and isinstance(self.content, (Mapping, list)):
            data = _dump_json(self.content)
        else:
            data = self.content
        if isinstance(data, str):
            return data.encode("utf-8")
        if isinstance(data, (bytes, bytearray)):
            return bytes(data)
        raise ConstructionError(
            f"Could not decipher the contents of form part '{self.name}' "
            f"({type(data).__name__})"
        )

    def to_field(self) -> RequestField:
        field = RequestField(name=self.name, data=self.read(), filename=self.filename)
        field.make_multipart(content_type=self.content_type)
        return field


def _dump_json(payload: Any) -> bytes:
    try:
        return json.dumps(prune_none(payload), separators=(",", ":"), allow_nan=False).encode(
            "utf-8"
        )
    except (TypeError, ValueError) as exc:
        raise ConstructionError(f"Unable to encode JSON body: {exc}") from exc


class RequestBuilder:
    """Assemble one HTTP request for the service.

    A builder is created per call, filled in by an operation, and turned into
    a `requests.PreparedRequest` with `build()`. Exactly one body
    representation (JSON, multipart, url-encoded form or raw) may be set.
    """

    def __init__(self, method: str, *, boundary: str | None = None) -> None:
        normalized = method.upper()
        if normalized not in _METHODS:
            raise ConstructionError(f"Unsupported HTTP method: {method}")
        self.method = normalized
        self.headers: CaseInsensitiveDict[str] = CaseInsensitiveDict()
        self.query: list[tuple[str, str]] = []
        self.form: list[FormPart] = []
        self._base_url: str | None = None
        self._body_kind: str | None = None
        self._body: bytes | str | None = None
        self._boundary = boundary
        self._encoded_form: tuple[bytes, str] | None = None

    # URL ---------------------------------------------------------------------
    def construct_url(
        self,
        base_url: str,
        path_segments: Iterable[str] = (),
        path_parameters: Iterable[Any] | None = None,
    ) -> RequestBuilder:
        """Join literal segments, interleaving escaped path parameters positionally."""

        _validate_base_url(base_url)
        segments = list(path_segments)
        parameters = list(path_parameters or ())
        if len(parameters) > len(segments):
            raise ConstructionError(
                f"{len(parameters)} path parameters supplied for {len(segments)} path segments"
            )
        endpoint = base_url.rstrip("/")
        for index, segment in enumerate(segments):
            endpoint += "/" + segment.strip("/")
            if index < len(parameters):
                parameter = parameters[index]
                if parameter is None or str(parameter) == "":
                    raise ConstructionError(f"Path parameter for '{segment}' is empty")
                endpoint += "/" + quote(str(parameter), safe="")
        self._base_url = endpoint
        return self

    def add_query(self, name: str, value: Any) -> RequestBuilder:
        if value is None:
            return self
        self.query.append((name, format_query_value(value)))
        return self

    def add_queries(self, params: Mapping[str, Any] | None) -> RequestBuilder:
        for name, value in (params or {}).items():
            self.add_query(name, value)
        return self

    @property
    def url(self) -> str:
        if self._base_url is None:
            raise ConstructionError("construct_url() must be called before the URL is used")
        if not self.query:
            return self._base_url
        return f"{self._base_url}?{urlencode(self.query, quote_via=quote)}"

    # Headers -------------------------------------------------------------------
    def add_header(self, name: str, value: Any) -> RequestBuilder:
        if value is None:
            return self
        self.headers[name] = format_query_value(value)
        return self

    def add_headers(self, headers: Mapping[str, Any] | None) -> RequestBuilder:
        for name, value in (headers or {}).items():
            self.add_header(name, value)
        return self

    # Bodies --------------------------------------------------------------------
    def set_json_body(self, payload: Any) -> RequestBuilder:
        self._claim_body("json")
        self._body = _dump_json(payload)
        self.headers.setdefault(CONTENT_TYPE, APPLICATION_JSON)
        return self

    def set_form_urlencoded(self, fields: Mapping[str, Any]) -> RequestBuilder:
        self._claim_body("urlencoded")
        pairs = [(name, format_query_value(value)) for name, value in fields.items() if value is not None]
        self._body = urlencode(pairs)
        self.headers[CONTENT_TYPE] = FORM_URLENCODED
        return self

    def set_raw_body(self, content: str | bytes, content_type: str) -> RequestBuilder:
        self._claim_body("raw")
        self._body = content
        self.headers[CONTENT_TYPE] = content_type
        return self

    def add_form_part(
        self,
        name: str,
        content: Any,
        *,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> RequestBuilder:
        """Append a multipart field; `None` content adds nothing."""

        if content is None:
            return self
        self._claim_body("multipart")
        if filename is None:
            stream_name = getattr(content, "name", None)
            if isinstance(stream_name, str) and stream_name:
                filename = os.path.basename(stream_name)
        self.form.append(
            FormPart(name=name, content=content, filename=filename, content_type=content_type)
        )
        return self

    def release(self) -> None:
        """Close any stream parts that were never read."""

        for part in self.form:
            part.release()

    def build(self) -> requests.PreparedRequest:
        url = self.url
        headers = CaseInsensitiveDict(self.headers)
        body: bytes | str | None = self._body
        if self._body_kind == "multipart":
            body, content_type = self._encode_form()
            headers[CONTENT_TYPE] = content_type
        request = requests.Request(method=self.method, url=url, headers=headers, data=body)
        try:
            return request.prepare()
        except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema) as exc:
            raise ConstructionError(f"Invalid request URL {url!r}: {exc}") from exc
        except requests.exceptions.InvalidHeader as exc:
            raise ConstructionError(f"Invalid request header: {exc}") from exc

    def _encode_form(self) -> tuple[bytes, str]:
        if self._encoded_form is None:
            try:
                fields = [part.to_field() for part in self.form]
            finally:
                self.release()
            self._encoded_form = encode_multipart_formdata(fields, boundary=self._boundary)
        return self._encoded_form

    def _claim_body(self, kind: str) -> None:
        if self._body_kind is not None and self._body_kind != kind:
            raise ConstructionError(
                f"Request already has a {self._body_kind} body; cannot add a {kind} body"
            )
        if kind != "multipart" and self._body_kind == kind:
            raise ConstructionError(f"Request body ({kind}) has already been set")
        self._body_kind = kind


def _validate_base_url(base_url: str) -> None:
    if not base_url:
        raise ConstructionError("Service URL is empty")
    if has_bad_first_or_last_char(base_url):
        raise ConstructionError(
            "The URL shouldn't start or end with curly brackets or quotes. "
            'Be sure to remove any {} and " characters surrounding your URL'
        )
    parsed = urlparse(base_url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ConstructionError(f"Malformed service URL: {base_url!r}")


__all__ = [
    "RequestBuilder",
    "FormPart",
    "GET",
    "POST",
    "PUT",
    "PATCH",
    "DELETE",
    "ACCEPT",
    "CONTENT_TYPE",
    "APPLICATION_JSON",
    "is_json_mime_type",
    "prune_none",
    "format_query_value",
]
