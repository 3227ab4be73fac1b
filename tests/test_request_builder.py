import pytest

from discovery_client.exceptions import ConstructionError
from discovery_client.request_builder import (
    DELETE,
    GET,
    PATCH,
    POST,
    RequestBuilder,
    format_query_value,
    is_json_mime_type,
    prune_none,
)


def test_url_with_literal_segment_and_version_query():
    builder = RequestBuilder(GET).construct_url("https://x/api", ["v1/environments"])
    builder.add_query("version", "2018-03-05")

    assert builder.url == "https://x/api/v1/environments?version=2018-03-05"


def test_path_parameters_interleave_with_segments():
    builder = RequestBuilder(GET).construct_url(
        "https://x/api", ["v1/environments", "collections"], ["env1", "coll1"]
    )

    assert builder.url == "https://x/api/v1/environments/env1/collections/coll1"


def test_trailing_segment_without_parameter_is_kept():
    builder = RequestBuilder(GET).construct_url(
        "https://x/api/", ["v1/environments", "collections", "fields"], ["env1", "coll1"]
    )

    assert builder.url == "https://x/api/v1/environments/env1/collections/coll1/fields"


def test_path_parameters_are_escaped():
    builder = RequestBuilder(GET).construct_url(
        "https://x/api", ["v1/environments"], ["a b/c?d"]
    )

    assert builder.url == "https://x/api/v1/environments/a%20b%2Fc%3Fd"


def test_empty_path_parameter_is_rejected():
    with pytest.raises(ConstructionError):
        RequestBuilder(DELETE).construct_url("https://x/api", ["v1/environments"], [""])


def test_more_parameters_than_segments_is_rejected():
    with pytest.raises(ConstructionError):
        RequestBuilder(GET).construct_url("https://x/api", ["v1/environments"], ["a", "b"])


@pytest.mark.parametrize(
    "base_url",
    ["", "not a url", "ftp://x/api", '"https://x/api"', "{https://x/api}"],
)
def test_malformed_base_url_is_rejected(base_url):
    with pytest.raises(ConstructionError):
        RequestBuilder(GET).construct_url(base_url, ["v1/environments"])


def test_unsupported_method_is_rejected():
    with pytest.raises(ConstructionError):
        RequestBuilder("TRACE")


def test_query_keeps_insertion_order_and_skips_none():
    builder = RequestBuilder(GET).construct_url("https://x/api", ["v1/logs"])
    builder.add_query("version", "2019-04-30")
    builder.add_query("filter", None)
    builder.add_query("count", 10)
    builder.add_query("sort", ["-date", "title"])

    assert builder.url == "https://x/api/v1/logs?version=2019-04-30&count=10&sort=-date%2Ctitle"


def test_query_allows_repeated_names():
    builder = RequestBuilder(GET).construct_url("https://x/api", ["v1/logs"])
    builder.add_query("tag", "a")
    builder.add_query("tag", "b")

    assert builder.url.endswith("?tag=a&tag=b")


def test_query_names_and_values_are_encoded():
    builder = RequestBuilder(GET).construct_url("https://x/api", ["v1/logs"])
    builder.add_query("natural_language_query", "what is IBM?")

    assert builder.url.endswith("?natural_language_query=what%20is%20IBM%3F")


def test_format_query_value_conventions():
    assert format_query_value(True) == "true"
    assert format_query_value(False) == "false"
    assert format_query_value(["a", "b", "c"]) == "a,b,c"
    assert format_query_value(5) == "5"


def test_json_body_omits_absent_fields_exactly():
    builder = RequestBuilder(POST).construct_url("https://x/api", ["v1/environments"])
    builder.set_json_body({"name": "foo", "description": None})

    prepared = builder.build()

    assert prepared.body == b'{"name":"foo"}'
    assert prepared.headers["Content-Type"] == "application/json"


def test_json_body_prunes_nested_none_values():
    assert prune_none({"a": {"b": None, "c": 1}, "d": [{"e": None}]}) == {
        "a": {"c": 1},
        "d": [{}],
    }


def test_unencodable_json_body_fails_before_send():
    builder = RequestBuilder(POST).construct_url("https://x/api", ["v1/events"])

    with pytest.raises(ConstructionError):
        builder.set_json_body({"value": object()})
    with pytest.raises(ConstructionError):
        RequestBuilder(POST).set_json_body({"value": float("nan")})


def test_only_one_body_representation_is_allowed():
    builder = RequestBuilder(POST).construct_url("https://x/api", ["v1/environments"])
    builder.set_json_body({"name": "foo"})

    with pytest.raises(ConstructionError):
        builder.add_form_part("file", b"data")
    with pytest.raises(ConstructionError):
        builder.set_json_body({"name": "bar"})


def test_caller_content_type_survives_json_body():
    builder = RequestBuilder(POST).construct_url("https://x/api", ["v1/environments"])
    builder.add_header("Content-Type", "application/merge-patch+json")
    builder.set_json_body({"name": "foo"})

    assert builder.build().headers["Content-Type"] == "application/merge-patch+json"


def test_header_values_are_formatted_and_none_skipped():
    builder = RequestBuilder(GET).construct_url("https://x/api", ["v1/environments"])
    builder.add_header("X-Watson-Logging-Opt-Out", True)
    builder.add_header("X-Absent", None)

    assert builder.headers["x-watson-logging-opt-out"] == "true"
    assert "X-Absent" not in builder.headers


def test_multipart_body_writes_every_part_and_closes_streams(tmp_path):
    document = tmp_path / "doc.txt"
    document.write_bytes(b"hello world")
    stream = document.open("rb")
    builder = RequestBuilder(POST, boundary="testboundary").construct_url(
        "https://x/api", ["v1/environments", "collections", "documents"], ["env", "coll"]
    )
    builder.add_form_part("file", stream, content_type="text/plain")
    builder.add_form_part("metadata", {"author": "me"}, content_type="application/json")
    builder.add_form_part("skipped", None)

    prepared = builder.build()

    body = prepared.body
    assert stream.closed
    assert prepared.headers["Content-Type"] == "multipart/form-data; boundary=testboundary"
    assert prepared.headers["Content-Length"] == str(len(body))
    assert body.count(b"--testboundary\r\n") == 2
    assert body.endswith(b"--testboundary--\r\n")
    assert b'name="file"; filename="doc.txt"' in body
    assert b"hello world" in body
    assert b'{"author":"me"}' in body
    assert b'name="skipped"' not in body


def test_multipart_build_is_repeatable(tmp_path):
    document = tmp_path / "doc.txt"
    document.write_bytes(b"payload")
    builder = RequestBuilder(POST).construct_url("https://x/api", ["v1/environments"])
    builder.add_form_part("file", document.open("rb"))

    first = builder.build()
    second = builder.build()

    assert first.body == second.body
    assert first.headers["Content-Type"] == second.headers["Content-Type"]


def test_streams_are_closed_when_encoding_fails(tmp_path):
    document = tmp_path / "doc.txt"
    document.write_bytes(b"payload")
    stream = document.open("rb")
    builder = RequestBuilder(POST).construct_url("https://x/api", ["v1/environments"])
    builder.add_form_part("broken", 42)
    builder.add_form_part("file", stream)

    with pytest.raises(ConstructionError):
        builder.build()
    assert stream.closed


def test_release_closes_unread_streams_once(tmp_path):
    closes = []

    class Stream:
        name = "upload.bin"

        def read(self):
            return b""

        def close(self):
            closes.append(True)

    builder = RequestBuilder(POST).construct_url("https://x/api", ["v1/environments"])
    builder.add_form_part("file", Stream())

    builder.release()
    builder.release()

    assert closes == [True]
    assert builder.form[0].filename == "upload.bin"


def test_json_mime_detection():
    assert is_json_mime_type("application/json")
    assert is_json_mime_type("application/json; charset=utf-8")
    assert is_json_mime_type("application/merge-patch+json")
    assert is_json_mime_type("application/json-patch+json")
    assert not is_json_mime_type("text/plain")
    assert not is_json_mime_type(None)


def test_form_urlencoded_body():
    builder = RequestBuilder(POST).construct_url("https://x/api", ["v1/token"])
    builder.set_form_urlencoded({"grant_type": "password", "scope": None, "debug": True})

    prepared = builder.build()

    assert prepared.body == "grant_type=password&debug=true"
    assert prepared.headers["Content-Type"] == "application/x-www-form-urlencoded"


def test_raw_body_keeps_content_type():
    builder = RequestBuilder(PATCH).construct_url("https://x/api", ["v1/environments"], ["env1"])
    builder.set_raw_body(b"\x00\x01", "application/octet-stream")

    prepared = builder.build()

    assert prepared.method == "PATCH"
    assert prepared.body == b"\x00\x01"
    assert prepared.headers["Content-Type"] == "application/octet-stream"


@pytest.mark.parametrize("value", ["a\r\nInjected: 1", " leading"])
def test_header_with_control_characters_is_a_construction_error(value):
    builder = RequestBuilder(GET).construct_url("https://x/api", ["v1/environments"])
    builder.add_header("X-Trace", value)

    with pytest.raises(ConstructionError, match="Invalid request header"):
        builder.build()


def test_set_values_render_in_a_stable_order():
    assert format_query_value({"title", "author", "date"}) == "author,date,title"
    assert format_query_value(frozenset({3, 1, 2})) == "1,2,3"
