import pytest

from discovery_client import DiscoveryClient
from discovery_client.auth import BasicAuth
from discovery_client.exceptions import ConstructionError, ValidationError
from discovery_client.models import (
    Configuration,
    ConfigurationPreview,
    DeleteEnvironmentResponse,
    Environment,
)

BASE_URL = "https://x/api"
VERSION = "2018-03-05"
ENV_URL = f"{BASE_URL}/v1/environments"


def build_client():
    return DiscoveryClient(
        base_url=BASE_URL, version=VERSION, auth_strategy=BasicAuth("u", "p")
    )


def test_create_environment_omits_unset_fields(requests_mock):
    client = build_client()
    matcher = requests_mock.post(
        ENV_URL, status_code=201, json={"environment_id": "env1", "name": "foo"}
    )

    response = client.environments.create("foo")

    assert response.status_code == 201
    assert isinstance(response.result, Environment)
    assert matcher.last_request.body == b'{"name":"foo"}'
    assert matcher.last_request.headers["Content-Type"] == "application/json"
    assert matcher.last_request.url == f"{ENV_URL}?version={VERSION}"


def test_create_environment_requires_name():
    client = build_client()

    with pytest.raises(ValidationError, match="name must be provided"):
        client.environments.create("")


def test_update_environment_uses_put(requests_mock):
    client = build_client()
    matcher = requests_mock.put(f"{ENV_URL}/env1", json={"environment_id": "env1", "size": "M"})

    response = client.environments.update("env1", size="M")

    assert response.result.size == "M"
    assert matcher.last_request.json() == {"size": "M"}


def test_delete_environment(requests_mock):
    client = build_client()
    requests_mock.delete(f"{ENV_URL}/env1", json={"environment_id": "env1", "status": "deleted"})

    response = client.environments.delete("env1")

    assert isinstance(response.result, DeleteEnvironmentResponse)
    assert response.result.status == "deleted"


def test_list_fields_joins_collection_ids(requests_mock):
    client = build_client()
    matcher = requests_mock.get(
        f"{ENV_URL}/env1/fields",
        json={"fields": [{"field": "title", "type": "string"}]},
    )

    response = client.environments.list_fields("env1", ["c1", "c2"])

    assert response.result.fields[0].field == "title"
    assert matcher.last_request.url == (
        f"{ENV_URL}/env1/fields?version={VERSION}&collection_ids=c1%2Cc2"
    )


def test_list_fields_requires_collection_ids():
    client = build_client()

    with pytest.raises(ValidationError):
        client.environments.list_fields("env1", [])


def test_create_configuration(requests_mock):
    client = build_client()
    matcher = requests_mock.post(
        f"{ENV_URL}/env1/configurations",
        status_code=201,
        json={"configuration_id": "cfg1", "name": "cfg"},
    )

    response = client.configurations.create(
        "env1", "cfg", enrichments=[{"source_field": "text", "enrichment": "elements"}]
    )

    assert isinstance(response.result, Configuration)
    assert matcher.last_request.json() == {
        "name": "cfg",
        "enrichments": [{"source_field": "text", "enrichment": "elements"}],
    }


def test_list_configurations_by_name(requests_mock):
    client = build_client()
    matcher = requests_mock.get(
        f"{ENV_URL}/env1/configurations",
        json={"configurations": [{"configuration_id": "cfg1", "name": "Default"}]},
    )

    response = client.configurations.list("env1", name="Default")

    assert response.result.configurations[0].configuration_id == "cfg1"
    assert matcher.last_request.url.endswith("&name=Default")


def test_configuration_preview_sends_multipart(requests_mock):
    client = build_client()
    matcher = requests_mock.post(
        f"{ENV_URL}/env1/preview",
        json={"configuration_id": "cfg1", "status": "completed", "enriched_field_units": 1},
    )

    response = client.configurations.test(
        "env1",
        file=b"<html>hi</html>",
        filename="page.html",
        file_content_type="text/html",
        metadata='{"source": "web"}',
        step="html_output",
        configuration_id="cfg1",
    )

    assert isinstance(response.result, ConfigurationPreview)
    assert response.result.status == "completed"
    request = matcher.last_request
    assert request.headers["Content-Type"].startswith("multipart/form-data; boundary=")
    assert request.url == (
        f"{ENV_URL}/env1/preview?version={VERSION}&step=html_output&configuration_id=cfg1"
    )
    assert b'name="file"; filename="page.html"' in request.body
    assert b'name="metadata"' in request.body
    assert b'name="configuration"' not in request.body


def test_configuration_preview_with_inline_configuration(requests_mock):
    client = build_client()
    matcher = requests_mock.post(f"{ENV_URL}/env1/preview", json={})

    client.configurations.test("env1", configuration={"name": "inline", "source": None})

    body = matcher.last_request.body
    assert b'name="configuration"' in body
    assert b"Content-Type: application/json" in body
    assert b'{"name":"inline"}' in body


def test_configuration_preview_closes_stream_when_url_is_malformed(tmp_path):
    client = build_client()
    client.config.base_url = "not a url"
    sample = tmp_path / "page.html"
    sample.write_bytes(b"<html>hi</html>")
    stream = sample.open("rb")

    with pytest.raises(ConstructionError):
        client.configurations.test("env1", file=stream)

    assert stream.closed
