import json

import requests
from typer.testing import CliRunner

from discovery_client.cli import app
from discovery_client.http import DetailedResponse

runner = CliRunner()

BASE_URL = "https://x/api"
ENV_URL = f"{BASE_URL}/v1/environments"
AUTH_ARGS = ["--url", BASE_URL, "--apikey", "k3y"]


def test_environments_list_renders_table(requests_mock):
    requests_mock.get(
        ENV_URL,
        json={
            "environments": [
                {"environment_id": "env1", "name": "byod", "status": "active", "read_only": False},
                {"environment_id": "news", "name": "Watson News", "read_only": True},
            ]
        },
    )

    result = runner.invoke(app, ["environments", "list", *AUTH_ARGS])

    assert result.exit_code == 0
    assert "Environments" in result.stdout
    assert "byod" in result.stdout
    assert "env1" in result.stdout
    assert "Yes" in result.stdout


def test_environments_list_json_output(requests_mock):
    matcher = requests_mock.get(ENV_URL, json={"environments": [{"environment_id": "env1"}]})

    result = runner.invoke(
        app, ["environments", "list", *AUTH_ARGS, "--api-version", "2018-03-05", "--json"]
    )

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["environments"][0]["environment_id"] == "env1"
    assert matcher.last_request.url == f"{ENV_URL}?version=2018-03-05"


def test_collections_list_renders_document_counts(requests_mock):
    requests_mock.get(
        f"{ENV_URL}/env1/collections",
        json={
            "collections": [
                {"collection_id": "coll1", "name": "manuals", "document_counts": {"available": 42}}
            ]
        },
    )

    result = runner.invoke(app, ["collections", "list", "-e", "env1", *AUTH_ARGS])

    assert result.exit_code == 0
    assert "manuals" in result.stdout
    assert "42" in result.stdout


def test_documents_add_uploads_file(requests_mock, tmp_path):
    document = tmp_path / "faq.html"
    document.write_text("<p>hello</p>", encoding="utf-8")
    matcher = requests_mock.post(
        f"{ENV_URL}/env1/collections/coll1/documents",
        status_code=202,
        json={"document_id": "doc1", "status": "processing"},
    )

    result = runner.invoke(
        app,
        [
            "documents",
            "add",
            "-e",
            "env1",
            "-c",
            "coll1",
            *AUTH_ARGS,
            "--file",
            str(document),
            "--content-type",
            "text/html",
            "--metadata",
            '{"lang": "en"}',
        ],
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout)["document_id"] == "doc1"
    body = matcher.last_request.body
    assert b'filename="faq.html"' in body
    assert b"<p>hello</p>" in body
    assert b'{"lang": "en"}' in body


def test_documents_add_rejects_invalid_metadata():
    result = runner.invoke(
        app,
        ["documents", "add", "-e", "env1", "-c", "coll1", *AUTH_ARGS, "--metadata", "{oops"],
    )

    assert result.exit_code != 0
    assert "not valid JSON" in result.output


def test_query_run_single_collection(requests_mock):
    matcher = requests_mock.post(
        f"{ENV_URL}/env1/collections/coll1/query",
        json={
            "matching_results": 1,
            "results": [
                {
                    "id": "doc1",
                    "result_metadata": {"score": 2.5},
                    "extracted_metadata": {"title": "Reset guide"},
                }
            ],
        },
    )

    result = runner.invoke(
        app, ["query", "run", "-e", "env1", "-c", "coll1", *AUTH_ARGS, "-q", "reset", "-n", "3"]
    )

    assert result.exit_code == 0
    assert "Matching results: 1" in result.stdout
    assert "Reset guide" in result.stdout
    assert "2.5000" in result.stdout
    assert matcher.last_request.json() == {"natural_language_query": "reset", "count": 3}


def test_query_run_repeated_collections_is_federated(requests_mock):
    matcher = requests_mock.post(f"{ENV_URL}/env1/query", json={"matching_results": 0, "results": []})

    result = runner.invoke(
        app,
        ["query", "run", "-e", "env1", "-c", "c1", "-c", "c2", *AUTH_ARGS, "--json"],
    )

    assert result.exit_code == 0
    assert matcher.last_request.json() == {"collection_ids": "c1,c2"}


def test_metrics_queries_flattens_aggregations(requests_mock):
    requests_mock.get(
        f"{BASE_URL}/v1/metrics/number_of_queries_with_event",
        json={
            "aggregations": [
                {
                    "interval": "1d",
                    "results": [
                        {"key_as_string": "2019-06-01T00:00:00Z", "matching_results": 17},
                    ],
                }
            ]
        },
    )

    result = runner.invoke(app, ["metrics", "queries", *AUTH_ARGS, "--kind", "with-event"])

    assert result.exit_code == 0
    assert "2019-06-01T00:00:00Z" in result.stdout
    assert "17" in result.stdout


def test_metrics_top_tokens(requests_mock):
    requests_mock.get(
        f"{BASE_URL}/v1/metrics/top_query_tokens_with_event_rate",
        json={"aggregations": [{"results": [{"key": "password", "matching_results": 4, "event_rate": 0.25}]}]},
    )

    result = runner.invoke(app, ["metrics", "top-tokens", *AUTH_ARGS])

    assert result.exit_code == 0
    assert "password" in result.stdout
    assert "0.2500" in result.stdout


def test_error_status_exits_non_zero(requests_mock):
    requests_mock.get(
        f"{ENV_URL}/missing/collections",
        status_code=404,
        json={"code": 404, "error": "Environment not found"},
    )

    result = runner.invoke(app, ["collections", "list", "-e", "missing", *AUTH_ARGS])

    assert result.exit_code == 1
    assert "Request failed (status 404)" in result.output
    assert "Environment not found" in result.output


def test_transport_error_exits_non_zero(requests_mock):
    requests_mock.get(ENV_URL, exc=requests.exceptions.ConnectTimeout("timed out"))

    result = runner.invoke(app, ["environments", "list", *AUTH_ARGS])

    assert result.exit_code == 1
    assert "Transport error" in result.output


def test_missing_api_key_is_rejected():
    result = runner.invoke(
        app, ["environments", "list", "--url", BASE_URL], env={"DISCOVERY_APIKEY": None}
    )

    assert result.exit_code != 0
    assert "apikey is required" in result.output


def test_basic_auth_requires_password():
    result = runner.invoke(
        app,
        ["environments", "list", "--url", BASE_URL, "--auth", "basic", "--username", "admin"],
        env={"DISCOVERY_PASSWORD": None},
    )

    assert result.exit_code != 0
    assert "--password are required" in result.output


def test_cli_respects_env_cert_and_verify(monkeypatch, tmp_path):
    cert = tmp_path / "ca.pem"
    cert.write_text("dummy", encoding="utf-8")
    captured: dict[str, object] = {}

    class DummyEnvironments:
        def list(self, name=None):
            captured["name"] = name
            return DetailedResponse(status_code=200, headers={}, result={"environments": []})

    class DummyClient:
        def __init__(self, **kwargs):
            captured.update(kwargs)
            self.environments = DummyEnvironments()

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            return False

    monkeypatch.setattr("discovery_client.cli.DiscoveryClient", DummyClient)

    result = runner.invoke(
        app,
        ["environments", "list", "--name", "byod", "--auth", "bearer"],
        env={
            "DISCOVERY_URL": "https://env.example/api",
            "DISCOVERY_TOKEN": "tok",
            "DISCOVERY_CA_CERT": str(cert),
            "DISCOVERY_VERIFY_SSL": "1",
        },
    )

    assert result.exit_code == 0
    assert captured["base_url"] == "https://env.example/api"
    assert captured["verify_ssl"] == str(cert)
    assert captured["name"] == "byod"


def test_cli_env_cert_with_no_verify_rejected(tmp_path):
    cert = tmp_path / "ca.pem"
    cert.write_text("dummy", encoding="utf-8")

    result = runner.invoke(
        app,
        ["environments", "list", *AUTH_ARGS],
        env={"DISCOVERY_CA_CERT": str(cert), "DISCOVERY_VERIFY_SSL": "0"},
    )

    assert result.exit_code != 0
    assert "Cannot combine --cert with --no-verify" in result.output
