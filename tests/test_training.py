import pytest

from discovery_client import DiscoveryClient
from discovery_client.auth import BasicAuth
from discovery_client.exceptions import ValidationError
from discovery_client.models import TrainingExample, TrainingQuery

BASE_URL = "https://x/api"
VERSION = "2019-04-30"
TRAINING_URL = f"{BASE_URL}/v1/environments/env1/collections/coll1/training_data"


def build_client():
    return DiscoveryClient(
        base_url=BASE_URL, version=VERSION, auth_strategy=BasicAuth("u", "p")
    )


def test_list_training_data(requests_mock):
    client = build_client()
    requests_mock.get(
        TRAINING_URL,
        json={
            "environment_id": "env1",
            "collection_id": "coll1",
            "queries": [
                {
                    "query_id": "q1",
                    "natural_language_query": "reset password",
                    "examples": [{"document_id": "d1", "relevance": 10}],
                }
            ],
        },
    )

    response = client.training.list("env1", "coll1")

    query = response.result.queries[0]
    assert isinstance(query, TrainingQuery)
    assert isinstance(query.examples[0], TrainingExample)
    assert query.examples[0].relevance == 10


def test_add_training_query(requests_mock):
    client = build_client()
    matcher = requests_mock.post(TRAINING_URL, json={"query_id": "q2"})

    response = client.training.add(
        "env1",
        "coll1",
        natural_language_query="reset password",
        examples=[TrainingExample(document_id="d1", relevance=5), {"document_id": "d2"}],
    )

    assert response.result.query_id == "q2"
    assert matcher.last_request.json() == {
        "natural_language_query": "reset password",
        "examples": [{"document_id": "d1", "relevance": 5}, {"document_id": "d2"}],
    }


def test_delete_all_training_data_has_no_body(requests_mock):
    client = build_client()
    requests_mock.delete(TRAINING_URL, status_code=204)

    response = client.training.delete_all("env1", "coll1")

    assert response.status_code == 204
    assert response.result is None


def test_training_query_lifecycle(requests_mock):
    client = build_client()
    requests_mock.get(f"{TRAINING_URL}/q1", json={"query_id": "q1", "filter": "year>2000"})
    requests_mock.delete(f"{TRAINING_URL}/q1", status_code=204)

    fetched = client.training.get("env1", "coll1", "q1")
    deleted = client.training.delete("env1", "coll1", "q1")

    assert fetched.result.filter == "year>2000"
    assert deleted.result is None


def test_examples_crud(requests_mock):
    client = build_client()
    examples_url = f"{TRAINING_URL}/q1/examples"
    requests_mock.get(examples_url, json={"examples": [{"document_id": "d1"}]})
    create = requests_mock.post(
        examples_url, status_code=201, json={"document_id": "d2", "relevance": 0}
    )
    requests_mock.get(f"{examples_url}/d2", json={"document_id": "d2", "relevance": 0})
    update = requests_mock.put(f"{examples_url}/d2", json={"document_id": "d2", "relevance": 10})
    requests_mock.delete(f"{examples_url}/d2", status_code=204)

    listed = client.training.list_examples("env1", "coll1", "q1")
    created = client.training.create_example(
        "env1", "coll1", "q1", document_id="d2", relevance=0
    )
    fetched = client.training.get_example("env1", "coll1", "q1", "d2")
    updated = client.training.update_example("env1", "coll1", "q1", "d2", relevance=10)
    deleted = client.training.delete_example("env1", "coll1", "q1", "d2")

    assert listed.result.examples[0].document_id == "d1"
    assert created.status_code == 201
    assert create.last_request.json() == {"document_id": "d2", "relevance": 0}
    assert fetched.result.relevance == 0
    assert updated.result.relevance == 10
    assert update.last_request.json() == {"relevance": 10}
    assert deleted.status_code == 204


def test_example_operations_require_identifiers():
    client = build_client()

    with pytest.raises(ValidationError, match="example_id"):
        client.training.get_example("env1", "coll1", "q1", "")
