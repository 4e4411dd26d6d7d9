"""Tests for the /queries introspection routes."""

import pytest
from fastapi.testclient import TestClient

from querymanager.core.config import settings
from querymanager.engines.query import QueryManager
from querymanager.main import create_app

PREFIX = f"{settings.API_V1_STR}/queries"


@pytest.fixture
def client(manager) -> TestClient:
    return TestClient(create_app(manager))


def test_list_queries(client: TestClient) -> None:
    r = client.get(PREFIX)
    assert r.status_code == 200
    body = r.json()
    assert body["count"] == 6
    assert body["data"] == sorted(body["data"])
    assert "SINGLE_QUERY_NO_VARS" in body["data"]


def test_query_tokens(client: TestClient) -> None:
    r = client.get(f"{PREFIX}/SINGLE_QUERY_INDEX_VARS/tokens")
    assert r.status_code == 200
    tokens = r.json()["tokens"]
    assert tokens[0]["kind"] == "literal"
    assert tokens[0]["text"] == "SELECT * FROM artist WHERE id = "
    assert tokens[1]["kind"] == "positional"
    assert tokens[1]["index"] == 1


def test_query_tokens_unknown(client: TestClient) -> None:
    r = client.get(f"{PREFIX}/NO_SUCH_ID/tokens")
    assert r.status_code == 404


def test_render(client: TestClient) -> None:
    r = client.post(
        f"{PREFIX}/ARTIST_SEARCH/render",
        json={"positional": [10], "named": {"name": "O'Brien", "genre": "jazz"}},
    )
    assert r.status_code == 200
    assert r.json()["query"].endswith("WHERE name = 'O''Brien' AND genre = 'jazz'\nLIMIT 10")


def test_render_unknown(client: TestClient) -> None:
    r = client.post(f"{PREFIX}/NO_SUCH_ID/render", json={})
    assert r.status_code == 404
    assert "NO_SUCH_ID" in r.json()["detail"]


def test_render_missing_argument(client: TestClient) -> None:
    r = client.post(f"{PREFIX}/SINGLE_QUERY_INDEX_VARS/render", json={"positional": []})
    assert r.status_code == 422
    assert "positional parameter 1" in r.json()["detail"]


def test_lifespan_starts_manager(config) -> None:
    qm = QueryManager(config)
    with TestClient(create_app(qm)) as c:
        assert qm.started
        assert c.get(PREFIX).json()["count"] == 6
