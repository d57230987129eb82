import pytest
from fastapi.testclient import TestClient

from quotekeeper.app import create_app, database_path_from_url
from quotekeeper.database import Database


@pytest.fixture
def database():
    db = Database(":memory:")
    db.migrate()
    yield db
    db.close()


@pytest.fixture
def client(database):
    return TestClient(create_app(database))


def _create(client, text, author, source, tags=None):
    body = {"text": text, "author": author, "source": source}
    if tags is not None:
        body["tags"] = tags
    response = client.post("/quotes", json=body)
    assert response.status_code == 201
    return response.json()


def test_create_returns_quote_with_id(client):
    created = _create(client, "Be yourself.", "Wilde", "Attributed", ["life"])
    assert created["text"] == "Be yourself."
    assert created["author"] == "Wilde"
    assert created["source"] == "Attributed"
    assert created["tags"] == ["life"]
    assert len(created["id"]) == 8
    int(created["id"], 16)


def test_tags_default_to_empty(client):
    created = _create(client, "Hello", "Someone", "Nowhere")
    assert created["tags"] == []


def test_create_then_get_round_trip(client):
    created = _create(client, "Text", "Author", "Book", ["b", "a"])
    response = client.get(f"/quotes/{created['id']}")
    assert response.status_code == 200
    fetched = response.json()
    assert fetched["id"] == created["id"]
    assert fetched["text"] == "Text"
    assert sorted(fetched["tags"]) == ["a", "b"]


def test_get_missing_is_404(client):
    response = client.get("/quotes/nope")
    assert response.status_code == 404
    assert response.json() == {"error": "Quote with id nope not found"}


def test_list_is_ordered_by_author(client):
    _create(client, "z", "Zed", "s")
    _create(client, "a", "Amy", "s")
    response = client.get("/quotes")
    assert response.status_code == 200
    assert [q["author"] for q in response.json()] == ["Amy", "Zed"]


def test_update_replaces_fields_and_tags(client):
    created = _create(client, "Old", "A", "S", ["x"])
    response = client.put(
        f"/quotes/{created['id']}",
        json={"text": "New", "author": "B", "source": "T", "tags": ["y"]},
    )
    assert response.status_code == 200
    assert response.json()["text"] == "New"
    fetched = client.get(f"/quotes/{created['id']}").json()
    assert fetched["author"] == "B"
    assert fetched["tags"] == ["y"]


def test_update_missing_is_404(client):
    response = client.put("/quotes/missing", json={"text": "t", "author": "a", "source": "s"})
    assert response.status_code == 404
    assert "missing" in response.json()["error"]


def test_delete_then_get_is_404(client):
    created = _create(client, "Gone", "A", "S", ["t"])
    response = client.delete(f"/quotes/{created['id']}")
    assert response.status_code == 204
    assert response.content == b""
    assert client.get(f"/quotes/{created['id']}").status_code == 404


def test_delete_missing_is_404(client):
    response = client.delete("/quotes/missing")
    assert response.status_code == 404


def test_search_by_author_tag_and_text(client):
    first = _create(client, "Stay hungry", "Jobs", "Speech", ["tech"])
    second = _create(client, "Simple is better", "Peters", "Zen", ["python"])
    by_author = client.get("/quotes/search", params={"author": "job"}).json()
    assert [q["id"] for q in by_author] == [first["id"]]
    by_tag = client.get("/quotes/search", params={"tag": "python"}).json()
    assert [q["id"] for q in by_tag] == [second["id"]]
    assert by_tag[0]["tags"] == ["python"]
    by_text = client.get("/quotes/search", params={"search": "Zen"}).json()
    assert [q["id"] for q in by_text] == [second["id"]]


def test_search_without_filters_returns_all(client):
    _create(client, "one", "A", "s")
    _create(client, "two", "B", "s")
    response = client.get("/quotes/search")
    assert len(response.json()) == 2


def test_invalid_body_is_rejected(client):
    response = client.post("/quotes", json={"text": "only text"})
    assert response.status_code == 422


def test_index_lists_escaped_quotes(client):
    _create(client, "Less <is> more", "Mies", "Talk")
    response = client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "Less &lt;is&gt; more" in response.text
    assert "Mies" in response.text


def test_openapi_document_lists_paths(client):
    response = client.get("/api-docs/openapi.json")
    assert response.status_code == 200
    paths = response.json()["paths"]
    assert "/quotes" in paths
    assert "/quotes/{id}" in paths
    assert "/quotes/search" in paths


def test_cors_allows_any_origin(client):
    response = client.get("/quotes", headers={"Origin": "http://example.com"})
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("sqlite://db/quotes.db", "db/quotes.db"),
        ("sqlite::memory:", ":memory:"),
        ("sqlite://data.db?mode=rwc", "data.db"),
    ],
)
def test_database_path_from_url(url, expected):
    assert database_path_from_url(url) == expected


def test_database_path_from_url_rejects_other_schemes():
    with pytest.raises(ValueError):
        database_path_from_url("postgres://localhost/db")