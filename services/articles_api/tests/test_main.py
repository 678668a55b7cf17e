"""HTTP tests for the articles API."""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from services.articles_api.app.main import create_app
from services.articles_api.app.store import ArticleStore


def parse_ts(value):
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


NEW_ARTICLE = {
    "title": "City Council Approves Transit Budget",
    "content": "The council voted 7-2 in favour of the plan.",
    "excerpt": "Transit budget approved",
    "category": "Politics",
    "author": "Priya Patel",
}


@pytest.fixture
def client():
    return TestClient(create_app())


def test_app_creation():
    app = create_app()
    assert app.title == "NewsWire Articles API"
    assert len(app.state.store) == 5


def test_list_articles_returns_seed_newest_first(client):
    resp = client.get("/api/articles")
    assert resp.status_code == 200
    data = resp.json()
    assert len(data) == 5
    assert [a["publishedAt"] for a in data] == sorted((a["publishedAt"] for a in data), reverse=True)
    assert {"id", "imageUrl", "createdAt", "updatedAt", "slug"} <= set(data[0])


def test_search_requires_query(client):
    assert client.get("/api/articles/search").status_code == 400
    assert client.get("/api/articles/search", params={"q": "  "}).status_code == 400


def test_search_by_author_substring_returns_exactly_one(client):
    resp = client.get("/api/articles/search", params={"q": "Watson"})
    assert resp.status_code == 200
    data = resp.json()
    assert len(data) == 1
    assert data[0]["author"] == "Emma Watson"


def test_category_listing(client):
    resp = client.get("/api/articles/category/sports")
    assert resp.status_code == 200
    assert [a["slug"] for a in resp.json()] == ["major-sports-championship-results"]


def test_category_missing_is_bad_request(client):
    assert client.get("/api/articles/category/").status_code == 400
    assert client.get("/api/articles/category").status_code == 400


def test_get_by_slug(client):
    resp = client.get("/api/articles/entertainment-digital-platforms")
    assert resp.status_code == 200
    assert resp.json()["category"] == "Entertainment"


def test_unknown_slug_is_404(client):
    resp = client.get("/api/articles/no-such-article")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Article not found"


def test_create_returns_201_with_generated_fields(client):
    resp = client.post("/api/articles", json=NEW_ARTICLE)
    assert resp.status_code == 201
    body = resp.json()
    assert body["slug"] == "city-council-approves-transit-budget"
    assert body["imageUrl"] == "/api/placeholder/800/450"
    assert body["source"] == "local"
    assert body["link"] is None
    assert client.get(f"/api/articles/{body['slug']}").json()["id"] == body["id"]


def test_create_without_title_is_rejected_and_not_stored(client):
    payload = {k: v for k, v in NEW_ARTICLE.items() if k != "title"}
    resp = client.post("/api/articles", json=payload)
    assert resp.status_code == 400
    body = resp.json()
    assert body["detail"] == "Invalid data"
    assert any("title" in err["loc"] for err in body["errors"])
    assert len(client.get("/api/articles").json()) == 5


def test_create_with_unknown_category_is_rejected(client):
    resp = client.post("/api/articles", json={**NEW_ARTICLE, "category": "Weather"})
    assert resp.status_code == 400


def test_update_then_get_round_trip(client):
    created = client.post("/api/articles", json=NEW_ARTICLE).json()

    resp = client.put(f"/api/articles/{created['id']}", json={"title": "Transit Budget Passes"})
    assert resp.status_code == 200

    fetched = client.get(f"/api/articles/{created['slug']}").json()
    assert fetched["title"] == "Transit Budget Passes"
    assert parse_ts(fetched["updatedAt"]) > parse_ts(created["updatedAt"])
    assert fetched["createdAt"] == created["createdAt"]


def test_update_unknown_id_is_404(client):
    resp = client.put("/api/articles/does-not-exist", json={"title": "x"})
    assert resp.status_code == 404


def test_update_with_empty_title_is_400(client):
    created = client.post("/api/articles", json=NEW_ARTICLE).json()
    resp = client.put(f"/api/articles/{created['id']}", json={"title": ""})
    assert resp.status_code == 400


def test_delete_then_get_is_404(client):
    created = client.post("/api/articles", json=NEW_ARTICLE).json()

    resp = client.delete(f"/api/articles/{created['id']}")
    assert resp.status_code == 204
    assert client.get(f"/api/articles/{created['slug']}").status_code == 404


def test_delete_unknown_id_is_404(client):
    assert client.delete("/api/articles/does-not-exist").status_code == 404


def test_store_failure_surfaces_as_500():
    class BrokenStore(ArticleStore):
        def list_all(self):
            raise RuntimeError("boom")

    client = TestClient(create_app(store=BrokenStore()))
    resp = client.get("/api/articles")
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Failed to fetch articles"


def test_injected_store_is_used():
    client = TestClient(create_app(store=ArticleStore()))
    assert client.get("/api/articles").json() == []


def test_correlation_id_is_echoed(client):
    resp = client.get("/api/articles", headers={"X-Correlation-ID": "abc-123"})
    assert resp.headers["X-Correlation-ID"] == "abc-123"
    assert client.get("/api/articles").headers["X-Correlation-ID"]


def test_health_endpoints(client):
    health = client.get("/health").json()
    assert health["status"] == "healthy"
    assert health["checks"][0]["details"] == {"articles": 5}
    assert client.get("/health/live").json() == {"status": "alive", "service": "articles_api"}
    ready = client.get("/health/ready").json()
    assert ready["status"] == "ready"
    assert ready["critical_dependencies"] == {"article_store": "healthy"}


def test_title_without_ascii_letters_gets_reachable_slug(client):
    resp = client.post("/api/articles", json={**NEW_ARTICLE, "title": "東京ニュース"})
    assert resp.status_code == 201
    body = resp.json()
    assert body["slug"] == body["id"]

    fetched = client.get(f"/api/articles/{body['slug']}")
    assert fetched.status_code == 200
    assert fetched.json()["title"] == "東京ニュース"


def test_update_with_unusable_slug_is_400(client):
    created = client.post("/api/articles", json=NEW_ARTICLE).json()
    resp = client.put(f"/api/articles/{created['id']}", json={"slug": "///"})
    assert resp.status_code == 400
    assert client.get(f"/api/articles/{created['slug']}").status_code == 200
