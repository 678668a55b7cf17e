from datetime import datetime, timezone

import pytest

from services.articles_api.app.seed import sample_articles
from services.articles_api.app.store import ArticleStore
from shared.schemas.article import ArticleCreate, ArticleUpdate, Category


@pytest.fixture
def store():
    s = ArticleStore()
    s.seed(sample_articles())
    return s


def make_payload(**overrides):
    data = dict(
        title="Local Elections Draw Record Turnout",
        content="Polling stations stayed open late.",
        excerpt="Record turnout",
        category="Politics",
        author="Dana Lee",
    )
    data.update(overrides)
    return ArticleCreate(**data)


def test_seed_loads_five_articles_newest_first(store):
    articles = store.list_all()
    assert len(articles) == 5
    dates = [a.published_at for a in articles]
    assert dates == sorted(dates, reverse=True)
    assert articles[0].slug == "lorem-ipsum-dolor-sit-amet"


def test_list_by_category_is_case_insensitive(store):
    tech = store.list_by_category("tech")
    assert [a.slug for a in tech] == [
        "reegelteemi-irimtio-siretien-genies",
        "technology-advances-reshape-workplace",
    ]
    assert store.list_by_category("TECH") == tech
    assert store.list_by_category("weather") == []


def test_search_matches_author_only_article(store):
    results = store.search("rodriguez")
    assert [a.author for a in results] == ["Alex Rodriguez"]


def test_search_covers_title_content_and_excerpt(store):
    assert {a.slug for a in store.search("WORKPLACE")} == {"technology-advances-reshape-workplace"}
    assert {a.slug for a in store.search("streaming services")} == {"entertainment-digital-platforms"}
    assert store.search("nothing like this anywhere") == []


def test_create_assigns_id_timestamps_and_slug(store):
    article = store.create(make_payload())
    assert article.id
    assert article.slug == "local-elections-draw-record-turnout"
    assert article.created_at == article.updated_at == article.published_at
    assert article.image_url == "/api/placeholder/800/450"
    assert store.get_by_id(article.id) == article
    assert len(store) == 6


def test_create_keeps_given_publish_date_and_treats_naive_as_utc(store):
    article = store.create(make_payload(published_at=datetime(2023, 5, 1, 9, 30)))
    assert article.published_at == datetime(2023, 5, 1, 9, 30, tzinfo=timezone.utc)
    assert store.list_all()[-1].id == article.id


def test_update_merges_fields_and_moves_updated_at_forward(store):
    original = store.create(make_payload())
    updated = store.update(original.id, ArticleUpdate(title="Turnout Revised", category="sports"))

    assert updated.title == "Turnout Revised"
    assert updated.category is Category.SPORTS
    assert updated.content == original.content
    assert updated.slug == original.slug
    assert updated.created_at == original.created_at
    assert updated.updated_at > original.updated_at


def test_update_unknown_id_returns_none(store):
    assert store.update("missing", ArticleUpdate(title="x")) is None


def test_delete_reports_whether_record_existed(store):
    article = store.list_all()[0]
    assert store.delete(article.id) is True
    assert store.delete(article.id) is False
    assert store.get_by_slug(article.slug) is None


def test_get_by_slug_returns_first_match(store):
    store.create(make_payload(slug="dup"))
    store.create(make_payload(slug="dup", title="Second"))
    assert store.get_by_slug("dup").title == "Local Elections Draw Record Turnout"


def test_create_falls_back_to_id_when_title_has_no_slug_characters(store):
    article = store.create(make_payload(title="!!!"))
    assert article.slug == article.id
    assert store.get_by_slug(article.id) is article
