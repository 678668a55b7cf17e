import pytest
from pydantic import ValidationError

from shared.config.settings import (
    NewsDataSettings,
    ServiceSettings,
    Settings,
    get_newsapi_key,
    get_newsdata_api_key,
    get_settings,
)


def test_defaults():
    settings = Settings()
    assert settings.newsdata.api_key == ""
    assert settings.newsdata.base_url == "https://newsdata.io/api/1"
    assert settings.newsapi.base_url == "https://newsapi.org/v2"
    assert settings.newsapi.headlines_page_size == 10
    assert settings.newsapi.search_page_size == 20
    assert settings.service.default_country == "us"
    assert settings.service.max_retries == 1
    assert settings.service.related_limit == 4
    assert settings.service.placeholder_image_url == "/api/placeholder/800/450"


@pytest.mark.parametrize("var", ["NEWSDATA_API_KEY", "NEWS_DATA_API_KEY", "VITE_NEWSDATA_API_KEY"])
def test_newsdata_key_aliases(monkeypatch, var):
    monkeypatch.setenv(var, "nd-key")
    assert get_newsdata_api_key() == "nd-key"


@pytest.mark.parametrize("var", ["NEWSAPI_KEY", "VITE_NEWSAPI_KEY"])
def test_newsapi_key_aliases(monkeypatch, var):
    monkeypatch.setenv(var, "na-key")
    assert get_newsapi_key() == "na-key"


def test_settings_are_cached():
    assert get_settings() is get_settings()


def test_cors_origins_from_comma_separated_env(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.example.com, http://b.example.com,")
    assert ServiceSettings().cors_origins == ["http://a.example.com", "http://b.example.com"]


def test_base_url_trailing_slash_is_dropped(monkeypatch):
    monkeypatch.setenv("NEWSDATA_BASE_URL", "http://localhost:9000/api/1/")
    assert NewsDataSettings().base_url == "http://localhost:9000/api/1"


def test_relative_base_url_is_rejected(monkeypatch):
    monkeypatch.setenv("NEWSDATA_BASE_URL", "newsdata.io/api/1")
    with pytest.raises(ValidationError):
        NewsDataSettings()


def test_negative_retries_are_rejected(monkeypatch):
    monkeypatch.setenv("MAX_RETRIES", "-1")
    with pytest.raises(ValidationError):
        ServiceSettings()
