import pytest

from shared.config.settings import get_settings

PROVIDER_KEY_VARS = (
    "NEWSDATA_API_KEY",
    "NEWS_DATA_API_KEY",
    "VITE_NEWSDATA_API_KEY",
    "NEWSAPI_KEY",
    "VITE_NEWSAPI_KEY",
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Each test starts from a clean environment and an empty settings cache."""
    for var in PROVIDER_KEY_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("RETRY_DELAY", "0")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
