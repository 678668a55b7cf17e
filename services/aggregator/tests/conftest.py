import httpx
import pytest

from services.aggregator.tests.fakes import FakeProviders
from shared.config.settings import Settings


@pytest.fixture
def providers():
    return FakeProviders()


@pytest.fixture
def keyed_env(monkeypatch):
    monkeypatch.setenv("NEWSDATA_API_KEY", "nd-test-key")
    monkeypatch.setenv("NEWSAPI_KEY", "na-test-key")


@pytest.fixture
def settings(keyed_env):
    return Settings()


@pytest.fixture
def http(providers):
    return httpx.AsyncClient(transport=httpx.MockTransport(providers))
