from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx

from services.aggregator.app.convert import to_article
from services.aggregator.app.filters import filter_valid_articles
from services.aggregator.app.metrics import ARTICLES_SERVED, PROVIDER_REQUESTS
from services.aggregator.app.providers import (
    ProviderArticle,
    ProviderName,
    newsdata_category,
    parse_newsapi_response,
    parse_newsdata_response,
)
from services.aggregator.app.strategy import with_fallback
from shared.app_logging.logger import get_logger, log_context
from shared.config.settings import Settings
from shared.schemas.article import Article
from shared.utils.retry import async_retry

logger = get_logger("aggregator.client")


def describe_failure(error: Exception) -> str:
    """Failure summary for logs; never includes the request URL (it may carry an API key)."""
    cause = error.__cause__ if isinstance(error.__cause__, Exception) else error
    if isinstance(cause, httpx.HTTPStatusError):
        return f"HTTP {cause.response.status_code} from {cause.request.url.host}"
    return f"{type(cause).__name__}: {cause}"


class NewsAggregator:
    """Fetches, filters and normalizes articles from NewsData.io and NewsAPI.org.

    Every public method returns a list; provider failures are logged and come
    back as an empty list, indistinguishable from "no results".
    """

    def __init__(self, http: httpx.AsyncClient, settings: Settings):
        self.http = http
        self.settings = settings
        self._missing_key_warned = set()

    def _has_key(self, provider: ProviderName, api_key: str) -> bool:
        if api_key:
            return True
        if provider not in self._missing_key_warned:
            logger.warning(f"{provider.value} API key is missing; its requests are skipped")
            self._missing_key_warned.add(provider)
        PROVIDER_REQUESTS.labels(provider=provider.value, outcome="unconfigured").inc()
        return False

    async def _get_json(self, url: str, params: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> Any:
        response = await self.http.get(url, params=params, headers=headers)
        response.raise_for_status()
        return response.json()

    @async_retry(retryable_exceptions=(httpx.TransportError, httpx.HTTPStatusError))
    async def _get_json_with_retry(self, url: str, params: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> Any:
        return await self._get_json(url, params, headers)

    async def _collect(
        self,
        provider: ProviderName,
        operation: str,
        fetch: Callable[[], Awaitable[List[ProviderArticle]]],
    ) -> List[Article]:
        with log_context(provider=provider.value, operation=operation):
            try:
                records = await fetch()
            except Exception as e:
                PROVIDER_REQUESTS.labels(provider=provider.value, outcome="error").inc()
                logger.error(f"Upstream request failed: {describe_failure(e)}")
                return []

            valid = filter_valid_articles(records, self.settings.service.fallback_image_url)
            PROVIDER_REQUESTS.labels(
                provider=provider.value, outcome="ok" if valid else "empty"
            ).inc()
            logger.info(f"{len(valid)}/{len(records)} records kept")
            return [to_article(record) for record in valid]

    def _newsdata(self, operation: str, path: str, params: Dict[str, Any]):
        cfg = self.settings.newsdata

        async def fetch() -> List[ProviderArticle]:
            query = {"language": cfg.language, "apikey": cfg.api_key}
            query.update({k: v for k, v in params.items() if v not in (None, "")})
            payload = await self._get_json(f"{cfg.base_url}/{path}", query)
            return parse_newsdata_response(payload)

        async def run() -> List[Article]:
            if not self._has_key(ProviderName.NEWSDATA, cfg.api_key):
                return []
            return await self._collect(ProviderName.NEWSDATA, operation, fetch)

        return run

    def _newsapi(self, operation: str, path: str, params: Dict[str, Any], country: str, retry: bool = False):
        cfg = self.settings.newsapi
        get = self._get_json_with_retry if retry else self._get_json

        async def fetch() -> List[ProviderArticle]:
            payload = await get(f"{cfg.base_url}/{path}", params, {"X-Api-Key": cfg.api_key})
            return parse_newsapi_response(payload, country=country)

        async def run() -> List[Article]:
            if not self._has_key(ProviderName.NEWSAPI, cfg.api_key):
                return []
            return await self._collect(ProviderName.NEWSAPI, operation, fetch)

        return run

    def _served(self, operation: str, articles) -> List[Article]:
        articles = list(articles)
        ARTICLES_SERVED.labels(operation=operation).inc(len(articles))
        return articles

    async def fetch_top_headlines(self, country: Optional[str] = None) -> List[Article]:
        """NewsAPI top headlines, falling back to NewsData latest news."""
        country = country or self.settings.service.default_country
        headlines = self._newsapi(
            "top-headlines",
            "top-headlines",
            {"country": country, "pageSize": self.settings.newsapi.headlines_page_size},
            country,
            retry=True,
        )
        latest = self._newsdata("latest-news", "news", {"country": country})
        return self._served("headlines", await with_fallback(headlines, latest))

    async def fetch_latest_news(self, country: Optional[str] = None) -> List[Article]:
        country = country or self.settings.service.default_country
        fetch = self._newsdata("latest-news", "news", {"country": country})
        return self._served("latest", await fetch())

    async def fetch_news_by_category(self, category: str, country: Optional[str] = None) -> List[Article]:
        country = country or self.settings.service.default_country
        fetch = self._newsdata(
            f"category:{category}",
            "news",
            {"category": newsdata_category(category), "country": country},
        )
        return self._served("category", await fetch())

    async def search_news(self, query: str) -> List[Article]:
        """NewsData search, falling back to NewsAPI ``/everything``."""
        country = self.settings.service.default_country
        newsdata = self._newsdata("search", "latest", {"q": query})
        newsapi = self._newsapi(
            "search",
            "everything",
            {"q": query, "language": "en", "pageSize": self.settings.newsapi.search_page_size},
            country,
        )
        return self._served("search", await with_fallback(newsdata, newsapi))

    async def fetch_related(self, category: str, exclude_slug: Optional[str] = None, limit: Optional[int] = None) -> List[Article]:
        """Articles in the same category as the one being read, minus that one."""
        limit = self.settings.service.related_limit if limit is None else limit
        articles = await self.fetch_news_by_category(category)
        related = [a for a in articles if a.slug != exclude_slug]
        return related[:limit]
