"""
Per-provider response parsing.

Each provider has a mapping table from ``ProviderArticle`` field to a dotted
path in that provider's JSON record. Parsing is a table lookup followed by
the provider's own defaults; the output is always a ``ProviderArticle``
tagged with the provider it came from.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field

from shared.app_logging.logger import get_logger

logger = get_logger("aggregator.providers")


class ProviderName(str, Enum):
    NEWSDATA = "newsdata"
    NEWSAPI = "newsapi"


class ProviderArticle(BaseModel):
    """One upstream record after field mapping, before validation."""

    provider: ProviderName
    article_id: str
    title: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    link: Optional[str] = None
    image_url: Optional[str] = None
    pub_date: Optional[str] = None
    source_id: Optional[str] = None
    source_name: Optional[str] = None
    category: List[str] = Field(default_factory=list)
    country: List[str] = Field(default_factory=list)
    language: Optional[str] = None


NEWSDATA_FIELDS: Dict[str, str] = {
    "article_id": "article_id",
    "title": "title",
    "description": "description",
    "content": "content",
    "link": "link",
    "image_url": "image_url",
    "pub_date": "pubDate",
    "source_id": "source_id",
    "source_name": "source_name",
    "category": "category",
    "country": "country",
    "language": "language",
}

NEWSAPI_FIELDS: Dict[str, Optional[str]] = {
    "article_id": "url",
    "title": "title",
    "description": "description",
    "content": "content",
    "link": "url",
    "image_url": "urlToImage",
    "pub_date": "publishedAt",
    "source_id": "source.id",
    "source_name": "source.name",
    "category": None,
    "country": None,
    "language": None,
}

# NewsData category names differ from ours for a couple of sections
NEWSDATA_CATEGORIES: Dict[str, str] = {
    "politics": "politics",
    "sports": "sports",
    "tech": "technology",
    "technology": "technology",
    "entertainment": "entertainment",
}


class ProviderResponseError(ValueError):
    """The provider answered with a payload we cannot read."""


def newsdata_category(category: str) -> str:
    key = category.strip().lower()
    return NEWSDATA_CATEGORIES.get(key, key)


def _lookup(record: Mapping[str, Any], path: Optional[str]) -> Any:
    if path is None:
        return None
    value: Any = record
    for part in path.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(part)
    return value


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None]
    return [str(value)]


def _map_record(record: Mapping[str, Any], table: Mapping[str, Optional[str]]) -> Dict[str, Any]:
    mapped = {}
    for field, path in table.items():
        value = _lookup(record, path)
        mapped[field] = _as_list(value) if field in ("category", "country") else _as_text(value)
    return mapped


def _records(payload: Any, key: str) -> List[Mapping[str, Any]]:
    if not isinstance(payload, Mapping):
        raise ProviderResponseError(f"Expected a JSON object, got {type(payload).__name__}")
    status = payload.get("status")
    if status not in (None, "ok", "success"):
        raise ProviderResponseError(f"Provider reported status {status!r}: {payload.get('message') or payload.get('results')}")
    records = payload.get(key) or []
    if not isinstance(records, list):
        raise ProviderResponseError(f"Expected '{key}' to be a list")
    return [r for r in records if isinstance(r, Mapping)]


def parse_newsdata_response(payload: Any) -> List[ProviderArticle]:
    """Parse a NewsData.io ``/news`` or ``/latest`` response."""
    articles = []
    for record in _records(payload, "results"):
        fields = _map_record(record, NEWSDATA_FIELDS)
        if not fields["article_id"]:
            logger.debug("Skipping NewsData record without article_id")
            continue
        articles.append(ProviderArticle(provider=ProviderName.NEWSDATA, **fields))
    return articles


def parse_newsapi_response(payload: Any, country: str = "us") -> List[ProviderArticle]:
    """Parse a NewsAPI.org ``/top-headlines`` or ``/everything`` response.

    NewsAPI has no article id or category, so the URL doubles as the id and
    the category is always ``general``.
    """
    articles = []
    now = datetime.now(timezone.utc).isoformat()
    for idx, record in enumerate(_records(payload, "articles")):
        fields = _map_record(record, NEWSAPI_FIELDS)
        title = fields["title"]
        description = fields["description"] or title
        fields.update(
            article_id=fields["article_id"] or f"newsapi-{idx}",
            description=description,
            content=fields["content"] or description,
            pub_date=fields["pub_date"] or now,
            source_id=fields["source_id"] or "newsapi",
            source_name=fields["source_name"] or "NewsAPI",
            category=["general"],
            country=[country],
            language="en",
        )
        articles.append(ProviderArticle(provider=ProviderName.NEWSAPI, **fields))
    return articles
