from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Optional

from services.aggregator.app.filters import clean_display_text
from services.aggregator.app.providers import ProviderArticle, ProviderName
from shared.app_logging.logger import get_logger
from shared.schemas.article import (
    UNKNOWN_AUTHOR,
    Article,
    ArticleSource,
    Category,
    as_utc,
    utcnow,
)

logger = get_logger("aggregator.convert")

_SOURCES = {
    ProviderName.NEWSDATA: ArticleSource.NEWSDATA,
    ProviderName.NEWSAPI: ArticleSource.NEWSAPI,
}


def parse_pub_date(raw: Optional[str]) -> Optional[datetime]:
    """
    Try ISO8601 first (NewsAPI, NewsData "YYYY-MM-DD HH:MM:SS"), then RFC-style dates.
    Returns an aware UTC datetime, or None if parsing fails.
    """
    if not isinstance(raw, str) or not raw.strip():
        return None

    try:
        return as_utc(datetime.fromisoformat(raw.strip().replace("Z", "+00:00")))
    except ValueError:
        pass

    try:
        return as_utc(parsedate_to_datetime(raw))
    except (TypeError, ValueError):
        return None


def to_article(article: ProviderArticle) -> Article:
    """Map a filtered provider record onto the normalized Article."""
    published = parse_pub_date(article.pub_date)
    if published is None:
        logger.debug(f"Unparseable pub date {article.pub_date!r} for {article.article_id}")
        published = utcnow()

    title = article.title or ""
    excerpt = clean_display_text(article.description) or title
    content = clean_display_text(article.content) or excerpt

    return Article(
        id=article.article_id,
        title=title,
        excerpt=excerpt,
        content=content,
        category=Category.from_provider(article.category[0] if article.category else None),
        author=article.source_name or UNKNOWN_AUTHOR,
        published_at=published,
        created_at=published,
        updated_at=published,
        image_url=article.image_url or "",
        slug=article.article_id,
        link=article.link,
        source=_SOURCES[article.provider],
    )
