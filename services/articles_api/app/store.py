from datetime import timedelta
from typing import Dict, Iterable, List, Optional
from uuid import uuid4

from shared.app_logging.logger import get_logger
from shared.schemas.article import (
    Article,
    ArticleCreate,
    ArticleSource,
    ArticleUpdate,
    as_utc,
    slugify,
    utcnow,
)

logger = get_logger("articles_api.store")


def _newest_first(articles: Iterable[Article]) -> List[Article]:
    return sorted(articles, key=lambda a: a.published_at, reverse=True)


class ArticleStore:
    """In-memory article map keyed by generated id.

    Nothing is persisted and there is no locking: concurrent writers in the
    same process race, last write wins.
    """

    def __init__(self, placeholder_image_url: str = "/api/placeholder/800/450"):
        self.placeholder_image_url = placeholder_image_url
        self._articles: Dict[str, Article] = {}

    def __len__(self) -> int:
        return len(self._articles)

    def seed(self, payloads: Iterable[ArticleCreate]) -> None:
        for payload in payloads:
            self.create(payload)
        logger.info(f"Seeded store with {len(self._articles)} articles")

    def list_all(self) -> List[Article]:
        return _newest_first(self._articles.values())

    def list_by_category(self, category: str) -> List[Article]:
        wanted = category.lower()
        return _newest_first(
            a for a in self._articles.values() if a.category.value.lower() == wanted
        )

    def get_by_id(self, article_id: str) -> Optional[Article]:
        return self._articles.get(article_id)

    def get_by_slug(self, slug: str) -> Optional[Article]:
        return next((a for a in self._articles.values() if a.slug == slug), None)

    def search(self, query: str) -> List[Article]:
        """Case-insensitive substring match on title, content, excerpt and author."""
        needle = query.lower()
        return _newest_first(
            a
            for a in self._articles.values()
            if needle in a.title.lower()
            or needle in a.content.lower()
            or needle in a.excerpt.lower()
            or needle in a.author.lower()
        )

    def create(self, payload: ArticleCreate) -> Article:
        now = utcnow()
        article_id = str(uuid4())
        article = Article(
            id=article_id,
            title=payload.title,
            content=payload.content,
            excerpt=payload.excerpt,
            category=payload.category,
            author=payload.author,
            image_url=payload.image_url or self.placeholder_image_url,
            slug=payload.slug or slugify(payload.title) or article_id,
            published_at=as_utc(payload.published_at) if payload.published_at else now,
            created_at=now,
            updated_at=now,
            source=ArticleSource.LOCAL,
        )
        self._articles[article.id] = article
        logger.debug(f"Created article {article.id} ({article.slug})")
        return article

    def update(self, article_id: str, payload: ArticleUpdate) -> Optional[Article]:
        existing = self._articles.get(article_id)
        if existing is None:
            return None

        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        if "published_at" in changes:
            changes["published_at"] = as_utc(changes["published_at"])

        # updated_at must move forward even on clocks with coarse resolution
        now = utcnow()
        if now <= existing.updated_at:
            now = existing.updated_at + timedelta(microseconds=1)
        changes["updated_at"] = now

        updated = existing.model_copy(update=changes)
        self._articles[article_id] = updated
        logger.debug(f"Updated article {article_id}: {sorted(changes)}")
        return updated

    def delete(self, article_id: str) -> bool:
        return self._articles.pop(article_id, None) is not None
