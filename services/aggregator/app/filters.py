import re
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup

from services.aggregator.app.metrics import ARTICLES_DROPPED
from services.aggregator.app.providers import ProviderArticle
from shared.app_logging.logger import get_logger

logger = get_logger("aggregator.filters")

CONTROL_CHARS = re.compile(r"[\u0000-\u001F\u007F-\u009F]")
BRACKETED_NOTE = re.compile(r"\[[^\]]*\]")
PAID_PLAN_BANNER = re.compile(r"only available in paid plans", re.IGNORECASE)
WHITESPACE = re.compile(r"\s+")

REMOVED_IMAGE_MARKER = "[Removed]"


def strip_control_chars(text: str) -> str:
    return CONTROL_CHARS.sub("", text).strip()


def normalize_title(title: Optional[str]) -> str:
    return strip_control_chars(title or "").lower()


def is_absolute_link(link: Optional[str]) -> bool:
    return bool(link) and link.startswith("http")


def clean_display_text(text: Optional[str]) -> str:
    """Plain text for display: no HTML, entities decoded, provider notes removed."""
    if not text:
        return ""
    plain = BeautifulSoup(text, "html.parser").get_text()
    plain = BRACKETED_NOTE.sub("", plain)
    plain = PAID_PLAN_BANNER.sub("", plain)
    plain = CONTROL_CHARS.sub(" ", plain)
    return WHITESPACE.sub(" ", plain).strip()


def _drop(reason: str, article: ProviderArticle) -> None:
    ARTICLES_DROPPED.labels(reason=reason).inc()
    logger.debug(f"Dropped {article.provider.value} record {article.article_id}: {reason}")


def filter_valid_articles(
    articles: Iterable[ProviderArticle], fallback_image_url: str
) -> List[ProviderArticle]:
    """Deduplicate and validate one fetch batch, preserving provider order.

    Ids and titles are only compared within this batch. Accepted records are
    returned as cleaned copies; the inputs are left untouched.
    """
    seen_ids = set()
    seen_titles = set()
    valid: List[ProviderArticle] = []

    for article in articles:
        if article.article_id in seen_ids:
            _drop("duplicate_id", article)
            continue

        title_key = normalize_title(article.title)
        if title_key and title_key in seen_titles:
            _drop("duplicate_title", article)
            continue

        if not article.title or not article.description:
            _drop("missing_text", article)
            continue

        if not is_absolute_link(article.link):
            _drop("invalid_link", article)
            continue

        image_url = article.image_url
        if not image_url or REMOVED_IMAGE_MARKER in image_url:
            image_url = fallback_image_url

        valid.append(
            article.model_copy(
                update={
                    "title": strip_control_chars(article.title),
                    "description": strip_control_chars(article.description),
                    "image_url": image_url,
                }
            )
        )
        seen_ids.add(article.article_id)
        if title_key:
            seen_titles.add(title_key)

    return valid
