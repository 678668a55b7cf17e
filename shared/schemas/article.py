import re
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

UNKNOWN_AUTHOR = "Unknown"

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


class Category(str, Enum):
    POLITICS = "Politics"
    SPORTS = "Sports"
    TECH = "Tech"
    ENTERTAINMENT = "Entertainment"
    GENERAL = "General"

    @classmethod
    def parse(cls, value: str) -> "Category":
        """Case-insensitive lookup; raises ValueError for unknown names."""
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        raise ValueError(f"Unknown category: {value!r}")

    @classmethod
    def from_provider(cls, value: Optional[str]) -> "Category":
        """Map a provider's free-form category, defaulting to General."""
        if not value:
            return cls.GENERAL
        if value.strip().lower() == "technology":
            return cls.TECH
        try:
            return cls.parse(value)
        except ValueError:
            return cls.GENERAL


class ArticleSource(str, Enum):
    LOCAL = "local"
    NEWSDATA = "newsdata"
    NEWSAPI = "newsapi"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def slugify(title: str) -> str:
    return _SLUG_STRIP.sub("-", title.lower()).strip("-")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Article(CamelModel):
    """Normalized article consumed by every view, whatever its origin."""

    id: str = Field(..., description="Stable identifier, unique per source record")
    title: str
    excerpt: str
    content: str
    category: Category = Category.GENERAL
    author: str = UNKNOWN_AUTHOR
    published_at: datetime
    created_at: datetime
    updated_at: datetime
    image_url: str
    slug: str = Field(..., description="Routing identifier")
    link: Optional[str] = Field(None, description="Outbound URL, aggregated articles only")
    source: ArticleSource = ArticleSource.LOCAL


def _require_text(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError("must not be empty")
    return value


def _require_slug(value: Optional[str]) -> Optional[str]:
    if value is not None and not slugify(value):
        raise ValueError("slug must contain at least one letter or digit")
    return value


def _coerce_category(value):
    if isinstance(value, str):
        return Category.parse(value)
    return value


class ArticleCreate(CamelModel):
    title: str
    content: str
    excerpt: str
    category: Category
    author: str
    image_url: Optional[str] = None
    slug: Optional[str] = None
    published_at: Optional[datetime] = None

    check_non_empty = field_validator("title", "content", "excerpt", "author")(_require_text)
    check_category = field_validator("category", mode="before")(_coerce_category)
    validate_slug = field_validator("slug")(_require_slug)


class ArticleUpdate(CamelModel):
    title: Optional[str] = None
    content: Optional[str] = None
    excerpt: Optional[str] = None
    category: Optional[Category] = None
    author: Optional[str] = None
    image_url: Optional[str] = None
    slug: Optional[str] = None
    published_at: Optional[datetime] = None

    check_non_empty = field_validator("title", "content", "excerpt", "author", "image_url")(_require_text)
    validate_slug = field_validator("slug")(_require_slug)
    check_category = field_validator("category", mode="before")(_coerce_category)
