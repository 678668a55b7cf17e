"""
Centralized configuration management for NewsWire services.
Uses Pydantic Settings for validation and type safety.
"""

from functools import lru_cache
from typing import Annotated, List
from urllib.parse import urlparse

from pydantic import AliasChoices, Field, validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _provider_base_url(cls, v):
    """Base URL must be absolute; the trailing slash is dropped."""
    parsed = urlparse(v)
    if parsed.scheme not in ["http", "https"] or not parsed.netloc:
        raise ValueError(f"Provider base URL must use HTTP or HTTPS: {v}")
    return v.rstrip("/")


class AppBaseSettings(BaseSettings):
    """Base settings with shared configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class NewsDataSettings(AppBaseSettings):
    """NewsData.io provider settings."""

    api_key: str = Field(
        default="",
        validation_alias=AliasChoices(
            "NEWSDATA_API_KEY", "NEWS_DATA_API_KEY", "VITE_NEWSDATA_API_KEY"
        ),
    )
    base_url: str = Field(
        default="https://newsdata.io/api/1",
        validation_alias="NEWSDATA_BASE_URL",
    )
    language: str = Field(
        default="en",
        validation_alias="NEWSDATA_LANGUAGE",
    )

    validate_base_url = validator("base_url", allow_reuse=True)(_provider_base_url)


class NewsAPISettings(AppBaseSettings):
    """NewsAPI.org provider settings."""

    api_key: str = Field(
        default="",
        validation_alias=AliasChoices("NEWSAPI_KEY", "VITE_NEWSAPI_KEY"),
    )
    base_url: str = Field(
        default="https://newsapi.org/v2",
        validation_alias="NEWSAPI_BASE_URL",
    )
    headlines_page_size: int = Field(
        default=10,
        validation_alias="NEWSAPI_HEADLINES_PAGE_SIZE",
    )
    search_page_size: int = Field(
        default=20,
        validation_alias="NEWSAPI_SEARCH_PAGE_SIZE",
    )

    validate_base_url = validator("base_url", allow_reuse=True)(_provider_base_url)


class ServiceSettings(AppBaseSettings):
    """Service-specific configuration settings."""

    default_country: str = Field(
        default="us",
        validation_alias="DEFAULT_COUNTRY",
    )
    fallback_image_url: str = Field(
        default="https://images.unsplash.com/photo-1504711434969-e33886168f5c?w=800&h=600&fit=crop",
        validation_alias="FALLBACK_IMAGE_URL",
    )
    placeholder_image_url: str = Field(
        default="/api/placeholder/800/450",
        validation_alias="PLACEHOLDER_IMAGE_URL",
    )
    http_timeout: float = Field(
        default=10.0,
        validation_alias="HTTP_TIMEOUT",
    )
    max_retries: int = Field(
        default=1,
        validation_alias="MAX_RETRIES",
    )
    retry_delay: float = Field(
        default=1.0,
        validation_alias="RETRY_DELAY",
    )
    related_limit: int = Field(
        default=4,
        validation_alias="RELATED_LIMIT",
    )
    cors_origins: Annotated[List[str], NoDecode] = Field(
        default=["http://localhost:5173"],
        validation_alias="CORS_ORIGINS",
    )
    seed_sample_articles: bool = Field(
        default=True,
        validation_alias="SEED_SAMPLE_ARTICLES",
    )

    @validator("cors_origins", pre=True)
    def parse_list_from_string(cls, v):
        """Parse comma-separated string into list if needed."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @validator("max_retries", "related_limit")
    def validate_non_negative(cls, v):
        if v < 0:
            raise ValueError("Value must not be negative")
        return v


class LoggingSettings(AppBaseSettings):
    """Logging configuration settings."""

    level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
    )
    include_correlation_id: bool = Field(
        default=True,
        validation_alias="LOG_INCLUDE_CORRELATION_ID",
    )
    json_logs: bool = Field(
        default=False,
        validation_alias="JSON_LOGS",
    )


class Settings(AppBaseSettings):
    """Main settings class that combines all configuration sections."""

    newsdata: NewsDataSettings = Field(default_factory=NewsDataSettings)
    newsapi: NewsAPISettings = Field(default_factory=NewsAPISettings)
    service: ServiceSettings = Field(default_factory=ServiceSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    service_name: str = Field(
        default="newswire",
        validation_alias="SERVICE_NAME",
    )
    environment: str = Field(
        default="development",
        validation_alias="ENVIRONMENT",
    )
    version: str = Field(
        default="1.0.0",
        validation_alias="SERVICE_VERSION",
    )
    host: str = Field(
        default="0.0.0.0",
        validation_alias="HOST",
    )
    port: int = Field(
        default=8000,
        validation_alias="PORT",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience functions for common settings
def get_newsdata_api_key() -> str:
    """Get the NewsData.io API key (empty when not configured)."""
    return get_settings().newsdata.api_key


def get_newsapi_key() -> str:
    """Get the NewsAPI.org API key (empty when not configured)."""
    return get_settings().newsapi.api_key
