from contextlib import asynccontextmanager
from typing import List, Optional

import httpx
import uvicorn
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from services.aggregator.app.client import NewsAggregator
from shared.app_logging.logger import setup_logging
from shared.app_logging.middleware import add_correlation_middleware
from shared.config.settings import get_settings
from shared.schemas.article import Article
from shared.utils.health import HealthChecker, create_aggregator_health_checker

# Setup logging
logger = setup_logging("aggregator")

router = APIRouter(prefix="/api/news", tags=["news"])


def get_aggregator(request: Request) -> NewsAggregator:
    return request.app.state.aggregator


def get_health_checker(request: Request) -> HealthChecker:
    return request.app.state.health_checker


@router.get("/headlines", response_model=List[Article])
async def top_headlines(
    country: Optional[str] = Query(None, min_length=2, max_length=2),
    aggregator: NewsAggregator = Depends(get_aggregator),
):
    try:
        return await aggregator.fetch_top_headlines(country)
    except Exception as e:
        logger.exception("Error fetching top headlines: %s", e)
        raise HTTPException(500, "Failed to fetch top headlines")


@router.get("/latest", response_model=List[Article])
async def latest_news(
    country: Optional[str] = Query(None, min_length=2, max_length=2),
    aggregator: NewsAggregator = Depends(get_aggregator),
):
    try:
        return await aggregator.fetch_latest_news(country)
    except Exception as e:
        logger.exception("Error fetching latest news: %s", e)
        raise HTTPException(500, "Failed to fetch latest news")


@router.get("/category/{category}", response_model=List[Article])
async def news_by_category(
    category: str,
    country: Optional[str] = Query(None, min_length=2, max_length=2),
    aggregator: NewsAggregator = Depends(get_aggregator),
):
    try:
        return await aggregator.fetch_news_by_category(category, country)
    except Exception as e:
        logger.exception("Error fetching news by category: %s", e)
        raise HTTPException(500, "Failed to fetch news by category")


@router.get("/search", response_model=List[Article])
async def search_news(
    q: Optional[str] = Query(None, description="Free-text query"),
    aggregator: NewsAggregator = Depends(get_aggregator),
):
    if not q or not q.strip():
        raise HTTPException(400, "Query parameter 'q' is required")
    try:
        return await aggregator.search_news(q.strip())
    except Exception as e:
        logger.exception("Error searching news: %s", e)
        raise HTTPException(500, "Failed to search news")


@router.get("/related/{category}", response_model=List[Article])
async def related_news(
    category: str,
    exclude: Optional[str] = Query(None, description="Slug of the article being read"),
    limit: Optional[int] = Query(None, ge=1, le=20),
    aggregator: NewsAggregator = Depends(get_aggregator),
):
    try:
        return await aggregator.fetch_related(category, exclude_slug=exclude, limit=limit)
    except Exception as e:
        logger.exception("Error fetching related news: %s", e)
        raise HTTPException(500, "Failed to fetch related news")


def create_app(http: Optional[httpx.AsyncClient] = None) -> FastAPI:
    """Build the app; ``http`` replaces the client opened at startup (tests)."""
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = http or httpx.AsyncClient(
            timeout=settings.service.http_timeout,
            follow_redirects=True,
            headers={"User-Agent": "NewsWire/1.0"},
        )
        app.state.aggregator = NewsAggregator(client, settings)
        logger.info("News aggregator ready")
        try:
            yield
        finally:
            if http is None:
                await client.aclose()
            logger.info("Upstream HTTP client closed")

    app = FastAPI(title="NewsWire Aggregator", lifespan=lifespan)
    app.state.health_checker = create_aggregator_health_checker()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.service.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    add_correlation_middleware(app)

    @app.get("/health")
    def health(checker: HealthChecker = Depends(get_health_checker)):
        """Comprehensive health check endpoint."""
        return checker.run_all_checks()

    @app.get("/health/live")
    def liveness_check(checker: HealthChecker = Depends(get_health_checker)):
        return checker.liveness()

    @app.get("/health/ready")
    def readiness_check(checker: HealthChecker = Depends(get_health_checker)):
        return checker.readiness()

    @app.get("/metrics")
    def metrics():
        """Prometheus metrics endpoint."""
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
