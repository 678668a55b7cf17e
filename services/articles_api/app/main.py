from typing import List, Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from services.articles_api.app.seed import sample_articles
from services.articles_api.app.store import ArticleStore
from shared.app_logging.logger import setup_logging
from shared.app_logging.middleware import add_correlation_middleware
from shared.config.settings import get_settings
from shared.schemas.article import Article, ArticleCreate, ArticleUpdate
from shared.utils.health import HealthChecker, create_articles_api_health_checker

# Setup logging
logger = setup_logging("articles_api")

router = APIRouter(prefix="/api/articles", tags=["articles"])


def get_store(request: Request) -> ArticleStore:
    """Dependency returning the store owned by this app instance."""
    return request.app.state.store


def get_health_checker(request: Request) -> HealthChecker:
    return request.app.state.health_checker


@router.get("", response_model=List[Article])
async def list_articles(store: ArticleStore = Depends(get_store)):
    try:
        return store.list_all()
    except Exception as e:
        logger.exception("Error fetching articles: %s", e)
        raise HTTPException(500, "Failed to fetch articles")


@router.get("/search", response_model=List[Article])
async def search_articles(
    q: Optional[str] = Query(None, description="Case-insensitive substring"),
    store: ArticleStore = Depends(get_store),
):
    if not q or not q.strip():
        raise HTTPException(400, "Query parameter 'q' is required")
    try:
        return store.search(q)
    except Exception as e:
        logger.exception("Error searching articles: %s", e)
        raise HTTPException(500, "Failed to search articles")


@router.get("/category", include_in_schema=False)
@router.get("/category/", include_in_schema=False)
async def category_missing():
    raise HTTPException(400, "Category parameter is required")


@router.get("/category/{category}", response_model=List[Article])
async def list_articles_by_category(category: str, store: ArticleStore = Depends(get_store)):
    if not category.strip():
        raise HTTPException(400, "Category parameter is required")
    try:
        return store.list_by_category(category.strip())
    except Exception as e:
        logger.exception("Error fetching articles by category: %s", e)
        raise HTTPException(500, "Failed to fetch articles by category")


@router.get("/{slug}", response_model=Article)
async def get_article(slug: str, store: ArticleStore = Depends(get_store)):
    try:
        article = store.get_by_slug(slug)
    except Exception as e:
        logger.exception("Error fetching article %s: %s", slug, e)
        raise HTTPException(500, "Failed to fetch article")
    if article is None:
        raise HTTPException(404, "Article not found")
    return article


@router.post("", response_model=Article, status_code=status.HTTP_201_CREATED)
async def create_article(payload: ArticleCreate, store: ArticleStore = Depends(get_store)):
    try:
        article = store.create(payload)
    except Exception as e:
        logger.exception("Error creating article: %s", e)
        raise HTTPException(500, "Failed to create article")
    logger.info(f"Created article {article.id}")
    return article


@router.put("/{article_id}", response_model=Article)
async def update_article(
    article_id: str, payload: ArticleUpdate, store: ArticleStore = Depends(get_store)
):
    try:
        article = store.update(article_id, payload)
    except Exception as e:
        logger.exception("Error updating article %s: %s", article_id, e)
        raise HTTPException(500, "Failed to update article")
    if article is None:
        raise HTTPException(404, "Article not found")
    logger.info(f"Updated article {article_id}")
    return article


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(article_id: str, store: ArticleStore = Depends(get_store)):
    try:
        deleted = store.delete(article_id)
    except Exception as e:
        logger.exception("Error deleting article %s: %s", article_id, e)
        raise HTTPException(500, "Failed to delete article")
    if not deleted:
        raise HTTPException(404, "Article not found")
    logger.info(f"Deleted article {article_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected {request.method} {request.url.path}: {len(exc.errors())} validation errors")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid data", "errors": jsonable_encoder(exc.errors())},
    )


def create_app(store: Optional[ArticleStore] = None) -> FastAPI:
    """Build the app around ``store`` (a freshly seeded one by default)."""
    settings = get_settings()
    if store is None:
        store = ArticleStore(placeholder_image_url=settings.service.placeholder_image_url)
        if settings.service.seed_sample_articles:
            store.seed(sample_articles())

    app = FastAPI(title="NewsWire Articles API")
    app.state.store = store
    app.state.health_checker = create_articles_api_health_checker(store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.service.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    add_correlation_middleware(app)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    @app.get("/health")
    def health_check(checker: HealthChecker = Depends(get_health_checker)):
        """Comprehensive health check endpoint."""
        return checker.run_all_checks()

    @app.get("/health/live")
    def liveness_check(checker: HealthChecker = Depends(get_health_checker)):
        return checker.liveness()

    @app.get("/health/ready")
    def readiness_check(checker: HealthChecker = Depends(get_health_checker)):
        return checker.readiness()

    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
