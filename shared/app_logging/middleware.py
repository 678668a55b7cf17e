"""
HTTP middleware binding a correlation ID to each request.
"""

from fastapi import FastAPI, Request

from shared.app_logging.logger import CorrelationContext, log_context

CORRELATION_HEADER = "X-Correlation-ID"


def add_correlation_middleware(app: FastAPI) -> None:
    """Reuse the caller's X-Correlation-ID (or mint one) and echo it back."""

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next):
        with CorrelationContext(request.headers.get(CORRELATION_HEADER)) as correlation_id:
            with log_context(method=request.method, path=request.url.path):
                response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
