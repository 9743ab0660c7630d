"""
FastAPI application entry point for Review Sentiment.
"""

import asyncio

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from review_sentiment.api.dependencies import get_session_controller
from review_sentiment.api.error_handlers import EXCEPTION_HANDLERS
from review_sentiment.api.middleware import RequestTracingMiddleware
from review_sentiment.api.routes import router
from review_sentiment.config import settings
from review_sentiment.logging_config import configure_logging
from review_sentiment.persistence.redis_client import RedisClient

# Configure structured logging before any other imports
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title="Review Sentiment",
    description="On-demand sentiment classification of random reviews with a local model",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Request tracing middleware (must be first for request_id in all logs)
app.add_middleware(RequestTracingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router, tags=["session"])


def log_init_failure(task: asyncio.Task) -> None:
    """Log an initialization error nobody awaits."""
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.error(
            "Background initialization crashed",
            error=str(error),
            error_type=type(error).__name__,
            exc_info=error,
        )


@app.on_event("startup")
async def startup():
    """Start loading corpus and engine in the background.

    The server accepts requests immediately; /health reports 503 and
    /analyze answers 409 until both resources are ready.
    """
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        corpus_source=settings.CORPUS_SOURCE,
        engine_candidates=settings.ENGINE_CANDIDATES,
    )
    controller = get_session_controller()
    app.state.init_task = asyncio.create_task(controller.initialize())
    app.state.init_task.add_done_callback(log_init_failure)


@app.on_event("shutdown")
async def shutdown():
    """Cancel a pending initialization and release pooled connections."""
    logger.info("Application shutdown")
    init_task = getattr(app.state, "init_task", None)
    if init_task is not None and not init_task.done():
        init_task.cancel()
    await RedisClient.close_async_pool()
    logger.info("Application shutdown complete")


if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """Root endpoint with API documentation links."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "analyze": "/analyze",
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "review_sentiment.main:app",
        host="0.0.0.0",
        port=8000,
    )
