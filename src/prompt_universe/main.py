"""FastAPI application factory.

Run with:
    uvicorn prompt_universe.main:app
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from prompt_universe.api.router import api_router
from prompt_universe.config import settings
from prompt_universe.core.documents.factory import create_document_store
from prompt_universe.core.errors import register_exception_handlers
from prompt_universe.core.jobs import job_queue
from prompt_universe.core.logging import (
    RequestIdMiddleware,
    RequestLoggingMiddleware,
    configure_logging,
)


configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the shared clients on startup and close them on shutdown.

    The document store and the outbound HTTP client live on ``app.state``,
    where the API dependencies pick them up.
    """
    app.state.store = create_document_store()
    app.state.http_client = httpx.AsyncClient(timeout=settings.llm_request_timeout)
    logger.info(
        "application_startup",
        environment=settings.environment,
        document_backend=app.state.store.backend,
    )

    # Without Redis the API still starts; queued scans then fail softly
    try:
        await job_queue.open()
    except Exception as e:
        logger.warning("job_queue_unavailable", error=str(e))

    try:
        yield
    finally:
        await job_queue.close()
        await app.state.http_client.aclose()
        await app.state.store.close()
        logger.info("application_shutdown")


def create_app() -> FastAPI:
    docs_enabled = not settings.is_production
    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant prompt library and execution backend",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )
    # Added last so it runs first and the access log carries the request ID
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()
