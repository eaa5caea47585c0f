"""Application factory for the book service."""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from src.bookshelf.api.http.deps import HitCounter
from src.bookshelf.api.http.error_handlers import register_error_handlers
from src.bookshelf.api.http.middleware import SecurityHeadersMiddleware, request_context
from src.bookshelf.api.http.routers.books import router as books_router
from src.bookshelf.api.http.routers.books_html import router as books_html_router
from src.bookshelf.api.http.routers.demo import router as demo_router
from src.bookshelf.api.http.routers.health import router as health_router
from src.bookshelf.api.utils.app_startup import configure_logging
from src.bookshelf.core.storage import BookStore
from src.bookshelf.runtime.config.config_data import ConfigData
from src.bookshelf.runtime.context import get_config


def build_store(config: ConfigData) -> BookStore:
    """Create the book store described by the ``store`` configuration."""
    timeout = config.store.lock_timeout_seconds
    if config.store.seed:
        return BookStore.with_seed(lock_timeout_seconds=timeout)
    return BookStore(lock_timeout_seconds=timeout)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    store: BookStore = app.state.book_store
    logger.bind(
        service=app.title, books=store.count(), environment=get_config().app.environment
    ).info("service.startup")
    try:
        yield
    finally:
        logger.bind(service=app.title).info("service.shutdown")


def create_app(store: BookStore | None = None) -> FastAPI:
    """Build the application around ``store``, or a new store from config.

    Each app owns exactly one store for its whole lifetime; it is created
    here rather than in ``lifespan`` so the app is usable before startup.
    """
    config = get_config()
    production = config.app.environment == "production"

    if production and "*" in config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: '*' origins cannot be combined with credentials in production"
        )

    application = FastAPI(
        title=config.app.name,
        lifespan=lifespan,
        docs_url=None if production else "/docs",
        redoc_url=None if production else "/redoc",
    )
    application.state.book_store = store if store is not None else build_store(config)
    application.state.hit_counter = HitCounter()
    application.state.started_at = time.monotonic()

    application.add_middleware(SecurityHeadersMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )
    application.middleware("http")(request_context)

    register_error_handlers(application)

    for router in (health_router, books_router, books_html_router, demo_router):
        application.include_router(router)

    return application


configure_logging()
app = create_app()

__all__ = ["app", "create_app", "build_store"]


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,
    )
