"""
Application entry point.

Creates the FastAPI application and wires together:
- The product store (with an optional durable mirror) and key registry
- The request pipeline: logging, security headers, CORS, then the
  per-route stages (rate limit, body decode, authentication)
- Error handlers (the single terminal error translator)
- Routers

Each application owns its own store and registry, so tests get fresh
state by building a new app. No business logic belongs here.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from products_api.application.access.authenticator import Authenticator
from products_api.core.config import Settings, settings
from products_api.domain.catalog.ports import PersistenceError, ProductPersistence
from products_api.infrastructure.access.key_registry import InMemoryApiKeyRegistry
from products_api.infrastructure.catalog.in_memory_store import InMemoryProductStore
from products_api.infrastructure.catalog.sql_persistence import (
    SqlProductPersistence,
    build_engine,
)
from products_api.interfaces.access.router import keys_info_router
from products_api.interfaces.access.router import router as keys_router
from products_api.interfaces.catalog.router import router as products_router
from products_api.interfaces.health import router as health_router
from products_api.shared.errors.handlers import register_error_handlers
from products_api.shared.logging import configure_logging
from products_api.shared.middleware.request_logging import RequestLoggingMiddleware
from products_api.shared.security.headers import SecurityHeadersMiddleware
from products_api.shared.security.rate_limiting import create_limiter, parse_rate_limits

logger = logging.getLogger(__name__)


def connect_persistence(store: InMemoryProductStore, app_settings: Settings) -> None:
    """Bring the durable mirror online before serving traffic.

    When the mirror is reachable, previously persisted products are loaded.
    When it is not, the service either refuses to start
    (``database_required``) or continues in memory only.

    Raises:
        PersistenceError: If the mirror is unreachable and required.
    """
    persistence = store.persistence
    if persistence is None:
        logger.info("No database configured; running with in-memory storage only.")
        return

    try:
        persistence.ping()
        store.hydrate(persistence.load_all())
    except PersistenceError:
        if app_settings.database_required:
            logger.error("Database is required but unreachable; refusing to start.")
            raise
        logger.warning(
            "Database unreachable; continuing with in-memory storage only.",
            exc_info=True,
        )
        store.detach_persistence()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: connect the optional durable mirror."""
    connect_persistence(app.state.product_store, app.state.settings)
    logger.info(
        "%s %s ready (env: %s)",
        app.state.settings.project_name,
        app.state.settings.version,
        app.state.settings.environment,
    )
    yield
    logger.info("Shutting down.")


def create_app(
    app_settings: Optional[Settings] = None,
    persistence: Optional[ProductPersistence] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the composition root of the application.

    Args:
        app_settings: Settings to use. Defaults to the environment-loaded settings.
        persistence: Durable mirror to use. Defaults to a SQL mirror when
            ``database_url`` is configured, otherwise none.

    Returns:
        A fully configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    configure_logging(level=app_settings.log_level)

    if persistence is None and app_settings.database_url:
        persistence = SqlProductPersistence(build_engine(app_settings.database_url))

    authenticator = Authenticator(
        InMemoryApiKeyRegistry(), header_name=app_settings.api_key_header
    )
    authenticator.seed(app_settings.seed_api_keys)

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.version,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.product_store = InMemoryProductStore(persistence=persistence)
    app.state.authenticator = authenticator
    app.state.started_at = time.monotonic()

    # --- Rate Limiting ---
    limiter = create_limiter(app_settings)
    app.state.limiter = limiter
    app.state.rate_limits = parse_rate_limits(app_settings)

    # --- Middleware (last added runs first) ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app, expose_internals=not app_settings.is_production)

    # --- Routers ---
    app.include_router(health_router)
    app.include_router(products_router)
    app.include_router(keys_router)
    if not app_settings.is_production:
        app.include_router(keys_info_router)

    return app


app = create_app()
