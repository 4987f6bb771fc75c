from __future__ import annotations

"""Application factory for the FastAPI app.

Centralizes app construction (settings, catalog, middleware, handlers,
routers, static hosting) so tests can build isolated instances with their
own configuration and collaborators.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.adapters.rate_limit.base import AbstractRateLimiter
from app.api.routes import chips_router
from app.core.config import Settings, settings as default_settings
from app.core.exception_handlers import setup_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import api_path_middleware, request_id_middleware
from app.core.openapi import apply_openapi_customizations
from app.core.rate_limit import build_rate_limiter, rate_limit_middleware
from app.services.chip_catalog import ChipCatalog, load_chip_catalog
from app.web.static import SPAStaticFiles

logger = logging.getLogger(__name__)

SERVER_NAME = "6G RAN Viz server"


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    port = app.state.settings.app.port
    logger.info("%s running at http://localhost:%s", SERVER_NAME, port)
    yield


def create_app(
    settings: Settings | None = None,
    *,
    chip_catalog: ChipCatalog | None = None,
    rate_limiter: AbstractRateLimiter | None = None,
    configure_logs: bool = True,
) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        settings: Settings to build from; defaults to the environment-loaded ones.
        chip_catalog: Pre-built catalog; loaded from the configured file when omitted.
        rate_limiter: Limiter to use; built from settings when omitted.
        configure_logs: Whether to (re)configure the root logger.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and static hosting.

    Raises:
        ConfigurationAppError: If the API is enabled and the chip file is unusable.
    """
    cfg = settings or default_settings

    # Logging first so subsequent init logs are formatted as desired
    if configure_logs:
        configure_logging(cfg.log)

    app_cfg = cfg.app
    if app_cfg.api_enabled and chip_catalog is None:
        chip_catalog = load_chip_catalog(app_cfg.resolved_chips_file)

    if not app_cfg.rate_limit_enabled:
        rate_limiter = None
    elif rate_limiter is None:
        rate_limiter = build_rate_limiter(app_cfg)

    docs_enabled = app_cfg.api_enabled and app_cfg.docs_enabled
    app = FastAPI(
        title="6G RAN Viz",
        description=(
            "Static host for the RAN visualization front end plus a read-only "
            "lookup API over its chip configuration file."
        ),
        version="0.1.0",
        lifespan=_lifespan,
        docs_url="/api/docs" if docs_enabled else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if docs_enabled else None,
    )

    app.state.settings = cfg
    app.state.chip_catalog = chip_catalog
    app.state.rate_limiter = rate_limiter

    # Middleware (last registered runs first)
    if app_cfg.api_enabled:
        app.middleware("http")(api_path_middleware)
    app.middleware("http")(rate_limit_middleware)
    app.middleware("http")(request_id_middleware)

    # Exception handlers
    setup_exception_handlers(app)

    # Routers before the catch-all static mount
    if app_cfg.api_enabled:
        app.include_router(chips_router, prefix="/api")
        apply_openapi_customizations(app, rate_limited=rate_limiter is not None)

    app.mount(
        "/",
        SPAStaticFiles(
            directory=app_cfg.public_dir,
            fallback_file=app_cfg.resolved_index_file,
        ),
        name="public",
    )

    return app
