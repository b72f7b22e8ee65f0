"""
Blog Server Application Entry Point

This module defines the FastAPI application instance, registers all routers,
configures global exception handling and request logging, and provides a
test-friendly application factory.

Design Goals
------------
- The content index is fully built before the first request is served
- A missing or unreadable content root aborts startup
- Centralized router registration
- Global exception safety net
- Test-friendly via create_app()
"""

from __future__ import annotations

import contextlib
import logging
import time
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles

from .config import Settings, settings as default_settings
from .content.indexer import ContentIndexer
from .content.markdown import MarkdownRenderer
from .content.store import IndexStore
from .core.errors import register_exception_handlers
from .rendering.templates import PageRenderer

from .api import (
    admin_routes,
    blog_routes,
    feed_routes,
    health_routes,
)


logger = logging.getLogger("blog.app")
access_logger = logging.getLogger("blog.access")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_index_store(settings: Settings) -> IndexStore:
    indexer = ContentIndexer(
        settings.content_dir,
        route_prefix=settings.route_prefix,
        metadata_filename=settings.metadata_filename,
        body_filename=settings.body_filename,
        renderer=MarkdownRenderer(settings.markdown_profile),
    )
    return IndexStore(indexer)


# ---------------------------------------------------------------------
# Application Factory (Test-Friendly)
# ---------------------------------------------------------------------

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration for this instance. Defaults to the environment-derived
        module settings.

    Returns
    -------
    FastAPI
        Fully configured FastAPI application.
    """
    settings = settings or default_settings
    configure_logging(settings.log_level)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Build the content index before the first request. A missing content
        root raises here and the server never starts accepting traffic.
        """
        store = app.state.index_store
        logger.info(
            "Starting blog server, content root %s, markdown profile %s",
            store.indexer.root,
            store.indexer.renderer.profile.name,
        )
        store.load()
        yield
        logger.info("Shutting down blog server")

    app = FastAPI(
        title="md-blog-server",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.index_store = build_index_store(settings)
    app.state.renderer = PageRenderer(
        site_title=settings.site_title,
        static_path=settings.static_route,
    )

    # --------------------------------------------------------------
    # Global Exception Handling
    # --------------------------------------------------------------

    register_exception_handlers(app)

    # --------------------------------------------------------------
    # Request Logging
    # --------------------------------------------------------------

    @app.middleware("http")
    async def _log_request(request: Request, call_next):
        start = time.perf_counter()
        client = request.client.host if request.client else "-"
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            access_logger.info(
                "%s %s %s -> %d (%.1fms)",
                client,
                request.method,
                request.url.path,
                status_code,
                (time.perf_counter() - start) * 1000,
            )

    # --------------------------------------------------------------
    # Router Registration
    # --------------------------------------------------------------

    app.include_router(health_routes.router)
    app.include_router(admin_routes.router)
    app.include_router(feed_routes.router)
    app.include_router(blog_routes.router, prefix=settings.route_prefix)

    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount(settings.static_route, StaticFiles(directory=static_dir), name="static")
    else:
        logger.info("No static directory at %s; static assets disabled", static_dir)

    return app


# ---------------------------------------------------------------------
# Default Application Instance (for Uvicorn/Gunicorn)
# ---------------------------------------------------------------------

app = create_app()
