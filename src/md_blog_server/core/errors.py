"""
Global Error Handling

This module defines application-wide exception handlers for the blog server.

Design Goals
------------
- Never leak internal exception details to clients
- A missing route is normal traffic: plain 404, no error log
- A failed page render costs one request a 500, never the process
- Log full stack traces internally for debugging
"""

from __future__ import annotations

import logging
from typing import Dict, Any

from fastapi import Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..content.indexer import ContentRootError
from ..content.store import IndexNotReadyError
from ..rendering.templates import RenderTemplateError

logger = logging.getLogger("blog.errors")


INTERNAL_ERROR_HTML = (
    "<!DOCTYPE html><html><head><title>Internal server error</title></head>"
    "<body><h1>Internal server error</h1></body></html>"
)


def not_found_text(path: str) -> str:
    return f"No route for {path}"


# ---------------------------------------------------------------------
# Public Exception Handlers
# ---------------------------------------------------------------------

async def route_not_found_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> Response:
    """
    Plain-text 404 for unmatched paths; other HTTP errors keep FastAPI's
    default JSON shape.
    """
    if exc.status_code == 404:
        return PlainTextResponse(not_found_text(request.url.path), status_code=404)
    return await http_exception_handler(request, exc)


async def render_template_error_handler(
    request: Request,
    exc: RenderTemplateError,
) -> HTMLResponse:
    """
    Convert a page or feed rendering failure into a 500 page.
    """
    logger.exception(
        "Template rendering failed for %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return HTMLResponse(INTERNAL_ERROR_HTML, status_code=500)


async def content_unavailable_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    The content index could not be built (root unreadable) or is not built
    yet. The previously served index, if any, is still in place.
    """
    logger.error("Content unavailable during %s %s: %s", request.method, request.url.path, exc)

    payload: Dict[str, Any] = {
        "error": "content_unavailable",
        "detail": "Content index is unavailable",
    }
    return JSONResponse(status_code=503 if isinstance(exc, IndexNotReadyError) else 500, content=payload)


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> PlainTextResponse:
    """
    Catch-all handler for uncaught exceptions.

    This handler should be registered with FastAPI as the final safety net
    for any exception not otherwise handled by route-level or framework-level
    handlers.

    Behavior
    --------
    - Logs the full exception stack trace for internal diagnostics.
    - Returns a generic 500 error to the client with no internal details.
    """

    # Log full traceback internally (never returned to client)
    logger.exception(
        "Unhandled exception during request: %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )

    return PlainTextResponse("Internal server error", status_code=500)


def register_exception_handlers(app) -> None:
    app.add_exception_handler(StarletteHTTPException, route_not_found_handler)
    app.add_exception_handler(RenderTemplateError, render_template_error_handler)
    app.add_exception_handler(ContentRootError, content_unavailable_handler)
    app.add_exception_handler(IndexNotReadyError, content_unavailable_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
