"""
Blog Routes

Serves post detail pages. The router is mounted under the configured route
prefix, and the full request path is the lookup key into the content index.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from ..content.assembler import RouteNotFound, resolve
from ..content.store import IndexStore
from ..core.errors import not_found_text
from ..rendering.templates import PageRenderer
from .dependencies import get_index_store, get_renderer

router = APIRouter(tags=["blog"])


@router.get("", response_class=HTMLResponse)
@router.get("/{post_path:path}", response_class=HTMLResponse)
def blog_post(
    request: Request,
    store: Annotated[IndexStore, Depends(get_index_store)],
    renderer: Annotated[PageRenderer, Depends(get_renderer)],
) -> Response:
    """
    Render the post indexed under the request path.

    Returns
    -------
    Response
        200 with the detail page, or 404 plain text when nothing is indexed
        under the path.
    """
    # Decoded ASGI path; request.url would re-split a literal "#" or "?"
    path = request.scope["path"]

    try:
        page = resolve(store.current, path)
    except RouteNotFound:
        return PlainTextResponse(not_found_text(path), status_code=404)

    return HTMLResponse(renderer.render_post(page))
