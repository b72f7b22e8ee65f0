from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ..config import Settings
from ..content.assembler import build_feed
from ..content.store import IndexStore
from ..rendering.templates import PageRenderer
from .dependencies import get_index_store, get_renderer, get_settings

router = APIRouter(tags=["feed"])


@router.get("/", response_class=HTMLResponse)
@router.get("/feed", response_class=HTMLResponse)
def feed(
    store: Annotated[IndexStore, Depends(get_index_store)],
    renderer: Annotated[PageRenderer, Depends(get_renderer)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HTMLResponse:
    """All posts, newest first."""
    posts = build_feed(
        store.current,
        respect_show_in_feed=settings.feed_respects_show_in_feed,
    )
    return HTMLResponse(renderer.render_feed(posts))
