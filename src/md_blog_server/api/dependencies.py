from fastapi import Request

from ..config import Settings
from ..content.store import IndexStore
from ..rendering.templates import PageRenderer

# The application factory stores one instance of each on app.state, so a
# test app never shares an index with the default app.

def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_index_store(request: Request) -> IndexStore:
    return request.app.state.index_store

def get_renderer(request: Request) -> PageRenderer:
    return request.app.state.renderer
