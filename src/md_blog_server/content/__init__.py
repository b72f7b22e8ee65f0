"""
Content Package

Indexing and rendering pipeline: markdown rendering, metadata parsing,
directory indexing, and page/feed assembly over the in-memory index.
"""

from .assembler import RouteNotFound, build_feed, resolve
from .indexer import BodyReadError, ContentIndexer, ContentRootError, build_index, derive_route_path
from .markdown import MarkdownRenderer, render_markdown
from .metadata import MetadataParseError, parse_metadata
from .models import ContentIndex, Post, PostMetadata, PostPage
from .store import IndexNotReadyError, IndexStore

__all__ = [
    "BodyReadError",
    "ContentIndex",
    "ContentIndexer",
    "ContentRootError",
    "IndexNotReadyError",
    "IndexStore",
    "MarkdownRenderer",
    "MetadataParseError",
    "Post",
    "PostMetadata",
    "PostPage",
    "RouteNotFound",
    "build_feed",
    "build_index",
    "derive_route_path",
    "parse_metadata",
    "render_markdown",
    "resolve",
]
