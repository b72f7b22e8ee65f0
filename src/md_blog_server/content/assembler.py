"""
Page and feed assembly over a built ContentIndex.

Neighbours are looked up by position when a page is requested; posts never
hold references to each other.
"""

from __future__ import annotations

from typing import List

from .models import ContentIndex, Post, PostPage


class RouteNotFound(LookupError):
    """Raised when no post is indexed under the requested path."""

    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path


def normalize_route(path: str) -> str:
    """Drop a trailing slash so `/blog/a/` and `/blog/a` are one route."""
    if len(path) > 1 and path.endswith("/"):
        return path.rstrip("/") or "/"
    return path


def resolve(index: ContentIndex, path: str) -> PostPage:
    """
    Look up a post and attach its chronological neighbours.

    Raises
    ------
    RouteNotFound
        If `path` is not in the index.
    """
    position = index.position_of(normalize_route(path))
    if position is None:
        raise RouteNotFound(path)

    posts = index.posts
    previous = posts[position - 1].meta if position > 0 else None
    following = posts[position + 1].meta if position + 1 < len(posts) else None

    return PostPage(post=posts[position], previous=previous, next=following)


def build_feed(index: ContentIndex, respect_show_in_feed: bool = False) -> List[Post]:
    """
    Return posts newest first.

    With `respect_show_in_feed`, posts whose metadata sets
    `show_in_feed = false` are left out.
    """
    posts = list(reversed(index.posts))
    if respect_show_in_feed:
        posts = [p for p in posts if p.meta.show_in_feed]
    return posts
