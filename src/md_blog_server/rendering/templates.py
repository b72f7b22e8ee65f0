"""
Page Templates

Jinja2 rendering of post detail pages and the feed.

Post bodies are already HTML produced from operator-authored markdown and
are embedded unescaped; every other value goes through autoescaping.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Union
from urllib.parse import quote

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from ..content.models import Post, PostPage

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


class RenderTemplateError(RuntimeError):
    """Raised when a page or the feed cannot be rendered."""


class PageRenderer:
    """
    Renders PostPage and feed views to HTML documents.
    """

    def __init__(
        self,
        site_title: str = "Blog",
        templates_dir: Optional[Union[str, Path]] = None,
        feed_path: str = "/",
        static_path: str = "/static",
    ) -> None:
        self.site_title = site_title
        self.feed_path = feed_path
        self.static_path = static_path
        self._env = Environment(
            loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
            autoescape=select_autoescape(["html"]),
        )
        self._env.filters["publish_date"] = _format_date
        self._env.filters["route_href"] = _route_href

    def _render(self, name: str, **context) -> str:
        try:
            template = self._env.get_template(name)
            return template.render(
                site_title=self.site_title,
                feed_path=self.feed_path,
                static_path=self.static_path,
                **context,
            )
        except (OSError, TemplateError) as exc:
            raise RenderTemplateError(f"Failed to render {name}: {exc}") from exc

    def render_post(self, page: PostPage) -> str:
        return self._render("post.html", page=page, post=page.post)

    def render_feed(self, posts: Sequence[Post]) -> str:
        return self._render("feed.html", posts=posts)


def _format_date(value) -> str:
    return value.strftime("%B %d, %Y")


def _route_href(path: str) -> str:
    # Directory names may contain '#', '?' or spaces
    return quote(path, safe="/")
