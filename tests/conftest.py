from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import pytest

from md_blog_server.config import Settings
from md_blog_server.content.models import ContentIndex, Post, PostMetadata


def write_post(
    root: Path,
    rel: str,
    title: Optional[str],
    publish: Optional[str],
    body: Optional[str] = "hello",
    extra: str = "",
) -> Path:
    """
    Create a post directory below root. Passing None for title or publish
    leaves that key out; passing None for body leaves out post.md.
    """
    directory = root / rel
    directory.mkdir(parents=True, exist_ok=True)

    lines = []
    if title is not None:
        lines.append(f'title = "{title}"')
    if publish is not None:
        lines.append(f'publish_dt = "{publish}"')
    if extra:
        lines.append(extra)
    (directory / "metadata.toml").write_text("\n".join(lines) + "\n", encoding="utf-8")

    if body is not None:
        (directory / "post.md").write_text(body, encoding="utf-8")
    return directory


def make_post(title: str, day: int, path: Optional[str] = None, show_in_feed: bool = True) -> Post:
    meta = PostMetadata(
        title=title,
        publish_dt=datetime(2023, 1, day, tzinfo=timezone.utc),
        show_in_feed=show_in_feed,
        path_from_root=path or f"/blog/{title.lower()}",
    )
    return Post(meta=meta, body=f"<p>{title}</p>")


@pytest.fixture
def content_root(tmp_path):
    root = tmp_path / "content"
    write_post(root, "2023-01-01", "Alpha post", "2023-01-01 08:00:00+0000", body="Alpha body")
    write_post(root, "2023-06-01", "Beta post", "2023-06-01 08:00:00+0000", body="Beta body")
    return root


@pytest.fixture
def sample_index():
    posts = tuple(make_post(t, d) for t, d in [("First", 1), ("Second", 2), ("Third", 3)])
    return ContentIndex.from_posts(posts)


@pytest.fixture
def app_settings(tmp_path, content_root):
    static = tmp_path / "static"
    static.mkdir()
    (static / "site.css").write_text("body {}", encoding="utf-8")
    return Settings(
        content_dir=str(content_root),
        static_dir=str(static),
        admin_api_key="test-admin-key",
        site_title="Test Blog",
    )
